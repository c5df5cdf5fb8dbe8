"""
fios_stats.extract.core
=======================
Turns one RawPage into a MetricSet.

Public function
---------------
    extract(raw_page, fields=None) -> MetricSet
"""

from __future__ import annotations

from collections.abc import Sequence

from ..config import PAGES
from ..errors import ExtractError
from ..logging_setup import log
from ..models import MetricSet, MetricValue, RawPage
from .anchors import html_anchors, json_anchors, label_key
from .coerce import coerce
from .fields import PAGE_FIELDS, FieldSpec


def detect_format(raw_page: RawPage) -> str:
    """
    Return ``'json'`` or ``'html'``.  The body is sniffed first because the
    router's Content-Type headers are not reliable; the header only decides
    when the body gives no hint.
    """
    head = raw_page.text.lstrip()[:1]
    if head in ("{", "["):
        return "json"
    if head == "<":
        return "html"

    ct = raw_page.content_type.split(";")[0].strip().lower()
    if ct.endswith("json"):
        return "json"
    if ct in ("text/html", "application/xhtml+xml"):
        return "html"
    raise ExtractError(f"Page {raw_page.page_id!r} is neither HTML nor JSON ({ct or 'no type'})")


def extract(raw_page: RawPage, fields: Sequence[FieldSpec] | None = None) -> MetricSet:
    """
    Pull the expected fields out of *raw_page*.

    Every field is looked up independently: a missing anchor, an empty value
    or a value that does not parse only drops that metric.  ExtractError is
    raised only when the page as a whole is unusable – empty, unparseable,
    of the wrong document type, without a single labelled region, or
    without any of the expected anchors.

    Output order follows *fields*, not the page.
    """
    if not raw_page.text or not raw_page.text.strip():
        raise ExtractError(f"Page {raw_page.page_id!r} is empty")

    if fields is None:
        if raw_page.page_id not in PAGE_FIELDS:
            raise ExtractError(f"No field list for page {raw_page.page_id!r}")
        fields = PAGE_FIELDS[raw_page.page_id]

    fmt = detect_format(raw_page)
    expected = PAGES.get(raw_page.page_id, (None, None))[1]
    if expected and fmt != expected:
        raise ExtractError(
            f"Page {raw_page.page_id!r} should be {expected} but looks like {fmt}"
        )

    if fmt == "json":
        anchors = json_anchors(raw_page.text)
        key_of = str
    else:
        anchors = html_anchors(raw_page.text)
        key_of = label_key
    if not anchors:
        raise ExtractError(f"Page {raw_page.page_id!r} has no recognisable fields")

    if not any(key_of(spec.anchor) in anchors for spec in fields):
        raise ExtractError(
            f"Page {raw_page.page_id!r} has none of the expected fields; wrong document?"
        )

    metrics: list[MetricValue] = []
    for spec in fields:
        raw = anchors.get(key_of(spec.anchor))
        if raw is None:
            log.debug("[%s] %s: anchor %r not found", raw_page.page_id, spec.name, spec.anchor)
            continue
        value = coerce(raw, spec.kind)
        if value is None:
            log.debug(
                "[%s] %s: %r is not a valid %s",
                raw_page.page_id, spec.name, raw, spec.kind.value,
            )
            continue
        metrics.append(MetricValue(spec.name, value, spec.kind, spec.unit))

    log.debug(
        "[%s] extracted %d of %d field(s)", raw_page.page_id, len(metrics), len(fields)
    )
    return MetricSet(metrics)
