"""
fios_stats.extract.anchors
==========================
Reduce a stats document to an ordered ``label -> raw text`` mapping.

The router's pages have no formal grammar, so nothing here relies on fixed
offsets.  Each scanner walks a parsed tree and records labelled regions:

* HTML: table rows (first cell = label, second cell = value), ``dt``/``dd``
  pairs and leaf elements reading ``"Label: value"``.
* JSON: every scalar, keyed by its dotted path (``bandwidth.minutesRx.0``).

The first occurrence of a label wins; later duplicates are ignored.
"""

from __future__ import annotations

import json
import re

from bs4 import BeautifulSoup, Tag

from ..errors import ExtractError

_BS4_PARSER = "lxml"

_WS_RE = re.compile(r"\s+")
_COLON_PAIR_RE = re.compile(r"^([^:]{1,60}):\s*(.+)$", re.S)
_LEAF_TAGS = ("li", "p", "span", "div", "td", "label")


def label_key(label: str) -> str:
    """Canonical form of an HTML label: collapsed whitespace, no trailing
    colon, case-folded."""
    return _WS_RE.sub(" ", label).strip().rstrip(":").strip().casefold()


def _text(el: Tag) -> str:
    return _WS_RE.sub(" ", el.get_text(" ", strip=True)).strip()


def html_anchors(text: str) -> dict[str, str]:
    try:
        soup = BeautifulSoup(text, _BS4_PARSER)
    except Exception as exc:
        raise ExtractError(f"HTML could not be parsed: {exc}") from exc

    found: dict[str, str] = {}

    def _add(label: str, value: str) -> None:
        key = label_key(label)
        if key and key not in found:
            found[key] = value

    for el in soup.find_all(["tr", "dt", *_LEAF_TAGS]):
        if el.name == "tr":
            cells = el.find_all(["td", "th"], recursive=False)
            if len(cells) >= 2:
                _add(_text(cells[0]), _text(cells[1]))
        elif el.name == "dt":
            dd = el.find_next_sibling("dd")
            if dd is not None:
                _add(_text(el), _text(dd))
        elif el.find(True) is None:
            m = _COLON_PAIR_RE.match(_text(el))
            if m:
                _add(m.group(1), m.group(2).strip())
    return found


def _flatten(obj, prefix: str, found: dict[str, str]) -> None:
    if isinstance(obj, dict):
        for key, value in obj.items():
            _flatten(value, f"{prefix}.{key}" if prefix else str(key), found)
    elif isinstance(obj, list):
        for idx, value in enumerate(obj):
            _flatten(value, f"{prefix}.{idx}" if prefix else str(idx), found)
    elif prefix and prefix not in found:
        if obj is None:
            found[prefix] = ""
        elif isinstance(obj, bool):
            found[prefix] = "true" if obj else "false"
        else:
            found[prefix] = str(obj)


def json_anchors(text: str) -> dict[str, str]:
    try:
        obj = json.loads(text)
    except ValueError as exc:
        raise ExtractError(f"JSON could not be parsed: {exc}") from exc
    found: dict[str, str] = {}
    _flatten(obj, "", found)
    return found
