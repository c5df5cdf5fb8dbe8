"""Type coercion of raw anchor text into metric values."""

import math
import re

from ..models import MetricKind

_NUMBER_RE = re.compile(r"[-+]?\d[\d,]*(?:\.\d+)?(?:[eE][-+]?\d+)?")


def _number_text(raw: str) -> str | None:
    m = _NUMBER_RE.search(raw)
    if not m:
        return None
    return m.group(0).replace(",", "")


def to_int(raw: str) -> int | None:
    """First number in *raw* as an int; None when absent or not integral."""
    num = _number_text(raw)
    if num is None:
        return None
    try:
        return int(num)
    except ValueError:
        value = float(num)
        return int(value) if value.is_integer() else None


def to_float(raw: str) -> float | None:
    num = _number_text(raw)
    if num is None:
        return None
    value = float(num)
    return value if math.isfinite(value) else None


def coerce(raw: str, kind: MetricKind) -> int | float | str | None:
    """
    Convert *raw* for a field of *kind*.  Returns None when the value is
    empty or does not parse, which the extractor treats as a missing field.
    """
    raw = raw.strip()
    if not raw:
        return None
    if kind is MetricKind.INTEGER:
        return to_int(raw)
    if kind is MetricKind.FLOAT:
        return to_float(raw)
    return raw
