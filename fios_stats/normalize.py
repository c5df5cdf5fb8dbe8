"""
fios_stats.normalize
====================
Maps raw extractor output onto the canonical, versioned metric schema.

normalize() is pure and total: raw fields without a schema entry are
dropped, values that cannot be converted to the schema's type are dropped,
and nothing is ever raised.  A new firmware field only appears in the output
once it has an explicit SchemaEntry here.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass

from .extract.coerce import to_float
from .models import MetricKind, MetricSet, MetricValue

SCHEMA_VERSION = 1

# Decimal multipliers of the bit-rate suffixes the router prints
_RATE_RE = re.compile(r"([-+]?\d[\d,]*(?:\.\d+)?)\s*([kmg]?)(?:bps|bit/s|b/s)\b", re.I)
_RATE_SCALE = {"": 1, "k": 1_000, "m": 1_000_000, "g": 1_000_000_000}


@dataclass(frozen=True)
class SchemaEntry:
    source: str         # raw metric name from the extractor
    name: str           # canonical output name
    kind: MetricKind
    unit: str | None = None
    scale: int | float = 1


INTEGER = MetricKind.INTEGER
FLOAT   = MetricKind.FLOAT
TEXT    = MetricKind.TEXT
STATUS  = MetricKind.STATUS

SCHEMA: tuple[SchemaEntry, ...] = (
    SchemaEntry("rx_bytes",         "net_rx",           INTEGER, "bit", scale=8),
    SchemaEntry("tx_bytes",         "net_tx",           INTEGER, "bit", scale=8),
    SchemaEntry("rx_errors",        "net_rx_errors",    INTEGER),
    SchemaEntry("rx_dropped",       "net_rx_dropped",   INTEGER),
    SchemaEntry("tx_errors",        "net_tx_errors",    INTEGER),
    SchemaEntry("tx_dropped",       "net_tx_dropped",   INTEGER),
    SchemaEntry("status",           "net_status",       STATUS),
    SchemaEntry("name",             "net_name",         TEXT),
    SchemaEntry("nat_entries_used", "nat_entries_used", INTEGER),
    SchemaEntry("uptime",           "uptime",           INTEGER, "s"),
    SchemaEntry("firmware_version", "firmware_version", TEXT),
)


def parse_rate(raw: str) -> int | None:
    """``'12.5 Kbps'`` → ``12500`` bits per second."""
    m = _RATE_RE.search(raw)
    if not m:
        return None
    value = float(m.group(1).replace(",", "")) * _RATE_SCALE[m.group(2).lower()]
    if not math.isfinite(value):
        return None
    return round(value)


def _convert(metric: MetricValue, entry: SchemaEntry) -> int | float | str | None:
    value = metric.value

    if entry.kind in (INTEGER, FLOAT):
        if isinstance(value, str):
            if entry.unit == "bps":
                rate = parse_rate(value)
                if rate is not None:
                    return rate * entry.scale if entry.kind is FLOAT else round(rate * entry.scale)
            value = to_float(value)
            if value is None:
                return None
        value = value * entry.scale
        if isinstance(value, float) and not math.isfinite(value):
            return None
        if entry.kind is FLOAT:
            return float(value)
        if isinstance(value, float) and not value.is_integer():
            return round(value)
        return int(value)

    text = str(value).strip()
    if not text:
        return None
    return text.lower() if entry.kind is STATUS else text


def normalize(metric_set: MetricSet, schema: Sequence[SchemaEntry] | None = None) -> MetricSet:
    """Project *metric_set* onto *schema* (default: SCHEMA), in schema order."""
    if schema is None:
        schema = SCHEMA
    out: list[MetricValue] = []
    seen: set[str] = set()
    for entry in schema:
        metric = metric_set.get(entry.source)
        if metric is None or entry.name in seen:
            continue
        value = _convert(metric, entry)
        if value is None:
            continue
        seen.add(entry.name)
        out.append(MetricValue(entry.name, value, entry.kind, entry.unit or metric.unit))
    return MetricSet(out)
