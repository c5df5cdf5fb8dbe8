"""Expected fields of each G1000 stats page, in output order."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import MetricKind


@dataclass(frozen=True)
class FieldSpec:
    """One expected metric: where to find it and how to type it."""

    anchor: str         # HTML label or dotted JSON path
    name: str           # raw metric name emitted by the extractor
    kind: MetricKind
    unit: str | None = None


INTEGER = MetricKind.INTEGER
FLOAT   = MetricKind.FLOAT
TEXT    = MetricKind.TEXT
STATUS  = MetricKind.STATUS

# /api/network/1 – byte counters are for the most recent minute
NETWORK_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("bandwidth.minutesRx.0", "rx_bytes",   INTEGER, "B"),
    FieldSpec("bandwidth.minutesTx.0", "tx_bytes",   INTEGER, "B"),
    FieldSpec("rxErrors",              "rx_errors",  INTEGER),
    FieldSpec("rxDropped",             "rx_dropped", INTEGER),
    FieldSpec("txErrors",              "tx_errors",  INTEGER),
    FieldSpec("txDropped",             "tx_dropped", INTEGER),
    FieldSpec("status",                "status",     STATUS),
    FieldSpec("name",                  "name",       TEXT),
)

# /api/settings/system
SYSTEM_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("natEntriesUsed",  "nat_entries_used", INTEGER),
    FieldSpec("upTime",          "uptime",           INTEGER, "s"),
    FieldSpec("firmwareVersion", "firmware_version", TEXT),
)

PAGE_FIELDS: dict[str, tuple[FieldSpec, ...]] = {
    "network": NETWORK_FIELDS,
    "system":  SYSTEM_FIELDS,
}
