"""
fios_stats.sink
===============
Where a finished MetricSet goes.

The pipeline only knows the ``Sink`` protocol: ``emit(metric_set, timestamp)``
returns an Ack or raises SinkError.  Sinks never retry; a failed emission is
logged by the caller and the next poll carries on.

* StdoutSink – ``name=value`` lines, one per metric (no sink configured).
* InfluxSink – one line-protocol record per poll, POSTed to a write URL:

      router,host=myfiosgateway.com net_rx=8000i,net_status="up" 1700000000000000000
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol, TextIO

import requests

from .config import MEASUREMENT, REQUEST_TIMEOUT
from .errors import SinkError
from .logging_setup import log
from .models import MetricKind, MetricSet, MetricValue


@dataclass(frozen=True)
class Ack:
    records: int
    status_code: int | None = None


class Sink(Protocol):
    def emit(self, metric_set: MetricSet, timestamp: datetime) -> Ack:
        ...


class StdoutSink:
    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def emit(self, metric_set: MetricSet, timestamp: datetime) -> Ack:
        stream = self.stream or sys.stdout
        for name, metric in metric_set.items():
            print(f"{name}={metric.render()}", file=stream)
        return Ack(records=len(metric_set))


# ---------------------------------------------------------------------------
# Line protocol
# ---------------------------------------------------------------------------

def _escape_key(text: str) -> str:
    """Escape a tag key/value or field key."""
    return (
        text.replace("\\", "\\\\")
        .replace(",", "\\,")
        .replace("=", "\\=")
        .replace(" ", "\\ ")
    )


def _escape_measurement(text: str) -> str:
    """Measurements escape only commas and spaces."""
    return text.replace(",", "\\,").replace(" ", "\\ ")


def _field_value(metric: MetricValue) -> str:
    if metric.kind is MetricKind.INTEGER:
        return f"{int(metric.value)}i"
    if metric.kind is MetricKind.FLOAT:
        return repr(float(metric.value))
    escaped = str(metric.value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def to_nanoseconds(timestamp: datetime) -> int:
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    delta = timestamp - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86_400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1_000


def to_line_protocol(
    metric_set: MetricSet,
    timestamp: datetime,
    measurement: str = MEASUREMENT,
    tags: dict[str, str] | None = None,
) -> str:
    """One line-protocol record holding every metric of *metric_set* as a field."""
    if not metric_set:
        raise SinkError("Refusing to write a record without fields")
    head = _escape_measurement(measurement)
    for key, value in sorted((tags or {}).items()):
        head += f",{_escape_key(key)}={_escape_key(value)}"
    fields = ",".join(
        f"{_escape_key(name)}={_field_value(metric)}" for name, metric in metric_set.items()
    )
    return f"{head} {fields} {to_nanoseconds(timestamp)}"


class InfluxSink:
    """POSTs line protocol to an InfluxDB write URL (database in the query)."""

    def __init__(
        self,
        uri: str,
        http: requests.Session,
        host_tag: str,
        measurement: str = MEASUREMENT,
    ) -> None:
        self.uri = uri
        self.http = http
        self.measurement = measurement
        self.tags = {"host": host_tag}

    def emit(self, metric_set: MetricSet, timestamp: datetime) -> Ack:
        body = to_line_protocol(metric_set, timestamp, self.measurement, self.tags) + "\n"
        log.debug("Influx data:\n%s", body)
        try:
            resp = self.http.post(
                self.uri,
                data=body.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise SinkError(f"Could not reach {self.uri}: {exc}") from exc

        if resp.status_code not in (200, 204):
            raise SinkError(f"Unexpected status from InfluxDB: HTTP {resp.status_code}")
        log.info("Wrote %d field(s) to %s", len(metric_set), self.uri)
        return Ack(records=1, status_code=resp.status_code)
