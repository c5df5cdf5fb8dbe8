"""
fios_stats.models
=================
Value objects passed along the poll pipeline.

Credentials -> Session -> RawPage -> MetricSet (of MetricValue)

All of them are immutable: a Session is either complete or does not exist,
and a MetricSet is never modified once built.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from .config import SESSION_COOKIE, XSRF_COOKIE, XSRF_HEADER


@dataclass(frozen=True)
class Credentials:
    password: str = field(repr=False)


@dataclass(frozen=True)
class Session:
    """
    Authenticated context for the router's REST API.

    ``xsrf_token`` and ``session_id`` come from the ``XSRF-TOKEN`` and
    ``Session`` cookies set by a successful login.
    """

    base_url: str
    xsrf_token: str = field(repr=False)
    session_id: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.xsrf_token or not self.session_id:
            raise ValueError("Session requires both an XSRF token and a session id")

    def headers(self) -> dict[str, str]:
        return {XSRF_HEADER: self.xsrf_token}

    def cookies(self) -> dict[str, str]:
        return {SESSION_COOKIE: self.session_id, XSRF_COOKIE: self.xsrf_token}


@dataclass(frozen=True)
class RawPage:
    page_id: str
    url: str
    content_type: str
    text: str = field(repr=False)
    status_code: int = 200


class MetricKind(enum.Enum):
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    STATUS = "status"


@dataclass(frozen=True)
class MetricValue:
    name: str
    value: int | float | str
    kind: MetricKind
    unit: str | None = None

    def render(self) -> str:
        """Text printed after ``name=`` on standard output."""
        if self.kind is MetricKind.FLOAT:
            return repr(float(self.value))
        return str(self.value)


class MetricSet(Mapping):
    """
    Ordered, read-only mapping of metric name -> MetricValue for one poll.

    Iteration follows insertion order, which the extractor and normaliser
    fix to their field lists rather than to page order.
    """

    __slots__ = ("_metrics",)

    def __init__(self, metrics: Iterable[MetricValue] = ()) -> None:
        ordered: dict[str, MetricValue] = {}
        for metric in metrics:
            if metric.name in ordered:
                raise ValueError(f"Duplicate metric name: {metric.name!r}")
            ordered[metric.name] = metric
        self._metrics = ordered

    def __getitem__(self, name: str) -> MetricValue:
        return self._metrics[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._metrics)

    def __len__(self) -> int:
        return len(self._metrics)

    def __add__(self, other: "MetricSet") -> "MetricSet":
        if not isinstance(other, MetricSet):
            return NotImplemented
        return MetricSet([*self.values(), *other.values()])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetricSet):
            return NotImplemented
        return list(self._metrics.items()) == list(other._metrics.items())

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={m.value!r}" for name, m in self._metrics.items())
        return f"MetricSet({inner})"

    def values_dict(self) -> dict[str, int | float | str]:
        """Plain ``{name: value}`` view, in order."""
        return {name: m.value for name, m in self._metrics.items()}
