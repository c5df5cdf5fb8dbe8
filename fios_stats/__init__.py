"""
fios_stats
==========
Python package for reading network statistics from a Verizon Fios Quantum
G1000 router's admin API and forwarding them to InfluxDB.

Package structure
-----------------
fios_stats/
├── __init__.py       – package init and public API
├── config.py         – configuration constants and page registry
├── errors.py         – exception hierarchy
├── models.py         – Credentials, Session, RawPage, MetricValue, MetricSet
├── logging_setup.py  – colorlog console logging
├── network/          – requests.Session factory
├── auth/             – login handshake, logout, session-expiry detection
├── fetcher.py        – PageFetcher (one re-login on expiry)
├── extract/          – markup / JSON anchor scanning and type coercion
├── normalize.py      – canonical metric schema
├── sink.py           – stdout and InfluxDB line-protocol sinks
├── pipeline.py       – poll() and run_once()
└── cli.py            – argparse CLI (``python -m fios_stats``)

Quick start
-----------
    from fios_stats import Credentials, StdoutSink, build_session, run_once

    run_once(
        build_session(),
        Credentials(password="your_password"),
        host="myfiosgateway.com",
        sink=StdoutSink(),
    )
"""

from .auth import Authenticator, is_session_expired
from .errors import (
    AuthError,
    ExtractError,
    FetchError,
    RouterStatsError,
    SinkError,
)
from .extract import extract
from .fetcher import PageFetcher
from .models import Credentials, MetricKind, MetricSet, MetricValue, RawPage, Session
from .network import build_session
from .normalize import normalize
from .pipeline import poll, run_once
from .sink import InfluxSink, StdoutSink

__all__ = [
    "Authenticator",
    "is_session_expired",
    "PageFetcher",
    "extract",
    "normalize",
    "poll",
    "run_once",
    "build_session",
    "Credentials",
    "Session",
    "RawPage",
    "MetricKind",
    "MetricValue",
    "MetricSet",
    "StdoutSink",
    "InfluxSink",
    "RouterStatsError",
    "AuthError",
    "FetchError",
    "ExtractError",
    "SinkError",
]
