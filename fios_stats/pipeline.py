"""
fios_stats.pipeline
===================
One poll cycle: authenticate → fetch → extract → normalize → emit.

Everything runs sequentially on one Session that belongs to this poll only.
run_once() is the single place that turns failures into log lines and exit
codes; the layers below only raise.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

import requests

from .auth import Authenticator
from .config import DEFAULT_PAGES
from .errors import AuthError, ExtractError, FetchError, SinkError
from .extract import extract
from .fetcher import PageFetcher
from .logging_setup import log
from .models import Credentials, MetricSet
from .normalize import normalize
from .sink import Sink

EXIT_OK = 0
EXIT_FAILURE = 1


def poll(
    http: requests.Session,
    credentials: Credentials,
    host: str,
    page_ids: Sequence[str] = DEFAULT_PAGES,
) -> MetricSet:
    """
    Fetch and parse every page in *page_ids* and return their normalized
    metrics merged in page order; repeated page ids are read once.  The
    session is logged out afterwards, also when a page fails.
    """
    authenticator = Authenticator(http, host)
    session = authenticator.authenticate(credentials)
    fetcher = PageFetcher(http, authenticator, credentials)

    result = MetricSet()
    try:
        for page_id in dict.fromkeys(page_ids):
            raw_page = fetcher.fetch(session, page_id)
            session = fetcher.session or session
            metrics = normalize(extract(raw_page))
            log.debug("[%s] %d metric(s) after normalization", page_id, len(metrics))
            result = result + metrics
    finally:
        # A re-login inside a failed fetch leaves its session only on the fetcher
        authenticator.logout(fetcher.session or session)
    return result


def run_once(
    http: requests.Session,
    credentials: Credentials,
    host: str,
    sink: Sink,
    page_ids: Sequence[str] = DEFAULT_PAGES,
) -> int:
    """Run one poll and emit its result; returns the process exit code."""
    try:
        metrics = poll(http, credentials, host, page_ids)
    except AuthError as exc:
        log.error("Authentication failed: %s", exc)
        return EXIT_FAILURE
    except FetchError as exc:
        log.error("Fetching stats failed: %s", exc)
        return EXIT_FAILURE
    except ExtractError as exc:
        log.error("Stats page could not be parsed: %s", exc)
        return EXIT_FAILURE

    if not metrics:
        log.warning("Poll produced no metrics")

    try:
        sink.emit(metrics, datetime.now(timezone.utc))
    except SinkError as exc:
        log.warning("Could not emit metrics (poll still counted as successful): %s", exc)
    return EXIT_OK
