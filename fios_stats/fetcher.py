"""
fios_stats.fetcher
==================
Authenticated retrieval of the router's stats pages.

A fetch that comes back with a session-expiry signal triggers exactly one
re-login followed by one retry.  If the retry is still rejected the page
fails with SessionExpired; there is no retry loop.
"""

from __future__ import annotations

import requests

from .auth import Authenticator, is_session_expired
from .config import PAGES, REQUEST_TIMEOUT
from .errors import FetchNetworkFailure, SessionExpired, UnexpectedResponse
from .logging_setup import log
from .models import Credentials, RawPage, Session


class PageFetcher:
    """
    Issues fresh, authenticated GETs for stats pages.

    ``session`` holds the most recent valid Session: the one passed to the
    last fetch, or the replacement obtained by a re-login.  Pages are never
    cached.
    """

    def __init__(
        self,
        http: requests.Session,
        authenticator: Authenticator,
        credentials: Credentials,
    ) -> None:
        self.http = http
        self.authenticator = authenticator
        self.credentials = credentials
        self.session: Session | None = None
        self.relogin_count = 0

    def fetch(self, session: Session, page_id: str) -> RawPage:
        path, page_format = PAGES[page_id]
        self.session = session
        url = session.base_url + path

        resp = self._get(session, url)
        if is_session_expired(resp, page_format):
            log.warning("Session expired fetching %s – attempting re-login", page_id)
            self.relogin_count += 1
            session = self.authenticator.authenticate(self.credentials)
            self.session = session
            log.info("Re-login successful, retrying %s", page_id)

            resp = self._get(session, url)
            if is_session_expired(resp, page_format):
                raise SessionExpired(f"Session still rejected for {page_id} after re-login")

        if not 200 <= resp.status_code < 300:
            raise UnexpectedResponse(
                f"HTTP {resp.status_code} for {page_id} ({url})",
                status_code=resp.status_code,
            )

        content_type = resp.headers.get("Content-Type", "")
        log.debug(
            "  ← HTTP %s  CT: %s  %d chars", resp.status_code, content_type, len(resp.text)
        )
        return RawPage(
            page_id=page_id,
            url=url,
            content_type=content_type,
            text=resp.text,
            status_code=resp.status_code,
        )

    def _get(self, session: Session, url: str) -> requests.Response:
        log.debug("GET %s", url)
        try:
            return self.http.get(
                url,
                headers=session.headers(),
                cookies=session.cookies(),
                timeout=REQUEST_TIMEOUT,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            raise FetchNetworkFailure(f"Request failed for {url}: {exc}") from exc
