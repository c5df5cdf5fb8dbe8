"""
Session validation.

Provides functionality to detect session expiry in router responses.
"""

import json
import urllib.parse

import requests
from bs4 import BeautifulSoup

from ..config import LOGIN_PAGE_PATHS

_HTML_TYPES = ("text/html", "application/xhtml+xml")


def _content_type(resp: requests.Response) -> str:
    return resp.headers.get("Content-Type", "").split(";")[0].strip().lower()


def is_login_form(text: str) -> bool:
    """True when *text* is an HTML document carrying a password input."""
    if "<" not in text:
        return False
    soup = BeautifulSoup(text, "lxml")
    return soup.find("input", attrs={"type": "password"}) is not None


def is_session_expired(resp: requests.Response, page_format: str = "json") -> bool:
    """
    Return True when *resp* signals that the router no longer accepts the
    session.  The firmware is inconsistent about how it says so, so any of
    these counts:

      * HTTP 401.
      * The request was redirected away from the API to a login-page path.
      * An HTML login form was served in place of the page.
      * The expected document container is missing: a ``json`` page whose
        successful response body does not parse as JSON.

    Non-2xx answers other than 401 are not expiry; the fetcher reports them
    as unexpected responses.

    Args:
        resp: HTTP response object to check
        page_format: Format the requested page is expected in ('json' or 'html')

    Returns:
        True if the session has expired, False otherwise
    """
    if resp.status_code == 401:
        return True
    if not 200 <= resp.status_code < 300:
        return False

    final_path = urllib.parse.urlparse(resp.url).path.lower()
    if final_path in LOGIN_PAGE_PATHS:
        return True

    text = resp.text or ""
    ct = _content_type(resp)
    if (not ct or ct in _HTML_TYPES) and is_login_form(text):
        return True

    if page_format == "json":
        try:
            json.loads(text)
        except ValueError:
            return True
    return False
