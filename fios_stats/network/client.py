"""
HTTP client configuration for router communication.

Provides session setup with retry logic and keep-alive configuration.
"""

import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import RETRY_BACKOFF, RETRY_STATUSES, RETRY_TOTAL


def build_session(verify_ssl: bool = False) -> requests.Session:
    """
    Return a requests.Session with retry logic and keep-alive pre-configured.

    The G1000 serves its admin UI with a certificate from a private CA that
    differs between units, so verification is off unless asked for.

    Args:
        verify_ssl: Whether to verify SSL certificates

    Returns:
        Configured requests.Session instance
    """
    session = requests.Session()
    retry = Retry(
        total=RETRY_TOTAL,
        backoff_factor=RETRY_BACKOFF,
        status_forcelist=list(RETRY_STATUSES),
        allowed_methods=["GET"],
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    if not verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
    # Mimic a real browser so the router does not reject requests based on
    # User-Agent.
    session.headers.update({
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        "Connection": "keep-alive",
    })
    return session


def base_url(host: str) -> str:
    """
    Build the base URL for the router.

    A host given with an explicit scheme is kept as is.

    Args:
        host: Router hostname or IP address

    Returns:
        Base URL string (e.g., 'https://myfiosgateway.com')
    """
    if host.startswith(("http://", "https://")):
        return host.rstrip("/")
    return f"https://{host}"
