"""Configuration constants for the Fios Quantum G1000 stats retriever."""

import os

DEFAULT_HOST = os.environ.get("ROUTER_HOST", "myfiosgateway.com")
# The password can also be supplied via the ROUTER_PASSWORD env var
DEFAULT_PASSWORD = os.environ.get("ROUTER_PASSWORD", "")
DEFAULT_INFLUXDB_URI = os.environ.get("INFLUXDB_URI", "")

API_PREFIX = "/api/"
LOGIN_URL  = API_PREFIX + "login"
LOGOUT_URL = API_PREFIX + "logout"

# Cookies set by a successful POST to LOGIN_URL
XSRF_COOKIE    = "XSRF-TOKEN"
SESSION_COOKIE = "Session"
XSRF_HEADER    = "X-XSRF-TOKEN"

REQUEST_TIMEOUT   = 15      # seconds per HTTP request
RETRY_TOTAL       = 3       # transport-level retries for 5xx answers
RETRY_BACKOFF     = 0.5
RETRY_STATUSES    = (500, 502, 503, 504)

# Paths the router redirects to when the session is gone
LOGIN_PAGE_PATHS: frozenset[str] = frozenset(["/", "/login", "/index.html"])

MEASUREMENT = "router"
DEFAULT_INTERVAL = 0        # 0 = single poll

# Stats pages known for the G1000 firmware: page id -> (api path, format).
# Field lists for each page live in fios_stats.extract.fields.
PAGES: dict[str, tuple[str, str]] = {
    "network": (API_PREFIX + "network/1",       "json"),
    "system":  (API_PREFIX + "settings/system", "json"),
}
DEFAULT_PAGES = ("network",)
