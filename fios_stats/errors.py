"""
fios_stats.errors
=================
Exception hierarchy for the stats pipeline.

    RouterStatsError
    ├── NetworkFailure                 transport-level, retryable by the caller
    ├── AuthError
    │   ├── InvalidCredentials         router rejected the password
    │   ├── ProtocolMismatch           unexpected login response shape
    │   └── AuthNetworkFailure         (also a NetworkFailure)
    ├── FetchError
    │   ├── SessionExpired             still expired after one re-login
    │   ├── UnexpectedResponse         non-2xx unrelated to auth
    │   └── FetchNetworkFailure        (also a NetworkFailure)
    ├── ExtractError                   page unparseable as a whole
    └── SinkError                      metrics could not be emitted

Per-field extraction misses are not errors; they only shrink the MetricSet.
"""


class RouterStatsError(Exception):
    """Base class for every error raised by fios_stats."""


class NetworkFailure(RouterStatsError):
    """Transport-level failure talking to the router."""


class AuthError(RouterStatsError):
    pass


class InvalidCredentials(AuthError):
    pass


class ProtocolMismatch(AuthError):
    """The login exchange did not look like the G1000 firmware's."""


class AuthNetworkFailure(AuthError, NetworkFailure):
    pass


class FetchError(RouterStatsError):
    pass


class SessionExpired(FetchError):
    pass


class UnexpectedResponse(FetchError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchNetworkFailure(FetchError, NetworkFailure):
    pass


class ExtractError(RouterStatsError):
    pass


class SinkError(RouterStatsError):
    pass
