"""Authentication submodule – login, logout, password hashing, expiry detection."""

from fios_stats.auth.login import Authenticator
from fios_stats.auth.password import hash_password
from fios_stats.auth.session import is_login_form, is_session_expired

__all__ = [
    "Authenticator",
    "hash_password",
    "is_login_form",
    "is_session_expired",
]
