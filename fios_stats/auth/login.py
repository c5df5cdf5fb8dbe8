"""Login and logout against the G1000 REST API."""

import requests

from ..config import LOGIN_URL, LOGOUT_URL, REQUEST_TIMEOUT, SESSION_COOKIE, XSRF_COOKIE
from ..errors import AuthNetworkFailure, InvalidCredentials, ProtocolMismatch
from ..logging_setup import log
from ..models import Credentials, Session
from ..network import base_url
from .password import hash_password


class Authenticator:
    """
    Performs the admin UI's login handshake:

      1. GET  /api/login  → JSON carrying ``passwordSalt``
      2. POST /api/login  with ``{"password": sha512(password + salt)}``
      3. The router answers with the ``XSRF-TOKEN`` and ``Session`` cookies.

    The session is not probed with a separate request; the first real fetch
    validates it (see PageFetcher).
    """

    def __init__(self, http: requests.Session, host: str) -> None:
        self.http = http
        self.base = base_url(host)

    def authenticate(self, credentials: Credentials) -> Session:
        if not credentials.password:
            raise InvalidCredentials("An admin password is required")

        # Stale cookies from a previous login would shadow the new ones.
        self.http.cookies.clear()

        info = self._login_info()
        salt = info.get("passwordSalt")
        if not isinstance(salt, str) or not salt:
            raise ProtocolMismatch("Login info carries no passwordSalt")
        log.debug("Got password salt (%d chars)", len(salt))

        try:
            resp = self.http.post(
                self.base + LOGIN_URL,
                json={"password": hash_password(credentials.password, salt)},
                headers={"Content-Type": "application/json;charset=UTF-8"},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise AuthNetworkFailure(f"Login POST failed: {exc}") from exc

        if resp.status_code in (401, 403):
            raise InvalidCredentials(f"Router rejected the password (HTTP {resp.status_code})")
        if not 200 <= resp.status_code < 300:
            raise ProtocolMismatch(f"Unexpected login status HTTP {resp.status_code}")
        self._check_login_body(resp)

        token = resp.cookies.get(XSRF_COOKIE)
        session_id = resp.cookies.get(SESSION_COOKIE)
        if not token or not session_id:
            raise ProtocolMismatch(
                f"Login succeeded but did not set both {XSRF_COOKIE} and {SESSION_COOKIE} "
                f"(got: {sorted(resp.cookies.keys())})"
            )

        log.info("Login successful (HTTP %s) at %s", resp.status_code, self.base)
        return Session(base_url=self.base, xsrf_token=token, session_id=session_id)

    def logout(self, session: Session) -> None:
        """Free the router's admin slot.  Failures are logged, never raised."""
        try:
            resp = self.http.get(
                session.base_url + LOGOUT_URL,
                headers=session.headers(),
                cookies=session.cookies(),
                timeout=REQUEST_TIMEOUT,
            )
            log.debug("Logout answered HTTP %s", resp.status_code)
        except requests.RequestException as exc:
            log.debug("Logout failed (non-fatal): %s", exc)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _login_info(self) -> dict:
        try:
            resp = self.http.get(self.base + LOGIN_URL, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise AuthNetworkFailure(f"Could not reach {self.base}: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise ProtocolMismatch(f"Login info request answered HTTP {resp.status_code}")
        try:
            info = resp.json()
        except ValueError as exc:
            raise ProtocolMismatch("Login info is not JSON") from exc
        if not isinstance(info, dict):
            raise ProtocolMismatch("Login info is not a JSON object")

        # denyState / denyTimeout are set after too many failed attempts.
        if info.get("denyState"):
            raise InvalidCredentials(
                f"Router is refusing logins for {info.get('denyTimeout', '?')} more second(s)"
            )
        return info

    @staticmethod
    def _check_login_body(resp: requests.Response) -> None:
        try:
            body = resp.json()
        except ValueError:
            return
        if isinstance(body, dict) and body.get("error"):
            raise InvalidCredentials(f"Router rejected the password (error {body['error']})")
