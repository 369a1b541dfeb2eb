"""
auth/client.py -- HTTP client for the external auth service (/api/auth/*).

The auth service is cookie-based: every call goes through one requests.Session
so cookies set by the service (on login) are sent back on later calls, and
cookies handed in by the caller (the browser's, in the web layer) are included
on the first one.

Error contract:
  me()     -- raises requests.RequestException on transport failure or a
              non-OK status, ValueError on an unparsable body.
  login()  -- never raises on a non-OK status; returns LoginOutcome(ok=False)
              so the caller can show the server's message. Transport failures
              and an unparsable OK body still raise.
  logout() -- raises on transport failure only; the body is ignored.

Layer rule: no imports from api/ or web/. core/ is allowed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

import requests

from auth.models import Credentials, LoginOutcome, SessionStatus
from core.config import Settings

logger = logging.getLogger("cynportal.auth")

ME_PATH = "/api/auth/me"
LOGIN_PATH = "/api/auth/login"
LOGOUT_PATH = "/api/auth/logout"


class AuthServiceClient:
    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
        cookies: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        # Cookies set by the last login response only; the caller's own
        # cookies in the session jar are not included.
        self._issued_cookies: list[tuple[str, str]] = []
        # The service lives at a fixed address; a long redirect chain means
        # something is misconfigured.
        self.session.max_redirects = 3
        if cookies:
            self.session.cookies.update(dict(cookies))

    @classmethod
    def from_settings(cls, settings: Settings, cookies: Optional[Mapping[str, str]] = None) -> "AuthServiceClient":
        return cls(settings.auth_service_url, timeout=settings.auth_timeout_seconds, cookies=cookies)

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def me(self) -> SessionStatus:
        """Ask the service whether the current cookies carry a valid session."""
        resp = self.session.get(self._url(ME_PATH), timeout=self.timeout)
        resp.raise_for_status()
        return SessionStatus.from_payload(resp.json())

    def login(self, credentials: Credentials) -> LoginOutcome:
        resp = self.session.post(
            self._url(LOGIN_PATH),
            json=credentials.to_payload(),
            timeout=self.timeout,
        )
        self._issued_cookies = [(c.name, c.value) for c in resp.cookies if c.value is not None]
        if not resp.ok:
            try:
                body = resp.json()
            except ValueError:
                body = None
            logger.info("Login rejected by auth service (HTTP %d)", resp.status_code)
            return LoginOutcome(
                ok=False,
                status_code=resp.status_code,
                payload=body if isinstance(body, dict) else None,
            )
        body = resp.json()
        return LoginOutcome(ok=True, status_code=resp.status_code, payload=body if isinstance(body, dict) else {})

    def logout(self) -> None:
        self.session.post(self._url(LOGOUT_PATH), timeout=self.timeout)

    def issued_cookie_items(self) -> list[tuple[str, str]]:
        """Cookies the auth service set on the last login() response."""
        return list(self._issued_cookies)

    def close(self) -> None:
        self.session.close()
