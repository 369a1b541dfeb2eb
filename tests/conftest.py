"""
tests/conftest.py -- Shared test fixtures for the CYN portal.

This module provides:
  - make_response: builds a real requests.Response with a canned status and body
  - http_session: MagicMock standing in for requests.Session
  - auth_service: MagicMock AuthServiceClient injected into the web routes
  - web_client: TestClient with follow_redirects=False for web route tests
  - login_rate_limit: enables the shared limiter with empty counters

The auth service is external, so no test talks to a network: unit tests
mock the requests.Session under AuthServiceClient, route tests replace the
whole client through FastAPI's dependency_overrides.

The DEBUG env var must be set before any core/api/web import so get_settings()
auto-generates SECRET_KEY in dev mode rather than raising ValueError.
"""

from __future__ import annotations

import json
import os
from collections.abc import Generator
from typing import Any, Optional
from unittest.mock import MagicMock

# CRITICAL: Set DEBUG before any core import so get_settings() can
# auto-generate SECRET_KEY in dev mode instead of raising ValueError.
os.environ.setdefault("DEBUG", "true")

import pytest
import requests
from fastapi.testclient import TestClient

from api.limiter import limiter
from asgi import app
from auth.client import AuthServiceClient
from core.config import get_settings
from web.routes import get_auth_client

# Off by default so repeated logins across tests do not trip it; the
# login_rate_limit fixture turns it on for the tests that cover it.
limiter.enabled = False


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


def _make_response(status_code: int = 200, body: Any = None, raw: Optional[bytes] = None) -> requests.Response:
    """Build a requests.Response without a network round trip.

    body is JSON-encoded; raw is used verbatim (for unparsable bodies).
    """
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = "OK" if status_code < 400 else "Error"
    resp.url = "http://auth.test/"
    if raw is not None:
        resp._content = raw
    elif body is not None:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = b""
    return resp


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def http_session() -> MagicMock:
    """A stand-in requests.Session; set .get / .post return values per test."""
    session = MagicMock(spec=requests.Session)
    session.cookies = requests.cookies.RequestsCookieJar()
    return session


@pytest.fixture
def client(http_session: MagicMock) -> AuthServiceClient:
    return AuthServiceClient("http://auth.test", session=http_session, timeout=5)


# ---------------------------------------------------------------------------
# Web fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def auth_service() -> MagicMock:
    """AuthServiceClient double for route tests. Defaults to an unreachable service."""
    service = MagicMock(spec=AuthServiceClient)
    service.me.side_effect = requests.ConnectionError("auth service unreachable")
    service.logout.side_effect = requests.ConnectionError("auth service unreachable")
    service.issued_cookie_items.return_value = []
    return service


@pytest.fixture
def web_client(auth_service: MagicMock) -> Generator[TestClient, None, None]:
    """Yield a TestClient wired to auth_service.

    follow_redirects=False is essential: route tests assert on redirect
    Location headers, which are invisible once the client follows them.
    """
    app.dependency_overrides[get_auth_client] = lambda: auth_service
    with TestClient(app, follow_redirects=False, raise_server_exceptions=True) as tc:
        yield tc
    app.dependency_overrides.pop(get_auth_client, None)


@pytest.fixture
def login_rate_limit() -> Generator[int, None, None]:
    """Enable the limiter for one test; yields how many logins it allows."""
    limiter.reset()
    limiter.enabled = True
    try:
        yield int(get_settings().login_rate_limit.split("/")[0])
    finally:
        limiter.enabled = False
        limiter.reset()
