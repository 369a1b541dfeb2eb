"""Unit tests for auth/client.py -- AuthServiceClient against a mocked requests.Session.

Covers:
  - GET /api/auth/me parsing, including emailVerified defaulting to True
  - me() raising on non-OK status and on an unparsable body
  - POST /api/auth/login payload shape and non-OK handling
  - cookies handed in at construction are carried by the session
  - issued_cookie_items() reports only what the login response set
"""

from __future__ import annotations

import pytest
import requests

from auth.client import AuthServiceClient
from auth.models import Credentials


class TestMe:
    def test_authenticated_with_user(self, client, http_session, make_response):
        http_session.get.return_value = make_response(200, {"authenticated": True, "user": {"role": " admin "}})
        status = client.me()
        http_session.get.assert_called_once_with("http://auth.test/api/auth/me", timeout=5)
        assert status.authenticated is True
        assert status.user.role == "admin"
        assert status.user.email_verified is True

    def test_email_verified_false_is_kept(self, client, http_session, make_response):
        http_session.get.return_value = make_response(
            200, {"authenticated": True, "user": {"role": "staff", "emailVerified": False, "name": "Somchai"}}
        )
        user = client.me().user
        assert user.email_verified is False
        assert user.extra == {"name": "Somchai"}

    def test_not_authenticated(self, client, http_session, make_response):
        http_session.get.return_value = make_response(200, {"authenticated": False})
        status = client.me()
        assert status.authenticated is False
        assert status.user is None

    def test_non_ok_raises_http_error(self, client, http_session, make_response):
        http_session.get.return_value = make_response(401, {"message": "no session"})
        with pytest.raises(requests.HTTPError):
            client.me()

    def test_unparsable_body_raises_value_error(self, client, http_session, make_response):
        http_session.get.return_value = make_response(200, raw=b"<html>not json</html>")
        with pytest.raises(ValueError):
            client.me()


class TestLogin:
    def test_posts_trimmed_identifier_and_raw_password(self, client, http_session, make_response):
        http_session.post.return_value = make_response(200, {"success": True, "user": {"role": "staff"}})
        client.login(Credentials("  somchai@example.com ", " pw "))
        http_session.post.assert_called_once_with(
            "http://auth.test/api/auth/login",
            json={"identifier": "somchai@example.com", "password": " pw "},
            timeout=5,
        )

    def test_success_outcome(self, client, http_session, make_response):
        http_session.post.return_value = make_response(
            200, {"success": True, "user": {"role": "admn"}, "message": "welcome"}
        )
        outcome = client.login(Credentials("a", "b"))
        assert outcome.ok is True
        assert outcome.success is True
        assert outcome.user.role == "admn"
        assert outcome.message == "welcome"

    def test_non_ok_with_message(self, client, http_session, make_response):
        http_session.post.return_value = make_response(401, {"message": "bad creds"})
        outcome = client.login(Credentials("a", "b"))
        assert outcome.ok is False
        assert outcome.status_code == 401
        assert outcome.message == "bad creds"

    def test_non_ok_without_json_has_no_message(self, client, http_session, make_response):
        http_session.post.return_value = make_response(502, raw=b"Bad Gateway")
        outcome = client.login(Credentials("a", "b"))
        assert outcome.ok is False
        assert outcome.payload is None
        assert outcome.message is None

    def test_ok_with_unparsable_body_raises(self, client, http_session, make_response):
        http_session.post.return_value = make_response(200, raw=b"oops")
        with pytest.raises(ValueError):
            client.login(Credentials("a", "b"))

    def test_transport_error_propagates(self, client, http_session):
        http_session.post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(requests.ConnectionError):
            client.login(Credentials("a", "b"))


class TestIssuedCookies:
    def test_only_login_response_cookies_are_issued(self, http_session, make_response):
        c = AuthServiceClient("http://auth.test", session=http_session, cookies={"theme": "dark"})
        resp = make_response(200, {"success": True, "user": {"role": "staff"}})
        resp.cookies.set("sid", "xyz")
        http_session.post.return_value = resp
        c.login(Credentials("a", "b"))
        assert c.issued_cookie_items() == [("sid", "xyz")]

    def test_nothing_issued_before_login(self, http_session):
        c = AuthServiceClient("http://auth.test", session=http_session, cookies={"sid": "abc"})
        assert c.issued_cookie_items() == []

    def test_each_login_replaces_the_previous_cookies(self, client, http_session, make_response):
        first = make_response(200, {"success": True})
        first.cookies.set("sid", "one")
        http_session.post.return_value = first
        client.login(Credentials("a", "b"))
        http_session.post.return_value = make_response(401, {"message": "bad creds"})
        client.login(Credentials("a", "b"))
        assert client.issued_cookie_items() == []


class TestSessionSetup:
    def test_cookies_seeded_from_caller(self, http_session):
        c = AuthServiceClient("http://auth.test/", session=http_session, cookies={"sid": "abc"})
        assert c.base_url == "http://auth.test"
        assert http_session.cookies.get("sid") == "abc"

    def test_redirect_chain_is_capped(self, client, http_session):
        assert http_session.max_redirects == 3

    def test_logout_posts(self, client, http_session, make_response):
        http_session.post.return_value = make_response(204)
        client.logout()
        http_session.post.assert_called_once_with("http://auth.test/api/auth/logout", timeout=5)
