"""
auth/flow.py -- Session probe, login submit and logout flows.

These flows know nothing about HTML or HTTP responses. Everything with a
visible effect is injected:

  Navigator  -- navigate(path); the last call wins.
  Storage    -- clear(); wiped wholesale on logout.
  Scheduler  -- call_later(delay, callback); runs the post-login redirect.

The web layer (web/routes.py) supplies adapters that turn navigation into
HTTP redirects and storage into the signed session cookie. Tests supply
mocks.

Cancellation: only the probe can be abandoned mid-flight (the view may be
torn down while GET /api/auth/me is outstanding). LoginView.unmount() sets
its CancellationToken and the probe checks it before touching view state or
navigating. The submit flow is never cancelled; a second submit while one is
loading is ignored instead.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Optional, Protocol

import requests

from auth import messages
from auth.client import AuthServiceClient
from auth.errors import LoginError
from auth.models import Credentials, Destination, Notice, NoticeLevel
from auth.redirect import destination_for

logger = logging.getLogger("cynportal.auth")


# ---------------------------------------------------------------------------
# Collaborator interfaces
# ---------------------------------------------------------------------------


class Navigator(Protocol):
    def navigate(self, path: str) -> None: ...


class Storage(Protocol):
    def clear(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> object: ...


class TimerScheduler:
    """Run callbacks on a daemon threading.Timer. Returns the timer so callers can join() it."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class CancellationToken:
    """One-way flag: once cancelled, stays cancelled. Safe to set from another thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class ViewState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    CHECKING = "checking"
    REDIRECTING = "redirecting"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Probe
# ---------------------------------------------------------------------------


class SessionProber:
    """Check for an existing session once and redirect a verified user by role."""

    def __init__(self, client: AuthServiceClient, navigator: Navigator) -> None:
        self.client = client
        self.navigator = navigator

    def probe(self, token: CancellationToken) -> Optional[Destination]:
        """Return the destination navigated to, or None when the user stays on login.

        Transport and server errors are logged and otherwise ignored. The
        token is checked after the response arrives; a cancelled probe has no
        effect whatever the response said.
        """
        if token.cancelled:
            return None
        try:
            status = self.client.me()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Session check failed: %s", exc)
            return None

        if token.cancelled:
            logger.debug("Session check resolved after teardown; ignoring")
            return None
        if not status.authenticated or status.user is None:
            return None
        if not status.user.email_verified:
            return None

        destination = destination_for(status.user.role)
        self.navigator.navigate(destination.value)
        return destination


# ---------------------------------------------------------------------------
# Login view
# ---------------------------------------------------------------------------


class LoginView:
    """In-memory state of the login form plus its two flows.

    Lifecycle: mount() once (runs the probe), submit() per form submission,
    unmount() on teardown. identifier, password and remember_me are the form
    fields; remember_me is form state only and is not sent to the service.
    """

    def __init__(
        self,
        client: AuthServiceClient,
        navigator: Navigator,
        scheduler: Optional[Scheduler] = None,
        redirect_delay: float = 0.8,
    ) -> None:
        self.client = client
        self.navigator = navigator
        self.scheduler = scheduler if scheduler is not None else TimerScheduler()
        self.redirect_delay = redirect_delay

        self.identifier = ""
        self.password = ""
        self.remember_me = False
        self.notice: Optional[Notice] = None
        self.is_loading = False
        self.state = ViewState.UNAUTHENTICATED

        self._token = CancellationToken()

    @property
    def mounted(self) -> bool:
        return not self._token.cancelled

    def mount(self) -> Optional[Destination]:
        self.state = ViewState.CHECKING
        destination = SessionProber(self.client, self.navigator).probe(self._token)
        if not self.mounted:
            return None
        self.state = ViewState.REDIRECTING if destination else ViewState.UNAUTHENTICATED
        return destination

    def unmount(self) -> None:
        self._token.cancel()

    def submit(self) -> Optional[Destination]:
        """Run one login attempt from the current form fields.

        Returns the destination a redirect has been scheduled for, or None if
        the attempt ended with an error notice (or was ignored because another
        attempt is still loading).
        """
        if self.is_loading:
            return None
        self.is_loading = True
        self.notice = None
        try:
            return self._attempt(Credentials(self.identifier, self.password))
        except Exception as exc:
            error = LoginError.from_exception(exc)
            logger.error("Login error (%s): %s", error.code.value, error.detail)
            self._fail(error.user_message)
            return None
        finally:
            self.is_loading = False

    def _attempt(self, credentials: Credentials) -> Optional[Destination]:
        if credentials.is_blank():
            self._fail(messages.FIELDS_REQUIRED)
            return None

        outcome = self.client.login(credentials)
        if not outcome.ok:
            self._fail(outcome.message or messages.CANNOT_LOGIN)
            return None
        if not outcome.success:
            self._fail(outcome.message or messages.LOGIN_FAILED)
            return None

        user = outcome.user
        if not user.email_verified:
            self._fail(messages.VERIFY_EMAIL)
            return None

        destination = destination_for(user.role)
        self.notice = Notice(messages.LOGIN_SUCCESS, NoticeLevel.SUCCESS)
        self.state = ViewState.REDIRECTING
        self.scheduler.call_later(self.redirect_delay, lambda: self.navigator.navigate(destination.value))
        return destination

    def _fail(self, text: str) -> None:
        self.notice = Notice(text, NoticeLevel.ERROR)
        self.state = ViewState.ERROR


# ---------------------------------------------------------------------------
# Logout
# ---------------------------------------------------------------------------


def logout(client: AuthServiceClient, navigator: Navigator, *storages: Storage) -> None:
    """End the session: best-effort service call, then wipe storage and go to /login.

    Storage is cleared and navigation happens whether or not the call
    succeeded.
    """
    try:
        client.logout()
    except Exception as exc:
        logger.warning("Logout request failed, continuing local cleanup: %s", exc)
    finally:
        for storage in storages:
            storage.clear()
        navigator.navigate(Destination.LOGIN.value)
