"""
web/routes.py -- Jinja2 template routes for the portal login pages.

The login flows in auth/flow.py are UI-agnostic; this module runs them once
per HTTP request and turns their effects into HTTP:

  navigation      -> 302 redirect, or a timed refresh after a successful login
  storage         -> request.session (signed cookie, cleared on logout)
  auth cookies    -> relayed from the auth service to the browser on login

Each request gets its own AuthServiceClient seeded with the browser's cookies
(get_auth_client); nothing is shared between requests.

Route registration order matters: the catch-all GET /{path} must stay last.

Routes:
  GET  /         -- redirect /login
  GET  /login    -- session probe; redirect by role, or render the form
  POST /login    -- handle form submission (rate limited per client IP)
  POST /logout   -- best-effort service logout, clear session, redirect /login
  GET  /admin    -- privileged placeholder
  GET  /map      -- default placeholder
  GET  /{path}   -- anything else redirects to /login
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from api.limiter import limiter
from auth import messages
from auth.client import AuthServiceClient
from auth.flow import LoginView, logout
from auth.models import Destination, Notice
from core.config import get_settings

logger = logging.getLogger("cynportal.web")

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.globals["messages"] = messages
router = APIRouter()

_settings = get_settings()

# Session key listing the cookie names relayed from the auth service, so
# logout can expire exactly those.
_RELAYED_COOKIES_KEY = "auth_cookies"


# ---------------------------------------------------------------------------
# Flow adapters
# ---------------------------------------------------------------------------


class _ResponseNavigator:
    """Records where a flow wants to go; the route turns it into a response."""

    def __init__(self) -> None:
        self.target: Optional[str] = None

    def navigate(self, path: str) -> None:
        self.target = path


class _PageScheduler:
    """Defers the post-login redirect to the browser.

    The callback runs immediately so the navigator learns the target; the
    delay is rendered into the page as a timed refresh.
    """

    def __init__(self) -> None:
        self.delay: Optional[float] = None

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        callback()


def get_auth_client(request: Request) -> Iterator[AuthServiceClient]:
    """FastAPI dependency: an auth service client carrying the browser's cookies.

    The portal's own session cookie is not forwarded.
    """
    cookies = {k: v for k, v in request.cookies.items() if k != _settings.session_cookie}
    client = AuthServiceClient.from_settings(_settings, cookies=cookies)
    try:
        yield client
    finally:
        client.close()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _render_login(
    request: Request,
    view: Optional[LoginView] = None,
    notice: Optional[Notice] = None,
    redirect_to: Optional[str] = None,
    redirect_delay: Optional[float] = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Render login.html from a LoginView, or a blank form carrying notice."""
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "identifier": view.identifier if view is not None else "",
            "remember_me": view.remember_me if view is not None else False,
            "is_loading": view.is_loading if view is not None else False,
            "notice": view.notice if view is not None else notice,
            "redirect_to": redirect_to,
            "redirect_delay": redirect_delay,
        },
        status_code=status_code,
    )


def render_rate_limited(request: Request, exc: RateLimitExceeded) -> HTMLResponse:
    """429 for the login form: the form again, with the too-many-attempts notice."""
    logger.warning("Login rate limit hit for %s: %s", get_remote_address(request), exc.detail)
    resp = _render_login(request, notice=Notice(messages.TOO_MANY_REQUESTS), status_code=429)
    resp.headers["Retry-After"] = str(int(getattr(exc, "retry_after", 60)))
    resp.headers["Cache-Control"] = "no-store"
    return resp


def _relay_auth_cookies(request: Request, response: HTMLResponse, client: AuthServiceClient) -> None:
    """Copy the cookies the auth service set on login onto the browser response."""
    names = []
    for name, value in client.issued_cookie_items():
        if name == _settings.session_cookie:
            continue
        response.set_cookie(
            name,
            value=value,
            httponly=True,
            samesite="lax",
            secure=_settings.secure_cookies,
        )
        names.append(name)
    if names:
        request.session[_RELAYED_COOKIES_KEY] = names


# ---------------------------------------------------------------------------
# Auth routes
# ---------------------------------------------------------------------------


@router.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse(Destination.LOGIN.value, status_code=302)


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request, client: AuthServiceClient = Depends(get_auth_client)) -> HTMLResponse:
    """Render the login form, or skip it when the browser already has a session."""
    navigator = _ResponseNavigator()
    view = LoginView(client, navigator, redirect_delay=_settings.redirect_delay_seconds)
    try:
        view.mount()
    finally:
        view.unmount()
    if navigator.target:
        return RedirectResponse(navigator.target, status_code=302)
    return _render_login(request, view)


@router.post("/login", response_class=HTMLResponse)
@limiter.limit(_settings.login_rate_limit)
def login_post(
    request: Request,
    identifier: str = Form(default=""),
    password: str = Form(default=""),
    remember_me: bool = Form(default=False),
    client: AuthServiceClient = Depends(get_auth_client),
) -> HTMLResponse:
    """Handle the login form.

    Every outcome re-renders the form: with an error notice, or with the
    success notice and a timed refresh to the role's landing page.
    """
    navigator = _ResponseNavigator()
    scheduler = _PageScheduler()
    view = LoginView(client, navigator, scheduler, redirect_delay=_settings.redirect_delay_seconds)
    view.identifier = identifier
    view.password = password
    view.remember_me = remember_me

    destination = view.submit()
    # The password is never echoed back into the form.
    view.password = ""

    resp = _render_login(request, view, redirect_to=navigator.target, redirect_delay=scheduler.delay)
    if destination is not None:
        _relay_auth_cookies(request, resp, client)
        logger.info("Login succeeded; redirecting to %s", destination.value)
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/logout")
def logout_post(request: Request, client: AuthServiceClient = Depends(get_auth_client)) -> RedirectResponse:
    """Log out at the auth service (best effort), wipe the portal session, go to /login."""
    relayed = list(request.session.get(_RELAYED_COOKIES_KEY, []))
    navigator = _ResponseNavigator()
    logout(client, navigator, request.session)
    resp = RedirectResponse(navigator.target or Destination.LOGIN.value, status_code=302)
    for name in relayed:
        resp.delete_cookie(name)
    return resp


# ---------------------------------------------------------------------------
# Landing placeholders
# ---------------------------------------------------------------------------


@router.get("/admin", response_class=HTMLResponse)
def admin_page(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "placeholder.html", {"title": "Admin - Placeholder"})


@router.get("/map", response_class=HTMLResponse)
def map_page(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "placeholder.html", {"title": "Map - Placeholder"})


# ---------------------------------------------------------------------------
# Fallback -- must be registered last
# ---------------------------------------------------------------------------


@router.get("/{path:path}", include_in_schema=False)
def fallback(path: str) -> RedirectResponse:
    return RedirectResponse(Destination.LOGIN.value, status_code=302)
