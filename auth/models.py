"""
auth/models.py -- Domain dataclasses for the login flow.

Pattern: Data class (pure data container, minimal logic). The auth service
owns the session; these types are the client-side view of its JSON payloads.
The from_payload() factories are the only place the wire field names
(emailVerified, authenticated, success) are read.

Layer rule: no imports from api/, web/, or core/.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Destination(str, Enum):
    """Portal routes a flow may navigate to."""

    LOGIN = "/login"
    ADMIN = "/admin"  # privileged destination
    MAP = "/map"  # default destination


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A user-facing message shown under the login form."""

    text: str
    level: NoticeLevel = NoticeLevel.ERROR

    @property
    def is_success(self) -> bool:
        return self.level is NoticeLevel.SUCCESS


@dataclass
class SessionUser:
    """The user object the auth service attaches to a session.

    email_verified defaults to True: an auth service that does not track
    verification never blocks the redirect. Any other fields are kept in
    extra untouched.
    """

    role: str = ""
    email_verified: bool = True
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Optional[dict[str, Any]]) -> "SessionUser":
        data = dict(payload or {})
        role = data.pop("role", None)
        verified = data.pop("emailVerified", None)
        return cls(
            role=str(role).strip() if role is not None else "",
            email_verified=True if verified is None else bool(verified),
            extra=data,
        )


@dataclass
class SessionStatus:
    """Parsed body of GET /api/auth/me."""

    authenticated: bool = False
    user: Optional[SessionUser] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "SessionStatus":
        if not isinstance(payload, dict):
            return cls()
        user = payload.get("user")
        return cls(
            authenticated=bool(payload.get("authenticated")),
            user=SessionUser.from_payload(user) if isinstance(user, dict) else None,
        )


@dataclass
class Credentials:
    """Identifier (email or phone) and password for one submit call. Never persisted."""

    identifier: str
    password: str

    def is_blank(self) -> bool:
        return not self.identifier.strip() or not self.password.strip()

    def to_payload(self) -> dict[str, str]:
        return {"identifier": self.identifier.strip(), "password": self.password}

    def __repr__(self) -> str:
        return f"Credentials(identifier={self.identifier!r}, password='***')"


@dataclass
class LoginOutcome:
    """Raw result of POST /api/auth/login.

    ok mirrors the HTTP status class; payload is the parsed JSON body, or None
    when a non-OK response carried no parsable JSON.
    """

    ok: bool
    status_code: int
    payload: Optional[dict[str, Any]] = None

    @property
    def message(self) -> Optional[str]:
        if not self.payload:
            return None
        message = self.payload.get("message")
        return str(message) if message else None

    @property
    def success(self) -> bool:
        return bool(self.payload and self.payload.get("success"))

    @property
    def user(self) -> SessionUser:
        data = self.payload.get("user") if self.payload else None
        return SessionUser.from_payload(data if isinstance(data, dict) else None)
