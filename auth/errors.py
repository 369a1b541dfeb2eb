"""
auth/errors.py -- Closed error type for the login submit path.

Anything raised while a login attempt is in flight is converted to a
LoginError before it reaches the view. The conversion reads a ``code``
attribute off the original exception; codes outside AuthErrorCode collapse
to UNKNOWN, so the view only ever has six messages to choose from.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from auth import messages


class AuthErrorCode(str, Enum):
    USER_NOT_FOUND = "auth/user-not-found"
    WRONG_PASSWORD = "auth/wrong-password"
    INVALID_EMAIL = "auth/invalid-email"
    USER_DISABLED = "auth/user-disabled"
    TOO_MANY_REQUESTS = "auth/too-many-requests"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, code: object) -> "AuthErrorCode":
        if isinstance(code, cls):
            return code
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


_MESSAGES: dict[AuthErrorCode, str] = {
    AuthErrorCode.USER_NOT_FOUND: messages.USER_NOT_FOUND,
    AuthErrorCode.WRONG_PASSWORD: messages.WRONG_PASSWORD,
    AuthErrorCode.INVALID_EMAIL: messages.INVALID_EMAIL,
    AuthErrorCode.USER_DISABLED: messages.USER_DISABLED,
    AuthErrorCode.TOO_MANY_REQUESTS: messages.TOO_MANY_REQUESTS,
    AuthErrorCode.UNKNOWN: messages.UNEXPECTED_ERROR,
}


class LoginError(Exception):
    """A failed login attempt with one of the known error codes."""

    def __init__(self, code: AuthErrorCode = AuthErrorCode.UNKNOWN, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        super().__init__(detail or code.value)

    @property
    def user_message(self) -> str:
        return _MESSAGES[self.code]

    @classmethod
    def from_exception(cls, exc: BaseException) -> "LoginError":
        """Wrap an arbitrary exception, keeping its code when it is a known one."""
        if isinstance(exc, cls):
            return exc
        code = AuthErrorCode.parse(getattr(exc, "code", None))
        return cls(code, detail=str(exc) or type(exc).__name__)
