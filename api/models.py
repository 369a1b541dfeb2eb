"""
API response models for the portal backend.

These Pydantic v2 models define the JSON transport contract of the bootstrap
service: the health probe and the uniform error envelope every exception
handler in api/main.py returns. The login flow's own types live in
auth/models.py as dataclasses; they never cross this boundary.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
