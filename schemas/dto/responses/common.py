"""
Response DTOs for the hCaptcha endpoints.

ErrorResponse      — standard error shape from AppError.to_dict()
HealthResponse     — GET /health
ValidationResponse — POST /hcaptcha/pages/{page_id}/validate
ActivateResponse   — POST /hcaptcha/activate
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Standard error JSON body produced by the AppError exception handler."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    code: str
    field: Optional[str] = None
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    checks: dict[str, str]


class ValidationResponse(BaseModel):
    """Outcome of validating a subscribe form submission.

    ``message`` is empty when ``ok`` is true; otherwise the host shows it to
    the subscriber.
    """

    model_config = ConfigDict(populate_by_name=True)

    ok: bool
    message: str = ""


class ActivateResponse(BaseModel):
    """Plugin metadata and the result of registering its settings."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str
    settings_created: list[str]
    keys_configured: bool

