# This file defines shared schema pieces reused by multiple API endpoints.
# It exists so error payloads and acknowledgements stay consistent across entity routers.

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime


class EmptyResponse(BaseModel):
    """Acknowledgement returned by delete operations."""


class TimestampFields(BaseModel):
    created_at: str | None = None
    updated_at: str | None = None


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request input."},
    404: {"model": ErrorResponse, "description": "Entity not found in the backend."},
    500: {"model": ErrorResponse, "description": "Backend or gateway failure."},
}
