"""Response envelope shared by all routes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from pindown.shared.utils.datetime import utc_now


class SuccessResponse(BaseModel):
    """Envelope for successful responses: {success, message, data, timestamp}."""

    success: bool = True
    message: str | None = None
    data: Any = None
    timestamp: datetime = Field(default_factory=utc_now)


def success_response(data: Any = None, message: str | None = None) -> SuccessResponse:
    return SuccessResponse(data=data, message=message)


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    version: str | None = None
