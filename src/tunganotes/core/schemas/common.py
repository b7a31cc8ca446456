"""Schemas shared across endpoints."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain confirmation or error message."""

    message: str = Field(description="Human readable message")


class ErrorResponse(MessageResponse):
    """Error body; ``error`` is only filled in development."""

    error: Optional[str] = Field(default=None, description="Error detail")


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall status: healthy or unhealthy")
    timestamp: datetime = Field(description="Time of the check")
    version: str = Field(description="Application version")
    checks: Dict[str, Dict[str, Any]] = Field(description="Per-dependency results")
