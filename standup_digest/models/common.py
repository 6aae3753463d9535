"""
Common response models.

Dependencies: pydantic
System role: Error body returned by every endpoint
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response raised from the domain layer."""

    success: bool = False
    error: str = Field(description="Human-readable error message")
    error_type: str = Field(description="Exception class, e.g. SourceFetchError")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Structured context (source, stage, field, ...)",
    )
    correlation_id: str | None = Field(
        default=None,
        description="Request correlation id, also sent as X-Correlation-ID",
    )
