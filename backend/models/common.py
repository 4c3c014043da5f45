"""
Common response models.

Error envelope shared by every endpoint.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    """Machine-readable error description."""

    kind: str = Field(description="Stable error kind, e.g. not_found")
    message: str = Field(description="Human-readable message")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional context")


class ErrorResponse(BaseModel):
    """Error response schema (FastAPI places the body under ``detail``)."""

    detail: ErrorBody
