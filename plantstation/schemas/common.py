"""
Common Schemas
==============

Shared Pydantic models for the API response envelope.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """Error body carried in a failed envelope."""

    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="ISO-8601 time the error was produced")
    detail: dict[str, Any] | None = Field(default=None, description="Machine-readable context")


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success response format"""

    ok: bool = Field(default=True, description="Request success status")
    data: T = Field(..., description="Response data")
    error: None = Field(default=None, description="Always null on success")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ok": True,
                "data": {"layout": "dual", "labels": [22, 23, 0, 1, 2]},
                "error": None,
            }
        }
    )


class ErrorResponse(BaseModel):
    """Standard error response format"""

    ok: bool = Field(default=False, description="Request success status")
    data: Any | None = Field(default=None, description="Data (null on error)")
    error: ErrorDetail = Field(..., description="Error body")
    message: str = Field(..., description="Copy of error.message for simple clients")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ok": False,
                "data": None,
                "error": {"message": "Channel config is missing low", "timestamp": "2026-01-01T00:00:00+00:00"},
                "message": "Channel config is missing low",
            }
        }
    )
