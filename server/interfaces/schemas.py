"""
Pydantic schemas for API responses.

ErrorResponse documents the envelope written by the shared error
handler. Field names follow the wire format (camelCase).
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Error envelope returned by every error handler."""

    statusCode: int = Field(..., ge=400, le=599, description="HTTP status code")
    error: str = Field(..., description="Standard HTTP reason phrase")
    message: Any = Field(..., description="Human-readable error detail")

    model_config = {
        "json_schema_extra": {
            "example": {
                "statusCode": 400,
                "error": "Bad Request",
                "message": "ITEM_LOGIN_REQUIRED",
            }
        }
    }
