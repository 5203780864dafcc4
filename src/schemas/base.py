"""Base Pydantic schemas for the profiling API.

This module provides the shared schema configuration and the error body
returned by every failing endpoint.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = {
        "use_enum_values": True,
        "validate_assignment": True,
        "arbitrary_types_allowed": False,
        "populate_by_name": True,
    }


class ErrorResponse(BaseSchema):
    """Error body returned for every failed request."""

    timestamp: datetime = Field(..., description="When the error occurred (ISO-8601 with offset)")
    status: int = Field(..., description="HTTP status code")
    error: str = Field(..., description="Short error label")
    message: str = Field(..., description="Human-readable error message")
    path: str = Field(..., description="Request path")

    model_config = {
        **BaseSchema.model_config,
        "json_schema_extra": {
            "example": {
                "timestamp": "2024-01-01T12:00:00+00:00",
                "status": 404,
                "error": "Not Found",
                "message": "Saved report not found",
                "path": "/api/v1/saved-reports/abc",
            }
        },
    }


class DeleteResponse(BaseSchema):
    """Result of a delete operation."""

    deleted: int = Field(..., ge=0, description="Number of removed documents")


__all__ = ["BaseSchema", "ErrorResponse", "DeleteResponse"]
