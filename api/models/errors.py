"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel, Field
from typing import Any


class ErrorResponse(BaseModel):
    """Standard error response format (NoodleError.to_dict())."""

    error: str = Field(..., description="Machine-readable code, e.g. NOT_FOUND")
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


# OpenAPI `responses=` entries shared by module routes
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    404: {"model": ErrorResponse, "description": "Module not found"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
}
