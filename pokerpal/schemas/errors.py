"""Error response schemas for API documentation."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Standard error detail structure."""

    code: str
    message: str
    details: dict[
        str, str | int | float | bool | list[str] | list[dict[str, str | int]] | None
    ] = {}


class ErrorResponse(BaseModel):
    """Standard error response wrapper."""

    error: ErrorDetail


# Shared ``responses=`` mappings for route decorators
NOT_FOUND = {404: {"model": ErrorResponse, "description": "Resource not found"}}
UNPROCESSABLE = {422: {"model": ErrorResponse, "description": "Validation failed"}}
CONFLICT = {409: {"model": ErrorResponse, "description": "Conflicts with state"}}
