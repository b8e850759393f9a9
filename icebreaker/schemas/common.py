"""Common schemas used across the API."""

from pydantic import BaseModel


class FieldError(BaseModel):
    """A single field-level validation problem."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "message": str, "errors": [ { "field": str, "message": str } ] }
    ``errors`` is only present for validation failures.
    """

    message: str
    errors: list[FieldError] | None = None
