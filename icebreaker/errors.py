"""Domain errors raised by stores and services.

Routes never build error responses themselves; the exception handlers in
``icebreaker.main`` map these to HTTP status codes:

- ValidationError -> 400 (with field-level ``errors``)
- NotFound -> 404
- StorageUnavailable -> 500 (generic message, cause is logged)
"""

from typing import Any


class IcebreakerError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(IcebreakerError):
    """Malformed or missing required input."""

    status_code = 400

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class NotFound(IcebreakerError):
    """Referenced entity is absent."""

    status_code = 404


class StorageUnavailable(IcebreakerError):
    """Backing store could not be reached."""

    status_code = 500
