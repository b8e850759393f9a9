"""Pydantic schemas for API request/response validation."""

from icebreaker.schemas.common import ErrorResponse, FieldError
from icebreaker.schemas.question import (
    QuestionCreate,
    QuestionResponse,
    QuestionUpdate,
    QuestionWithStats,
)
from icebreaker.schemas.rating import (
    AverageRatingResponse,
    RatingCreate,
    RatingResponse,
)

__all__ = [
    "ErrorResponse",
    "FieldError",
    "QuestionCreate",
    "QuestionResponse",
    "QuestionUpdate",
    "QuestionWithStats",
    "AverageRatingResponse",
    "RatingCreate",
    "RatingResponse",
]
