"""Schemas for rating endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, StrictInt, StrictStr


class RatingCreate(BaseModel):
    """Request body for POST /api/ratings."""

    question_id: StrictInt = Field(alias="questionId")
    rating: StrictInt
    session_id: StrictStr = Field(alias="sessionId")

    model_config = {"populate_by_name": True}


class RatingResponse(BaseModel):
    """A recorded rating."""

    id: int
    question_id: int = Field(alias="questionId")
    rating: int
    session_id: str = Field(alias="sessionId")
    created_at: datetime = Field(alias="createdAt")

    model_config = {"populate_by_name": True, "from_attributes": True}


class AverageRatingResponse(BaseModel):
    """Response payload for GET /api/questions/{id}/average-rating."""

    question_id: int = Field(alias="questionId")
    average_rating: float = Field(alias="averageRating", ge=0)

    model_config = {"populate_by_name": True}
