"""Schemas for the question endpoints (/api/questions)."""

from datetime import datetime

from pydantic import BaseModel, Field, StrictBool, StrictStr


class QuestionCreate(BaseModel):
    """Request body for POST /api/questions."""

    text: StrictStr
    category: StrictStr | None = None
    is_active: StrictBool | None = Field(alias="isActive", default=None)

    model_config = {"populate_by_name": True}


class QuestionUpdate(BaseModel):
    """Request body for PUT /api/questions/{id}.

    Only fields present in the body are applied.
    """

    text: StrictStr | None = None
    category: StrictStr | None = None
    is_active: StrictBool | None = Field(alias="isActive", default=None)

    model_config = {"populate_by_name": True, "extra": "forbid"}


class QuestionResponse(BaseModel):
    """A question as returned to clients."""

    id: int
    text: str
    category: str
    is_active: bool = Field(alias="isActive")
    created_at: datetime = Field(alias="createdAt")

    model_config = {"populate_by_name": True, "from_attributes": True}


class QuestionWithStats(QuestionResponse):
    """Question joined with its rating aggregates (admin view)."""

    avg_rating: float = Field(alias="avgRating", ge=0)
    total_ratings: int = Field(alias="totalRatings", ge=0)
