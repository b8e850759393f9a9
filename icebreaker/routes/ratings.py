"""Rating endpoints.

POST /api/ratings                           - record a rating
GET  /api/questions/{id}/ratings            - ratings for one question
GET  /api/questions/{id}/average-rating     - {questionId, averageRating}
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from icebreaker.dependencies import get_question_service
from icebreaker.schemas import AverageRatingResponse, RatingCreate, RatingResponse
from icebreaker.services.questions import QuestionService
from icebreaker.stores.base import MAX_ID

router = APIRouter()


@router.post("/ratings", response_model=RatingResponse, status_code=201)
async def create_rating(
    body: RatingCreate,
    service: QuestionService = Depends(get_question_service),
) -> RatingResponse:
    """Record a 1-5 rating. The question does not have to exist."""
    rating = await service.create_rating(
        question_id=body.question_id,
        rating=body.rating,
        session_id=body.session_id,
    )
    return RatingResponse.model_validate(rating)


@router.get("/questions/{question_id}/ratings", response_model=list[RatingResponse])
async def list_ratings(
    question_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    service: QuestionService = Depends(get_question_service),
) -> list[RatingResponse]:
    return [RatingResponse.model_validate(r) for r in await service.ratings_for(question_id)]


@router.get("/questions/{question_id}/average-rating", response_model=AverageRatingResponse)
async def get_average_rating(
    question_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    service: QuestionService = Depends(get_question_service),
) -> AverageRatingResponse:
    return AverageRatingResponse(
        question_id=question_id,
        average_rating=await service.average_rating(question_id),
    )
