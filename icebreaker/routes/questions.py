"""Question endpoints.

GET    /api/questions               - all questions, newest first
GET    /api/questions/active        - active questions only
GET    /api/questions/stats         - questions with rating aggregates (admin)
GET    /api/questions/random        - random active question (?exclude=1,2,3)
GET    /api/questions/{id}          - single question
POST   /api/questions               - create
PUT    /api/questions/{id}          - partial update
DELETE /api/questions/{id}          - delete (ratings are kept)

Routers are thin: call the service, let domain errors reach the handlers.
Static paths are declared before /{question_id}.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response

from icebreaker.dependencies import get_question_service
from icebreaker.errors import NotFound
from icebreaker.schemas import (
    QuestionCreate,
    QuestionResponse,
    QuestionUpdate,
    QuestionWithStats,
)
from icebreaker.services.questions import QuestionService
from icebreaker.stores.base import MAX_ID

router = APIRouter()


def parse_exclude(raw: str | None) -> list[int]:
    """Parse "1,2,x,3" into [1, 2, 3]; entries that are not integers are dropped."""
    if not raw:
        return []
    ids: list[int] = []
    for part in raw.split(","):
        try:
            ids.append(int(part.strip()))
        except ValueError:
            continue
    return ids


@router.get("", response_model=list[QuestionResponse])
async def list_questions(
    service: QuestionService = Depends(get_question_service),
) -> list[QuestionResponse]:
    return [QuestionResponse.model_validate(q) for q in await service.list_all()]


@router.get("/active", response_model=list[QuestionResponse])
async def list_active_questions(
    service: QuestionService = Depends(get_question_service),
) -> list[QuestionResponse]:
    return [QuestionResponse.model_validate(q) for q in await service.list_active()]


@router.get("/stats", response_model=list[QuestionWithStats])
async def list_question_stats(
    service: QuestionService = Depends(get_question_service),
) -> list[QuestionWithStats]:
    """Questions with avgRating / totalRatings for the admin dashboard."""
    return await service.with_stats()


@router.get("/random", response_model=QuestionResponse)
async def get_random_question(
    exclude: str | None = Query(
        default=None,
        description="Comma-separated ids already seen this session",
        examples=["1,4,7"],
    ),
    service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    """Pick a random active question the caller has not seen.

    Raises:
        NotFound (404): If there are no active questions.
    """
    question = await service.pick_random(parse_exclude(exclude))
    return QuestionResponse.model_validate(question)


@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(
    question_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    return QuestionResponse.model_validate(await service.get_question(question_id))


@router.post("", response_model=QuestionResponse, status_code=201)
async def create_question(
    body: QuestionCreate,
    service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    question = await service.create_question(
        text=body.text,
        category=body.category,
        is_active=body.is_active,
    )
    return QuestionResponse.model_validate(question)


@router.put("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    body: QuestionUpdate,
    service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    """Apply only the fields present in the body."""
    question = await service.update_question(question_id, body.model_dump(exclude_unset=True))
    return QuestionResponse.model_validate(question)


@router.delete("/{question_id}", status_code=204)
async def delete_question(
    question_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    service: QuestionService = Depends(get_question_service),
) -> Response:
    if not await service.delete_question(question_id):
        raise NotFound("Question not found")
    return Response(status_code=204)
