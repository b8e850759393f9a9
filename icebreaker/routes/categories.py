"""Category suggestions for the admin question form."""

from fastapi import APIRouter, Depends

from icebreaker.dependencies import get_question_service
from icebreaker.services.questions import QuestionService

router = APIRouter()


@router.get("", response_model=list[str])
async def list_categories(
    service: QuestionService = Depends(get_question_service),
) -> list[str]:
    return service.categories()
