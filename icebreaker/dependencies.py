"""FastAPI dependencies.

The question service is built once at startup (or handed to ``create_app`` by
tests) and kept on ``app.state``; handlers receive it through Depends.
"""

from fastapi import Request

from icebreaker.errors import StorageUnavailable
from icebreaker.services.questions import QuestionService


def get_question_service(request: Request) -> QuestionService:
    service: QuestionService | None = getattr(request.app.state, "question_service", None)
    if service is None:
        raise StorageUnavailable("Storage not initialized")
    return service
