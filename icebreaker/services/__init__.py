"""Business logic services.

Services contain all business logic and are called by routes.
Services should be deterministic when possible and accept dependencies explicitly.
"""

from icebreaker.services.questions import QuestionService

__all__ = ["QuestionService"]
