"""SQLAlchemy ORM models.

Models represent database tables:
- questions: Curated icebreaker prompts
- ratings: Per-session scores for questions
"""

from icebreaker.models.base import Base
from icebreaker.models.question import Question
from icebreaker.models.rating import Rating

__all__ = ["Base", "Question", "Rating"]
