"""Record store contract shared by the memory and Postgres adapters.

Callers (the question service) depend only on ``RecordStore``; which adapter is
active is decided once at startup from ``STORAGE_BACKEND``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone

# Ids are Postgres ``integer`` (int4) columns.
MAX_ID = 2_147_483_647


def utcnow() -> datetime:
    """Timezone-aware creation timestamp."""
    return datetime.now(timezone.utc)


@dataclass
class QuestionRecord:
    """A prompt shown to game participants."""

    id: int
    text: str
    category: str
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class RatingRecord:
    """A participant's score for a question. Immutable once recorded."""

    id: int
    question_id: int
    rating: int
    session_id: str
    created_at: datetime


class RecordStore(ABC):
    """Holds questions and ratings keyed by auto-incrementing ids."""

    backend: str = "abstract"

    # Questions

    @abstractmethod
    async def add_question(self, text: str, category: str, is_active: bool) -> QuestionRecord:
        """Assign the next id and creation time, store and return the record."""

    @abstractmethod
    async def put_question(self, question: QuestionRecord) -> QuestionRecord:
        """Insert or overwrite by id."""

    @abstractmethod
    async def get_question(self, question_id: int) -> QuestionRecord | None:
        """Return the record, or None when absent."""

    @abstractmethod
    async def remove_question(self, question_id: int) -> bool:
        """Delete by id. Returns whether a record existed."""

    @abstractmethod
    async def all_questions(self) -> list[QuestionRecord]:
        """Snapshot of every question in insertion order."""

    # Ratings

    @abstractmethod
    async def add_rating(self, question_id: int, rating: int, session_id: str) -> RatingRecord:
        """Assign the next id and creation time, store and return the record."""

    @abstractmethod
    async def all_ratings(self) -> list[RatingRecord]:
        """Snapshot of every rating in insertion order."""

    @abstractmethod
    async def ratings_for(self, question_id: int) -> list[RatingRecord]:
        """Ratings whose question_id matches, in insertion order."""

    # Lifecycle

    async def ping(self) -> None:
        """Raise StorageUnavailable if the backing store is unreachable."""

    async def close(self) -> None:
        """Release any held resources."""
