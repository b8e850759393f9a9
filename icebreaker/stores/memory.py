"""In-process record store.

Volatile: everything is lost on restart. Dicts preserve insertion order, which
is what ``all_questions`` / ``all_ratings`` return.

No awaits happen between reading a counter and writing the record, so
concurrent requests on one event loop cannot interleave a write.
"""

from dataclasses import replace

from icebreaker.seed_data import SEED_QUESTIONS
from icebreaker.stores.base import QuestionRecord, RatingRecord, RecordStore, utcnow


class MemoryStore(RecordStore):
    """Dict-backed store with next-id counters."""

    backend = "memory"

    def __init__(self, seed: bool = True) -> None:
        self._questions: dict[int, QuestionRecord] = {}
        self._ratings: dict[int, RatingRecord] = {}
        self._next_question_id = 1
        self._next_rating_id = 1

        if seed:
            for q in SEED_QUESTIONS:
                self._insert_question(str(q["text"]), str(q["category"]), bool(q["is_active"]))

    def _insert_question(self, text: str, category: str, is_active: bool) -> QuestionRecord:
        question = QuestionRecord(
            id=self._next_question_id,
            text=text,
            category=category,
            is_active=is_active,
            created_at=utcnow(),
        )
        self._next_question_id += 1
        self._questions[question.id] = question
        return replace(question)

    async def add_question(self, text: str, category: str, is_active: bool) -> QuestionRecord:
        return self._insert_question(text, category, is_active)

    async def put_question(self, question: QuestionRecord) -> QuestionRecord:
        self._questions[question.id] = replace(question)
        # Ids are never reused, even when a caller puts an explicit one.
        self._next_question_id = max(self._next_question_id, question.id + 1)
        return replace(question)

    async def get_question(self, question_id: int) -> QuestionRecord | None:
        question = self._questions.get(question_id)
        return replace(question) if question else None

    async def remove_question(self, question_id: int) -> bool:
        return self._questions.pop(question_id, None) is not None

    async def all_questions(self) -> list[QuestionRecord]:
        return [replace(q) for q in self._questions.values()]

    async def add_rating(self, question_id: int, rating: int, session_id: str) -> RatingRecord:
        record = RatingRecord(
            id=self._next_rating_id,
            question_id=question_id,
            rating=rating,
            session_id=session_id,
            created_at=utcnow(),
        )
        self._next_rating_id += 1
        self._ratings[record.id] = record
        return record

    async def all_ratings(self) -> list[RatingRecord]:
        return list(self._ratings.values())

    async def ratings_for(self, question_id: int) -> list[RatingRecord]:
        return [r for r in self._ratings.values() if r.question_id == question_id]
