"""Question service: query and mutation layers over a RecordStore.

Query rules:
1. Listings are newest first (id DESC); ids are assigned monotonically.
2. Random pick is uniform over active questions minus the caller's exclusions,
   falling back to all active questions when everything is excluded.
3. Averages are rounded to one decimal, halves up; no ratings means 0.

Mutations validate input, write through the store and drop the cached stats
payload. Domain errors are never handled here; routes let them reach the
exception handlers. The stats cache is best effort: Redis failures are logged
and the request is served from the store.
"""

from collections.abc import Iterable, Mapping
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal
import logging
import random

from redis.exceptions import RedisError

from icebreaker.errors import NotFound, ValidationError
from icebreaker.schemas import QuestionWithStats
from icebreaker.seed_data import DEFAULT_CATEGORY, SUGGESTED_CATEGORIES
from icebreaker.stores.base import MAX_ID, QuestionRecord, RatingRecord, RecordStore
from icebreaker.stores.redis import RedisCache

logger = logging.getLogger("uvicorn.error")

# Canonical star scale. The legacy thumbs encoding (1/2) is not special-cased.
RATING_MIN = 1
RATING_MAX = 5

UPDATABLE_FIELDS = ("text", "category", "is_active")


def round_average(values: Iterable[int]) -> float:
    """Arithmetic mean rounded to one decimal place, halves rounded up.

    Returns 0.0 for an empty input.
    """
    values = list(values)
    if not values:
        return 0.0
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _newest_first(questions: list[QuestionRecord]) -> list[QuestionRecord]:
    return sorted(questions, key=lambda q: q.id, reverse=True)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _clean_text(value: object, errors: list[dict[str, str]]) -> str | None:
    if not isinstance(value, str):
        errors.append({"field": "text", "message": "Text must be a string"})
        return None
    text = value.strip()
    if not text:
        errors.append({"field": "text", "message": "Text must not be empty"})
        return None
    return text


def _clean_category(value: object, errors: list[dict[str, str]]) -> str | None:
    if value is None:
        return DEFAULT_CATEGORY
    if not isinstance(value, str):
        errors.append({"field": "category", "message": "Category must be a string"})
        return None
    return value.strip() or DEFAULT_CATEGORY


def _clean_is_active(value: object, errors: list[dict[str, str]]) -> bool | None:
    if value is None:
        return True
    if not isinstance(value, bool):
        errors.append({"field": "isActive", "message": "isActive must be a boolean"})
        return None
    return value


class QuestionService:
    """Reads and writes questions and ratings through one injected store."""

    def __init__(
        self,
        store: RecordStore,
        cache: RedisCache | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.cache = cache
        self._rng = rng or random.Random()
        # Bumped by every mutation; a stats computation that overlaps one is not cached.
        self._stats_generation = 0

    # ============================================================
    # Query layer
    # ============================================================

    async def list_all(self) -> list[QuestionRecord]:
        """All questions, most recently created first."""
        return _newest_first(await self.store.all_questions())

    async def list_active(self) -> list[QuestionRecord]:
        """Questions eligible for random selection, newest first."""
        return [q for q in await self.list_all() if q.is_active]

    async def get_question(self, question_id: int) -> QuestionRecord:
        question = await self.store.get_question(question_id)
        if question is None:
            raise NotFound("Question not found")
        return question

    async def pick_random(self, exclude_ids: Iterable[int] = ()) -> QuestionRecord:
        """Pick a uniformly random active question not in exclude_ids.

        If every active question is excluded the exclusion is ignored.

        Raises:
            NotFound: If there are no active questions at all.
        """
        active = await self.list_active()
        if not active:
            raise NotFound("No active questions available")

        excluded = set(exclude_ids)
        eligible = [q for q in active if q.id not in excluded] or active
        return eligible[self._rng.randrange(len(eligible))]

    async def ratings_for(self, question_id: int) -> list[RatingRecord]:
        return await self.store.ratings_for(question_id)

    async def average_rating(self, question_id: int) -> float:
        ratings = await self.store.ratings_for(question_id)
        return round_average(r.rating for r in ratings)

    async def with_stats(self) -> list[QuestionWithStats]:
        """Every question joined with its average and rating count.

        Served from the cache when one is configured and warm. A result is only
        written back if no mutation ran while it was being computed.
        """
        if self.cache is not None:
            try:
                cached = await self.cache.get_question_stats()
            except (RedisError, OSError) as e:
                logger.warning(f"Redis cache read failed: {e}")
                cached = None
            if cached is not None:
                logger.debug("Question stats served from cache")
                return [QuestionWithStats.model_validate(item) for item in cached]

        generation = self._stats_generation
        stats: list[QuestionWithStats] = []
        for question in await self.list_all():
            ratings = await self.store.ratings_for(question.id)
            stats.append(
                QuestionWithStats(
                    id=question.id,
                    text=question.text,
                    category=question.category,
                    is_active=question.is_active,
                    created_at=question.created_at,
                    avg_rating=round_average(r.rating for r in ratings),
                    total_ratings=len(ratings),
                )
            )

        if self.cache is not None and generation == self._stats_generation:
            try:
                await self.cache.set_question_stats(
                    [s.model_dump(mode="json", by_alias=True) for s in stats]
                )
            except (RedisError, OSError) as e:
                logger.warning(f"Redis cache write failed: {e}")
        return stats

    def categories(self) -> list[str]:
        """Category names suggested to admins."""
        return list(SUGGESTED_CATEGORIES)

    # ============================================================
    # Mutation layer
    # ============================================================

    async def create_question(
        self,
        text: object,
        category: object = None,
        is_active: object = None,
    ) -> QuestionRecord:
        """Create a question; category defaults to "general", active to True.

        Raises:
            ValidationError: If text is empty after trimming.
        """
        errors: list[dict[str, str]] = []
        clean_text = _clean_text(text, errors)
        clean_category = _clean_category(category, errors)
        clean_active = _clean_is_active(is_active, errors)
        if errors:
            raise ValidationError("Invalid question data", errors)

        question = await self.store.add_question(clean_text, clean_category, clean_active)
        logger.info(f"Question created id={question.id} category={question.category}")
        await self._invalidate_stats()
        return question

    async def update_question(self, question_id: int, fields: Mapping[str, object]) -> QuestionRecord:
        """Merge the provided fields onto an existing question.

        Raises:
            ValidationError: On unknown fields, nulls or empty text.
            NotFound: If the question does not exist.
        """
        errors: list[dict[str, str]] = []
        changes: dict[str, object] = {}
        for name, value in fields.items():
            if name not in UPDATABLE_FIELDS:
                errors.append({"field": name, "message": "Field cannot be updated"})
            elif value is None:
                errors.append({"field": name, "message": "Field must not be null"})
            elif name == "text":
                changes["text"] = _clean_text(value, errors)
            elif name == "category":
                changes["category"] = _clean_category(value, errors)
            else:
                changes["is_active"] = _clean_is_active(value, errors)
        if errors:
            raise ValidationError("Invalid question data", errors)

        existing = await self.get_question(question_id)
        updated = await self.store.put_question(replace(existing, **changes))
        logger.info(f"Question updated id={question_id} fields={sorted(changes)}")
        await self._invalidate_stats()
        return updated

    async def delete_question(self, question_id: int) -> bool:
        """Remove a question. Its ratings are kept."""
        deleted = await self.store.remove_question(question_id)
        if deleted:
            logger.info(f"Question deleted id={question_id}")
            await self._invalidate_stats()
        return deleted

    async def create_rating(self, question_id: object, rating: object, session_id: object) -> RatingRecord:
        """Record a rating. The question is not required to exist.

        Raises:
            ValidationError: If rating is outside 1-5 or an id is missing.
        """
        errors: list[dict[str, str]] = []
        if not _is_int(question_id) or not 1 <= question_id <= MAX_ID:
            errors.append({"field": "questionId", "message": "questionId must be a positive integer"})
        if not _is_int(rating) or not RATING_MIN <= rating <= RATING_MAX:
            errors.append(
                {"field": "rating", "message": f"Rating must be an integer from {RATING_MIN} to {RATING_MAX}"}
            )
        if not isinstance(session_id, str) or not session_id.strip():
            errors.append({"field": "sessionId", "message": "sessionId is required"})
        if errors:
            raise ValidationError("Invalid rating data", errors)

        record = await self.store.add_rating(question_id, rating, session_id)
        await self._invalidate_stats()
        return record

    async def _invalidate_stats(self) -> None:
        self._stats_generation += 1
        if self.cache is None:
            return
        try:
            await self.cache.invalidate_question_stats()
        except (RedisError, OSError) as e:
            # The stale payload expires after STATS_CACHE_TTL.
            logger.warning(f"Redis cache invalidation failed: {e}")
