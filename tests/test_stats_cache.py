"""Tests for the Redis-backed stats cache and its invalidation."""

import asyncio
import json

import pytest

from icebreaker.services.questions import QuestionService
from icebreaker.stores.memory import MemoryStore
from icebreaker.stores.redis import KEY_QUESTION_STATS, RedisCache


@pytest.fixture
def cached_service(cache: RedisCache) -> QuestionService:
    return QuestionService(MemoryStore(seed=False), cache=cache)


@pytest.mark.asyncio
async def test_stats_are_cached_with_ttl(cached_service: QuestionService, fake_redis):
    await cached_service.create_question("Cached?", category="fun")

    stats = await cached_service.with_stats()

    assert KEY_QUESTION_STATS in fake_redis.data
    assert fake_redis.ttls[KEY_QUESTION_STATS] == 30
    payload = json.loads(fake_redis.data[KEY_QUESTION_STATS])
    assert payload[0]["avgRating"] == 0
    assert payload[0]["totalRatings"] == 0
    assert payload[0]["isActive"] is True
    assert stats[0].category == "fun"


@pytest.mark.asyncio
async def test_warm_cache_skips_store(cached_service: QuestionService, monkeypatch: pytest.MonkeyPatch):
    await cached_service.create_question("Once?")
    first = await cached_service.with_stats()

    async def fail(*args, **kwargs):
        raise AssertionError("store should not be read on a cache hit")

    monkeypatch.setattr(cached_service.store, "all_questions", fail)
    second = await cached_service.with_stats()

    assert [s.model_dump() for s in second] == [s.model_dump() for s in first]


@pytest.mark.asyncio
@pytest.mark.parametrize("mutation", ["create", "update", "delete", "rate"])
async def test_mutations_invalidate_stats(cached_service: QuestionService, fake_redis, mutation):
    q = await cached_service.create_question("Invalidate me?")
    await cached_service.with_stats()
    assert KEY_QUESTION_STATS in fake_redis.data

    if mutation == "create":
        await cached_service.create_question("Another?")
    elif mutation == "update":
        await cached_service.update_question(q.id, {"category": "growth"})
    elif mutation == "delete":
        await cached_service.delete_question(q.id)
    else:
        await cached_service.create_rating(q.id, 5, "s1")

    assert KEY_QUESTION_STATS not in fake_redis.data


@pytest.mark.asyncio
async def test_stats_recomputed_after_rating(cached_service: QuestionService):
    q = await cached_service.create_question("Rate?")
    before = await cached_service.with_stats()

    await cached_service.create_rating(q.id, 4, "s1")
    after = await cached_service.with_stats()

    assert before[0].total_ratings == 0
    assert after[0].total_ratings == 1
    assert after[0].avg_rating == 4.0


@pytest.mark.asyncio
async def test_failed_delete_keeps_cache(cached_service: QuestionService, fake_redis):
    await cached_service.create_question("Stays?")
    await cached_service.with_stats()

    assert await cached_service.delete_question(12345) is False
    assert KEY_QUESTION_STATS in fake_redis.data


@pytest.mark.asyncio
async def test_cache_json_helpers(cache: RedisCache, fake_redis):
    assert await cache.get_json("missing") is None

    await cache.set_json("k", {"a": [1, 2]}, ttl=5)
    assert await cache.get_json("k") == {"a": [1, 2]}
    assert fake_redis.ttls["k"] == 5

    await cache.delete("k")
    assert await cache.get_json("k") is None


@pytest.mark.asyncio
async def test_unavailable_redis_falls_back_to_store(
    unavailable_cache: RedisCache, caplog: pytest.LogCaptureFixture
):
    service = QuestionService(MemoryStore(seed=False), cache=unavailable_cache)

    q = await service.create_question("Still works?")
    await service.create_rating(q.id, 3, "s1")
    assert await service.delete_question(12345) is False
    stats = await service.with_stats()

    assert [(s.id, s.total_ratings, s.avg_rating) for s in stats] == [(q.id, 1, 3.0)]
    assert "Redis cache read failed" in caplog.text
    assert "Redis cache write failed" in caplog.text
    assert "Redis cache invalidation failed" in caplog.text


class SlowRatingsStore(MemoryStore):
    """Yields to the event loop after reading ratings, like a real database round trip."""

    async def ratings_for(self, question_id: int):
        ratings = await super().ratings_for(question_id)
        await asyncio.sleep(0)
        return ratings


@pytest.mark.asyncio
async def test_stats_computed_during_a_write_are_not_cached(cache: RedisCache, fake_redis):
    service = QuestionService(SlowRatingsStore(seed=False), cache=cache)
    q = await service.create_question("Racy?")

    stale, _ = await asyncio.gather(service.with_stats(), service.create_rating(q.id, 5, "s"))

    assert stale[0].total_ratings == 0
    assert KEY_QUESTION_STATS not in fake_redis.data
    fresh = await service.with_stats()
    assert fresh[0].total_ratings == 1
    assert fresh[0].avg_rating == 5.0
