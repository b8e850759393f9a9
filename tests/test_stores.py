"""Record store contract, exercised against both adapters."""

from dataclasses import replace

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from icebreaker.errors import StorageUnavailable
from icebreaker.seed_data import SEED_QUESTIONS
from icebreaker.stores.memory import MemoryStore
from icebreaker.stores.postgres import PostgresStore


@pytest.mark.asyncio
async def test_add_question_assigns_monotonic_ids(store):
    first = await store.add_question("First?", "fun", True)
    second = await store.add_question("Second?", "general", False)

    assert first.id >= 1
    assert second.id > first.id
    assert second.is_active is False
    assert first.created_at is not None


@pytest.mark.asyncio
async def test_get_question_missing_returns_none(store):
    assert await store.get_question(999) is None


@pytest.mark.asyncio
async def test_put_question_overwrites_by_id(store):
    q = await store.add_question("Original?", "general", True)

    await store.put_question(replace(q, text="Edited?", is_active=False))

    stored = await store.get_question(q.id)
    assert stored.text == "Edited?"
    assert stored.is_active is False
    assert stored.category == "general"
    assert len(await store.all_questions()) == 1


@pytest.mark.asyncio
async def test_remove_question_reports_existence(store):
    q = await store.add_question("Gone soon?", "general", True)

    assert await store.remove_question(q.id) is True
    assert await store.remove_question(q.id) is False
    assert await store.get_question(q.id) is None


@pytest.mark.asyncio
async def test_ids_not_reused_after_delete(store):
    q1 = await store.add_question("One?", "general", True)
    await store.remove_question(q1.id)

    q2 = await store.add_question("Two?", "general", True)

    assert q2.id > q1.id


@pytest.mark.asyncio
async def test_all_questions_in_insertion_order(store):
    texts = ["A?", "B?", "C?"]
    for t in texts:
        await store.add_question(t, "general", True)

    assert [q.text for q in await store.all_questions()] == texts


@pytest.mark.asyncio
async def test_ratings_for_filters_by_question(store):
    await store.add_rating(1, 5, "s1")
    await store.add_rating(2, 3, "s1")
    await store.add_rating(1, 4, "s2")

    ratings = await store.ratings_for(1)
    assert [r.rating for r in ratings] == [5, 4]
    assert all(r.question_id == 1 for r in ratings)
    assert len(await store.all_ratings()) == 3


@pytest.mark.asyncio
async def test_ratings_survive_question_removal(store):
    q = await store.add_question("Rated?", "general", True)
    await store.add_rating(q.id, 4, "s1")

    await store.remove_question(q.id)

    assert [r.rating for r in await store.ratings_for(q.id)] == [4]


@pytest.mark.asyncio
async def test_long_category_and_session_id_are_stored_whole(store):
    q = await store.add_question("Long?", "c" * 500, True)
    await store.add_rating(q.id, 5, "s" * 1000)

    assert (await store.get_question(q.id)).category == "c" * 500
    assert (await store.ratings_for(q.id))[0].session_id == "s" * 1000


@pytest.mark.asyncio
async def test_ping_succeeds(store):
    await store.ping()


@pytest.mark.asyncio
async def test_memory_store_seeds_by_default():
    questions = await MemoryStore().all_questions()

    assert [q.text for q in questions] == [q["text"] for q in SEED_QUESTIONS]
    assert [q.id for q in questions] == list(range(1, len(SEED_QUESTIONS) + 1))


@pytest.mark.asyncio
async def test_memory_store_returns_copies():
    store = MemoryStore(seed=False)
    q = await store.add_question("Immutable?", "general", True)

    q.text = "mutated"

    assert (await store.get_question(q.id)).text == "Immutable?"


@pytest.mark.asyncio
async def test_unreachable_database_raises_storage_unavailable(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path}/missing-dir/db.sqlite"
    store = PostgresStore(create_async_engine(url))

    with pytest.raises(StorageUnavailable):
        await store.ping()
    with pytest.raises(StorageUnavailable):
        await store.all_questions()

    await store.close()
