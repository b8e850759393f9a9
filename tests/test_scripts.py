"""Tests for the seed and connectivity scripts against SQLite."""

import pytest

from icebreaker.seed_data import SEED_QUESTIONS
from icebreaker.stores.postgres import PostgresStore
from scripts.check_db import check_database
from scripts.seed import seed_database


@pytest.mark.asyncio
async def test_seed_inserts_once(sql_store: PostgresStore, capsys: pytest.CaptureFixture):
    assert await seed_database(sql_store) == len(SEED_QUESTIONS)
    assert await seed_database(sql_store) == 0

    questions = await sql_store.all_questions()
    assert [q.text for q in questions] == [q["text"] for q in SEED_QUESTIONS]
    assert all(q.is_active for q in questions)
    assert "already contains 10 questions" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_seed_skips_non_empty_table(sql_store: PostgresStore):
    await sql_store.add_question("Custom?", "fun", True)

    assert await seed_database(sql_store) == 0
    assert len(await sql_store.all_questions()) == 1


@pytest.mark.asyncio
async def test_check_database_reports_count(sql_store: PostgresStore, capsys: pytest.CaptureFixture):
    await seed_database(sql_store)

    assert await check_database(sql_store) == len(SEED_QUESTIONS)
    out = capsys.readouterr().out
    assert "connection successful" in out
    assert "#1 [imagination]" in out
