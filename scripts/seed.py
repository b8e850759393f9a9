#!/usr/bin/env python3
"""Seed database with the starter question set.

Creates:
- One row per entry in icebreaker.seed_data.SEED_QUESTIONS

Idempotent: nothing is inserted when the questions table already has rows,
so admin edits are never overwritten.

Usage:
    python -m scripts.seed
"""

import asyncio
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from icebreaker.errors import StorageUnavailable  # noqa: E402
from icebreaker.models import Question  # noqa: E402
from icebreaker.seed_data import SEED_QUESTIONS  # noqa: E402
from icebreaker.settings import get_settings  # noqa: E402
from icebreaker.stores.base import utcnow  # noqa: E402
from icebreaker.stores.postgres import PostgresStore  # noqa: E402

load_dotenv()


async def seed_questions(session: AsyncSession) -> int:
    """Insert the seed set into an empty questions table.

    Returns:
        Number of questions inserted (0 if the table already had rows).
    """
    result = await session.execute(select(func.count(Question.id)))
    existing = result.scalar() or 0
    if existing:
        print(f"  ⏭️  Database already contains {existing} questions")
        return 0

    for q in SEED_QUESTIONS:
        session.add(
            Question(
                text=q["text"],
                category=q["category"],
                is_active=q["is_active"],
                created_at=utcnow(),
            )
        )
    await session.flush()
    print(f"  ✅ Seeded {len(SEED_QUESTIONS)} sample questions")
    return len(SEED_QUESTIONS)


async def seed_database(store: PostgresStore) -> int:
    """Seed the database behind ``store``."""
    print("🌱 Seeding database with sample questions...")
    async with store.session() as session:
        return await seed_questions(session)


async def _run() -> int:
    store = PostgresStore.from_settings(get_settings())
    try:
        await seed_database(store)
    except StorageUnavailable as e:
        print(f"❌ Error seeding database: {e}")
        return 1
    finally:
        await store.close()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(_run()))
