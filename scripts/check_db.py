#!/usr/bin/env python3
"""Check database connectivity.

Connects with DATABASE_URL, counts questions and prints a few samples.
Exits non-zero when the database cannot be reached.

Usage:
    python -m scripts.check_db
"""

import asyncio
import os
import sys

# Ensure imports work when executed as a script/module
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv  # noqa: E402

from icebreaker.errors import StorageUnavailable  # noqa: E402
from icebreaker.settings import get_settings  # noqa: E402
from icebreaker.stores.base import RecordStore  # noqa: E402
from icebreaker.stores.postgres import PostgresStore  # noqa: E402

load_dotenv()

SAMPLE_SIZE = 3


async def check_database(store: RecordStore) -> int:
    """Ping the store and report its contents.

    Returns:
        Number of questions found.
    """
    print("Testing database connection...")
    await store.ping()
    questions = await store.all_questions()
    print(f"✓ Database connection successful! Found {len(questions)} questions")
    for q in questions[:SAMPLE_SIZE]:
        print(f"  #{q.id} [{q.category}] {q.text}")
    return len(questions)


async def _run() -> int:
    store = PostgresStore.from_settings(get_settings())
    try:
        await check_database(store)
    except StorageUnavailable as e:
        print(f"✗ Database connection failed: {e}")
        return 1
    finally:
        await store.close()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(_run()))
