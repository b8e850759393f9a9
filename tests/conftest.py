"""Shared fixtures.

The SQL adapter runs against in-memory SQLite (aiosqlite) so tests need no
Postgres; Redis is replaced by FakeRedis.
"""

import random

import pytest
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from icebreaker.main import create_app
from icebreaker.services.questions import QuestionService
from icebreaker.settings import Settings
from icebreaker.stores.memory import MemoryStore
from icebreaker.stores.postgres import PostgresStore
from icebreaker.stores.redis import RedisCache


class FakeRedis:
    """Just enough of redis.asyncio.Redis for RedisCache."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.gets = 0

    async def get(self, key: str) -> str | None:
        self.gets += 1
        return self.data.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> None:
        self.data[key] = value
        self.ttls[key] = ttl

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)
        self.ttls.pop(key, None)

    async def aclose(self) -> None:
        pass


class UnavailableRedis:
    """A Redis client whose server has gone away."""

    async def get(self, key: str) -> str | None:
        raise RedisConnectionError("Connection refused")

    async def setex(self, key: str, ttl: int, value: str) -> None:
        raise RedisConnectionError("Connection refused")

    async def delete(self, key: str) -> None:
        raise RedisConnectionError("Connection refused")

    async def aclose(self) -> None:
        pass


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, storage_backend="memory", redis_url="")


async def make_sqlite_store() -> PostgresStore:
    """PostgresStore adapter over a throwaway in-memory SQLite database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    store = PostgresStore(engine)
    await store.create_tables()
    return store


@pytest.fixture
async def sql_store():
    store = await make_sqlite_store()
    yield store
    await store.close()


@pytest.fixture(params=["memory", "sql"])
async def store(request: pytest.FixtureRequest):
    """Each record store adapter in turn, starting empty."""
    if request.param == "memory":
        yield MemoryStore(seed=False)
        return
    sql = await make_sqlite_store()
    yield sql
    await sql.close()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def cache(fake_redis: FakeRedis) -> RedisCache:
    return RedisCache(fake_redis, ttl=30)


@pytest.fixture
def unavailable_cache() -> RedisCache:
    return RedisCache(UnavailableRedis(), ttl=30)


@pytest.fixture
def service() -> QuestionService:
    return QuestionService(MemoryStore(seed=False), rng=random.Random(1234))


@pytest.fixture
async def client(settings: Settings):
    """Test client over an app with an empty memory store."""
    app = create_app(settings=settings, store=MemoryStore(seed=False))
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
