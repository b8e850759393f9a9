"""PostgreSQL store with async SQLAlchemy.

Handles:
- Engine / session management (connection pooling)
- RecordStore adapter over the questions and ratings tables
- Translating connection failures into StorageUnavailable
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import logging

from sqlalchemy import delete, select
from sqlalchemy import text as sql_text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from icebreaker.errors import StorageUnavailable
from icebreaker.models import Base, Question, Rating
from icebreaker.settings import Settings
from icebreaker.stores.base import QuestionRecord, RatingRecord, RecordStore, utcnow

logger = logging.getLogger("uvicorn.error")

# Errors that mean "the database is not reachable", as opposed to a bad query.
_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, OSError)


def _to_question(row: Question) -> QuestionRecord:
    return QuestionRecord(
        id=row.id,
        text=row.text,
        category=row.category,
        is_active=row.is_active,
        created_at=row.created_at,
    )


def _to_rating(row: Rating) -> RatingRecord:
    return RatingRecord(
        id=row.id,
        question_id=row.question_id,
        rating=row.rating,
        session_id=row.session_id,
        created_at=row.created_at,
    )


class PostgresStore(RecordStore):
    """Durable store backed by the questions / ratings tables."""

    backend = "postgres"

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostgresStore":
        """Build a pooled asyncpg engine from DATABASE_URL."""
        engine = create_async_engine(
            settings.async_database_url,
            echo=settings.debug,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
        return cls(engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session that commits on success and rolls back on error.

        Usage:
            async with store.session() as session:
                result = await session.execute(query)
        """
        try:
            async with self._session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        except _UNAVAILABLE_ERRORS as exc:
            logger.exception("Postgres unavailable")
            raise StorageUnavailable("Database is unavailable") from exc

    async def create_tables(self) -> None:
        """Create all tables (for development/testing only)."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop all tables (for testing only)."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> None:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(sql_text("SELECT 1"))
        except _UNAVAILABLE_ERRORS as exc:
            logger.exception("Postgres ping failed")
            raise StorageUnavailable("Database is unavailable") from exc

    async def close(self) -> None:
        await self._engine.dispose()

    # ============================================================
    # Questions
    # ============================================================

    async def add_question(self, text: str, category: str, is_active: bool) -> QuestionRecord:
        async with self.session() as session:
            row = Question(text=text, category=category, is_active=is_active, created_at=utcnow())
            session.add(row)
            await session.flush()
            return _to_question(row)

    async def put_question(self, question: QuestionRecord) -> QuestionRecord:
        async with self.session() as session:
            row = await session.merge(
                Question(
                    id=question.id,
                    text=question.text,
                    category=question.category,
                    is_active=question.is_active,
                    created_at=question.created_at,
                )
            )
            await session.flush()
            return _to_question(row)

    async def get_question(self, question_id: int) -> QuestionRecord | None:
        async with self.session() as session:
            row = await session.get(Question, question_id)
            return _to_question(row) if row else None

    async def remove_question(self, question_id: int) -> bool:
        async with self.session() as session:
            result = await session.execute(delete(Question).where(Question.id == question_id))
            return (result.rowcount or 0) > 0

    async def all_questions(self) -> list[QuestionRecord]:
        async with self.session() as session:
            result = await session.execute(select(Question).order_by(Question.id.asc()))
            return [_to_question(row) for row in result.scalars().all()]

    # ============================================================
    # Ratings
    # ============================================================

    async def add_rating(self, question_id: int, rating: int, session_id: str) -> RatingRecord:
        async with self.session() as session:
            row = Rating(
                question_id=question_id,
                rating=rating,
                session_id=session_id,
                created_at=utcnow(),
            )
            session.add(row)
            await session.flush()
            return _to_rating(row)

    async def all_ratings(self) -> list[RatingRecord]:
        async with self.session() as session:
            result = await session.execute(select(Rating).order_by(Rating.id.asc()))
            return [_to_rating(row) for row in result.scalars().all()]

    async def ratings_for(self, question_id: int) -> list[RatingRecord]:
        async with self.session() as session:
            result = await session.execute(
                select(Rating)
                .where(Rating.question_id == question_id)
                .order_by(Rating.id.asc())
            )
            return [_to_rating(row) for row in result.scalars().all()]
