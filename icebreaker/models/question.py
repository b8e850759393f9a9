"""Question model.

A prompt shown to game participants. Inactive questions stay listed for
admins but are never picked at random.
"""

from datetime import datetime

from sqlalchemy import DateTime, Text, func, true
from sqlalchemy.orm import Mapped, mapped_column

from icebreaker.models.base import Base


class Question(Base):
    """Curated icebreaker question."""

    __tablename__ = "questions"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    text: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(Text, default="general", server_default="general")
    is_active: Mapped[bool] = mapped_column(default=True, server_default=true())

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Question {self.id} ({self.category})>"
