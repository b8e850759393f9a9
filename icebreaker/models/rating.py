"""Rating model.

Append-only feedback on a question, scoped to a browser session. There is no
foreign key to questions: ratings outlive the question they point at.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from icebreaker.models.base import Base


class Rating(Base):
    """Participant score (1-5) for a question."""

    __tablename__ = "ratings"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    question_id: Mapped[int] = mapped_column(Integer, index=True)
    rating: Mapped[int] = mapped_column(Integer)
    session_id: Mapped[str] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Rating {self.id} q={self.question_id} {self.rating}>"
