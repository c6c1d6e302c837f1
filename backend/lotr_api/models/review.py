"""Review ORM — persists user-submitted ratings and comments for external movies.

Invariants:
    - id is an autoincrement integer primary key, never reused after delete
    - rating constrained to 1..5 at the database level as well as at the boundary
    - movie_id is opaque (no FK: movies live in The One API, not locally)
    - created_at is written once; updated_at is written on insert and on every update

Design Decisions:
    - Composite index (movie_id, created_at DESC) serves the filtered, newest-first list
    - sqlite_autoincrement: SQLite otherwise reuses the max rowid after a delete
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, Index, Integer, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from lotr_api.core.domain_types import MIN_RATING, MAX_RATING
from lotr_api.db.base import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Review(Base):
    """A single review of a movie."""
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_reviews_rating_range",
        ),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    movie_id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_name: Mapped[str] = mapped_column(String(100), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<Review id={self.id} movie_id={self.movie_id!r} rating={self.rating}>"


Index(
    "ix_reviews_movie_id_created_at",
    Review.movie_id, Review.created_at.desc(),
)
