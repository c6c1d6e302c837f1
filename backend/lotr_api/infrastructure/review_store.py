"""Review Store — SQLAlchemy implementation of the ReviewStore protocol.

Invariants:
    - Each operation opens and releases its own session (scoped acquisition)
    - insert sets created_at == updated_at from a single clock read
    - update_partial touches only supplied columns and always refreshes updated_at
    - list_page orders newest first (created_at DESC, id DESC as tie-break)
    - total counts filter matches before LIMIT/OFFSET
    - Missing rows return None/False; failures raise StoreError (from the session manager)
    - Ids outside 1..MAX_REVIEW_ID cannot exist and are answered as missing without a query

Design Decisions:
    - Count + page queries share one session; no snapshot isolation is promised
    - Concurrent updates to one id are last-writer-wins (no version column)
"""

import logging
from typing import Any

from sqlalchemy import delete, func, select

from lotr_api.core.domain_types import MAX_REVIEW_ID, MovieId, ReviewId
from lotr_api.core.pagination import page_offset
from lotr_api.infrastructure.database import DatabaseSessionManager
from lotr_api.models.review import Review, utc_now

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"rating", "comment"})


def _storable_id(review_id: int) -> bool:
    return 1 <= review_id <= MAX_REVIEW_ID


class SqlReviewStore:
    """Parameterized review persistence over the shared connection pool."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def insert(
        self, movie_id: MovieId, user_name: str, rating: int, comment: str | None,
    ) -> Review:
        now = utc_now()
        review = Review(
            movie_id=movie_id, user_name=user_name, rating=rating,
            comment=comment, created_at=now, updated_at=now,
        )
        async with self._db.session("insert") as db:
            db.add(review)
            await db.commit()
        logger.info("Review created", extra={"review_id": review.id})
        return review

    async def list_page(
        self, movie_id: MovieId | None, page: int, limit: int,
    ) -> tuple[list[Review], int]:
        count_query = select(func.count()).select_from(Review)
        data_query = select(Review)
        if movie_id:
            count_query = count_query.where(Review.movie_id == movie_id)
            data_query = data_query.where(Review.movie_id == movie_id)
        data_query = (
            data_query
            .order_by(Review.created_at.desc(), Review.id.desc())
            .limit(limit)
            .offset(page_offset(page, limit))
        )

        async with self._db.session("list") as db:
            total = (await db.execute(count_query)).scalar_one()
            rows = list((await db.execute(data_query)).scalars().all())
        return rows, total

    async def get_by_id(self, review_id: ReviewId) -> Review | None:
        if not _storable_id(review_id):
            return None
        async with self._db.session("get") as db:
            result = await db.execute(
                select(Review).where(Review.id == review_id),
            )
            return result.scalar_one_or_none()

    async def update_partial(
        self, review_id: ReviewId, **fields: Any,
    ) -> Review | None:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {', '.join(sorted(unknown))}")
        if not _storable_id(review_id):
            return None

        async with self._db.session("update") as db:
            result = await db.execute(
                select(Review).where(Review.id == review_id),
            )
            review = result.scalar_one_or_none()
            if review is None:
                return None
            for name, value in fields.items():
                setattr(review, name, value)
            review.updated_at = utc_now()
            await db.commit()
        logger.info(
            "Review updated",
            extra={"review_id": review_id, "fields": sorted(fields)},
        )
        return review

    async def delete(self, review_id: ReviewId) -> bool:
        if not _storable_id(review_id):
            return False
        async with self._db.session("delete") as db:
            result = await db.execute(
                delete(Review).where(Review.id == review_id),
            )
            await db.commit()
        removed = result.rowcount > 0
        if removed:
            logger.info("Review deleted", extra={"review_id": review_id})
        return removed
