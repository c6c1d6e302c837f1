"""Review Service — sanitization, store access, and response mapping for reviews.

Invariants:
    - No code path persists an unsanitized comment
    - Every row leaves as a ReviewResponse (camelCase, ISO-8601 UTC timestamps)
    - StoreError → DATABASE; NOT_FOUND is raised here and never rewrapped
    - update_review with no rating and no non-empty comment → INVALID_ARGUMENT,
      checked before the store is touched (so it fires even for existing ids)

Design Decisions:
    - Store injected as the ReviewStore protocol: tests use the real SQL store
      on SQLite or a fake
"""

from datetime import datetime, timezone

from lotr_api.core.domain_types import MovieId, ReviewId
from lotr_api.core.errors import (
    StoreError, database_error, invalid_argument_error, not_found_error,
)
from lotr_api.core.pagination import page_count
from lotr_api.core.repository_protocols import ReviewRow, ReviewStore
from lotr_api.core.sanitize import sanitize
from lotr_api.schemas.common import PaginatedResponse, PaginationMeta
from lotr_api.schemas.review import ReviewCreate, ReviewQuery, ReviewResponse


def _iso_utc(value: datetime) -> str:
    # SQLite hands back naive datetimes; stored values are always UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def to_review_response(row: ReviewRow) -> ReviewResponse:
    return ReviewResponse(
        id=row.id,
        movie_id=row.movie_id,
        user_name=row.user_name,
        rating=row.rating,
        comment=row.comment,
        created_at=_iso_utc(row.created_at),
        updated_at=_iso_utc(row.updated_at),
    )


class ReviewService:
    """Review CRUD over an injected ReviewStore."""

    def __init__(self, store: ReviewStore):
        self._store = store

    async def create_review(self, data: ReviewCreate) -> ReviewResponse:
        try:
            row = await self._store.insert(
                movie_id=MovieId(data.movie_id),
                user_name=data.user_name,
                rating=data.rating,
                comment=sanitize(data.comment),
            )
        except StoreError as e:
            raise database_error("Failed to create review", e) from e
        return to_review_response(row)

    async def get_reviews(
        self, params: ReviewQuery,
    ) -> PaginatedResponse[ReviewResponse]:
        try:
            rows, total = await self._store.list_page(
                MovieId(params.movie_id) if params.movie_id else None,
                params.page, params.limit,
            )
        except StoreError as e:
            raise database_error("Failed to fetch reviews", e) from e
        return PaginatedResponse[ReviewResponse](
            data=[to_review_response(r) for r in rows],
            pagination=PaginationMeta(
                total=total,
                page=params.page,
                limit=params.limit,
                pages=page_count(total, params.limit),
            ),
        )

    async def get_review_by_id(self, review_id: ReviewId) -> ReviewResponse:
        try:
            row = await self._store.get_by_id(review_id)
        except StoreError as e:
            raise database_error("Failed to fetch review", e) from e
        if row is None:
            raise not_found_error("Review", review_id)
        return to_review_response(row)

    async def update_review(
        self,
        review_id: ReviewId,
        rating: int | None = None,
        comment: str | None = None,
    ) -> ReviewResponse:
        fields: dict = {}
        if rating is not None:
            fields["rating"] = rating
        if comment:
            fields["comment"] = sanitize(comment)
        if not fields:
            raise invalid_argument_error("No fields to update")

        try:
            row = await self._store.update_partial(review_id, **fields)
        except StoreError as e:
            raise database_error("Failed to update review", e) from e
        if row is None:
            raise not_found_error("Review", review_id)
        return to_review_response(row)

    async def delete_review(self, review_id: ReviewId) -> bool:
        try:
            return await self._store.delete(review_id)
        except StoreError as e:
            raise database_error("Failed to delete review", e) from e
