"""Boundary Protocols — contracts between the review/catalog services and IO.

Invariants:
    - Services and routes depend on these Protocols, never on SQLAlchemy or httpx directly
    - "Not found" in the store is a normal return value (None / False), never an exception,
      including ids outside the column range
    - Store failures surface as StoreError; upstream failures as UPSTREAM LotrApiError

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from datetime import datetime
from typing import Any, Protocol

from lotr_api.core.domain_types import CharacterId, MovieId, ReviewId
from lotr_api.schemas.common import PaginatedResponse


class ReviewRow(Protocol):
    """Structural contract for a persisted review row (ORM model or fake)."""
    id: int
    movie_id: str
    user_name: str
    rating: int
    comment: str | None
    created_at: datetime
    updated_at: datetime


class ReviewStore(Protocol):
    """Contract for review persistence, implemented by SqlReviewStore."""
    async def insert(
        self, movie_id: MovieId, user_name: str, rating: int, comment: str | None,
    ) -> ReviewRow: ...
    async def list_page(
        self, movie_id: MovieId | None, page: int, limit: int,
    ) -> tuple[list[ReviewRow], int]: ...
    async def get_by_id(self, review_id: ReviewId) -> ReviewRow | None: ...
    async def update_partial(
        self, review_id: ReviewId, **fields: Any,
    ) -> ReviewRow | None: ...
    async def delete(self, review_id: ReviewId) -> bool: ...


class RemoteCatalog(Protocol):
    """Contract for the upstream movie/character source (OneApiClient)."""
    async def get_movies(
        self, page: int, limit: int,
    ) -> PaginatedResponse[dict[str, Any]]: ...
    async def get_movie_by_id(self, movie_id: MovieId) -> dict[str, Any]: ...
    async def get_characters(
        self, page: int, limit: int,
    ) -> PaginatedResponse[dict[str, Any]]: ...
    async def get_character_by_id(self, character_id: CharacterId) -> dict[str, Any]: ...
