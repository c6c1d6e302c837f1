"""Catalog Routes — movies and characters proxied from The One API.

Invariants:
    - Remote documents are returned as the remote shapes them
    - Every upstream failure arrives here already mapped to an UPSTREAM LotrApiError
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from lotr_api.api.dependencies import get_catalog
from lotr_api.core.domain_types import (
    DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, CharacterId, MovieId,
)
from lotr_api.core.repository_protocols import RemoteCatalog
from lotr_api.schemas.common import DataResponse, PaginatedResponse

movies_router = APIRouter(prefix="/api/v1/movies", tags=["movies"])
characters_router = APIRouter(prefix="/api/v1/characters", tags=["characters"])

RemoteDoc = dict[str, Any]


@movies_router.get("", response_model=PaginatedResponse[RemoteDoc])
async def list_movies(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    catalog: RemoteCatalog = Depends(get_catalog),
):
    return await catalog.get_movies(page, limit)


@movies_router.get("/{movie_id}", response_model=DataResponse[RemoteDoc])
async def get_movie(
    movie_id: str, catalog: RemoteCatalog = Depends(get_catalog),
):
    return DataResponse[RemoteDoc](
        data=await catalog.get_movie_by_id(MovieId(movie_id)),
    )


@characters_router.get("", response_model=PaginatedResponse[RemoteDoc])
async def list_characters(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    catalog: RemoteCatalog = Depends(get_catalog),
):
    return await catalog.get_characters(page, limit)


@characters_router.get("/{character_id}", response_model=DataResponse[RemoteDoc])
async def get_character(
    character_id: str, catalog: RemoteCatalog = Depends(get_catalog),
):
    return DataResponse[RemoteDoc](
        data=await catalog.get_character_by_id(CharacterId(character_id)),
    )
