"""The One API Client — proxies movies and characters, mapping every failure to UPSTREAM.

Invariants:
    - One outbound GET per call: no retries, no batching, no cache
    - offset = (page - 1) * limit for list calls
    - Non-2xx → UPSTREAM error with {status, endpoint} (+ the looked-up id for by-id calls)
    - Transport failures (connect, timeout, protocol) → UPSTREAM error with {endpoint}
    - By-id lookups with zero docs → UPSTREAM "not found in The One API"
    - Ids are percent-encoded into a single path segment; they never add query or fragment

Design Decisions:
    - Wraps a shared httpx.AsyncClient (base_url + bearer auth) built once in the lifespan
    - Zero docs counts as not-found even though a filtered list could be empty;
      the remote gives no way to tell the two apart
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from lotr_api.core.domain_types import CharacterId, MovieId, RemoteResource
from lotr_api.core.errors import ErrorContext, upstream_error
from lotr_api.core.pagination import page_count, page_offset
from lotr_api.schemas.common import PaginatedResponse, PaginationMeta
from lotr_api.schemas.remote import RemotePage

logger = logging.getLogger(__name__)


def build_http_client(
    base_url: str, api_key: str, timeout_seconds: float,
) -> httpx.AsyncClient:
    """Create the shared client used for every upstream call."""
    return httpx.AsyncClient(
        base_url=base_url,
        headers={
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        },
        timeout=timeout_seconds,
    )


class OneApiClient:
    """Thin proxy over The One API with error mapping."""

    def __init__(self, http_client: httpx.AsyncClient):
        self._client = http_client

    async def get_movies(
        self, page: int = 1, limit: int = 10,
    ) -> PaginatedResponse[dict[str, Any]]:
        return await self._fetch_page(RemoteResource.MOVIE, page, limit)

    async def get_movie_by_id(self, movie_id: MovieId) -> dict[str, Any]:
        return await self._fetch_one(RemoteResource.MOVIE, movie_id)

    async def get_characters(
        self, page: int = 1, limit: int = 10,
    ) -> PaginatedResponse[dict[str, Any]]:
        return await self._fetch_page(RemoteResource.CHARACTER, page, limit)

    async def get_character_by_id(self, character_id: CharacterId) -> dict[str, Any]:
        return await self._fetch_one(RemoteResource.CHARACTER, character_id)

    async def _fetch_page(
        self, resource: RemoteResource, page: int, limit: int,
    ) -> PaginatedResponse[dict[str, Any]]:
        endpoint = f"/{resource.value}"
        remote = await self._fetch(
            endpoint,
            params={"limit": limit, "offset": page_offset(page, limit)},
        )
        return PaginatedResponse[dict[str, Any]](
            data=remote.docs,
            pagination=PaginationMeta(
                total=remote.total,
                page=page,
                limit=limit,
                pages=remote.pages or page_count(remote.total, limit),
            ),
        )

    async def _fetch_one(
        self, resource: RemoteResource, entity_id: str,
    ) -> dict[str, Any]:
        id_details = {resource.id_field: entity_id}
        remote = await self._fetch(
            f"/{resource.value}/{quote(entity_id, safe='')}", extra_details=id_details,
        )
        if not remote.docs:
            raise upstream_error(
                f"{resource.label} not found in The One API", id_details,
            )
        return remote.docs[0]

    async def _fetch(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        extra_details: dict[str, Any] | None = None,
    ) -> RemotePage:
        """Single GET against the remote API, parsed into RemotePage."""
        extra_details = extra_details or {}
        context = ErrorContext(operation=f"GET {endpoint}")
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.HTTPError as e:
            logger.error(
                f"The One API transport error: {e}",
                extra={"endpoint": endpoint},
            )
            context.debug_info = {"error": str(e)}
            raise upstream_error(
                "Failed to fetch data from The One API",
                {"endpoint": endpoint, **extra_details},
                context,
            ) from e

        if not response.is_success:
            logger.warning(
                "The One API returned an error status",
                extra={"endpoint": endpoint, "status_code": response.status_code},
            )
            raise upstream_error(
                f"The One API request failed: {response.reason_phrase}",
                {"status": response.status_code, "endpoint": endpoint, **extra_details},
                context,
            )

        try:
            return RemotePage.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            context.debug_info = {"error": str(e)}
            raise upstream_error(
                "The One API returned an unexpected payload",
                {"endpoint": endpoint, **extra_details},
                context,
            ) from e
