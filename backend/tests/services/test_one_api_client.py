"""OneApiClient — request shaping and failure mapping against a stubbed transport.

Tests cover:
    - limit/offset query parameters and bearer auth on every call
    - pages taken from the remote when present, computed otherwise
    - Non-2xx, transport failures, malformed payloads → UPSTREAM
    - By-id lookups returning zero docs → UPSTREAM "not found in The One API"
"""

import httpx
import pytest

from lotr_api.core.errors import ErrorKind, LotrApiError

MOVIE_ID = "5cd95395de30eff6ebccde56"
CHARACTER_ID = "5cd99d4bde30eff6ebccfbbe"


def _movie(i: int) -> dict:
    return {"_id": f"movie-{i}", "name": f"Movie {i}", "runtimeInMinutes": 100 + i}


async def test_list_sends_limit_offset_and_auth(one_api_client, upstream):
    upstream.responses["/movie"] = httpx.Response(
        200, json={"docs": [_movie(5)], "total": 8, "limit": 2, "offset": 4, "page": 3, "pages": 4},
    )

    result = await one_api_client.get_movies(page=3, limit=2)

    request = upstream.requests[-1]
    assert request.method == "GET"
    assert request.url.params["limit"] == "2"
    assert request.url.params["offset"] == "4"
    assert request.headers["Authorization"] == "Bearer test-one-api-key"
    assert result.data == [_movie(5)]
    assert result.pagination.model_dump() == {"total": 8, "page": 3, "limit": 2, "pages": 4}


async def test_list_computes_pages_when_remote_omits_them(one_api_client, upstream):
    upstream.responses["/character"] = httpx.Response(
        200, json={"docs": [{"_id": "c1"}], "total": 21},
    )

    result = await one_api_client.get_characters(page=1, limit=10)

    assert result.pagination.total == 21
    assert result.pagination.pages == 3
    assert upstream.requests[-1].url.params["offset"] == "0"


async def test_list_total_defaults_to_doc_count(one_api_client, upstream):
    upstream.responses["/movie"] = httpx.Response(
        200, json={"docs": [_movie(1), _movie(2)]},
    )

    result = await one_api_client.get_movies()

    assert result.pagination.total == 2
    assert result.pagination.pages == 1


async def test_get_movie_by_id_returns_first_doc(one_api_client, upstream):
    upstream.responses[f"/movie/{MOVIE_ID}"] = httpx.Response(
        200, json={"docs": [{"_id": MOVIE_ID, "name": "The Two Towers"}], "total": 1},
    )

    movie = await one_api_client.get_movie_by_id(MOVIE_ID)

    assert movie == {"_id": MOVIE_ID, "name": "The Two Towers"}


async def test_get_character_by_id(one_api_client, upstream):
    upstream.responses[f"/character/{CHARACTER_ID}"] = httpx.Response(
        200, json={"docs": [{"_id": CHARACTER_ID, "name": "Frodo Baggins", "race": "Hobbit"}]},
    )

    character = await one_api_client.get_character_by_id(CHARACTER_ID)

    assert character["name"] == "Frodo Baggins"


async def test_remote_error_status_maps_to_upstream(one_api_client):
    # Unregistered paths answer 404 from the stub
    with pytest.raises(LotrApiError) as exc_info:
        await one_api_client.get_movie_by_id("abc")

    err = exc_info.value
    assert err.kind is ErrorKind.UPSTREAM
    assert err.code == "API_ERROR"
    assert err.http_status == 502
    assert err.message == "The One API request failed: Not Found"
    assert err.details == {"status": 404, "endpoint": "/movie/abc", "movieId": "abc"}


async def test_remote_server_error_on_list(one_api_client, upstream):
    upstream.responses["/character"] = httpx.Response(500, json={"message": "boom"})

    with pytest.raises(LotrApiError) as exc_info:
        await one_api_client.get_characters()

    assert exc_info.value.kind is ErrorKind.UPSTREAM
    assert exc_info.value.details == {"status": 500, "endpoint": "/character"}


async def test_empty_docs_is_not_found(one_api_client, upstream):
    upstream.responses[f"/character/{CHARACTER_ID}"] = httpx.Response(
        200, json={"docs": [], "total": 0},
    )

    with pytest.raises(LotrApiError) as exc_info:
        await one_api_client.get_character_by_id(CHARACTER_ID)

    assert exc_info.value.kind is ErrorKind.UPSTREAM
    assert exc_info.value.message == "Character not found in The One API"
    assert exc_info.value.details == {"characterId": CHARACTER_ID}


async def test_transport_failure_maps_to_upstream(one_api_client, upstream):
    upstream.responses["/movie"] = httpx.ConnectError("connection refused")

    with pytest.raises(LotrApiError) as exc_info:
        await one_api_client.get_movies()

    err = exc_info.value
    assert err.kind is ErrorKind.UPSTREAM
    assert err.message == "Failed to fetch data from The One API"
    assert err.details == {"endpoint": "/movie"}
    assert isinstance(err.__cause__, httpx.ConnectError)


async def test_timeout_maps_to_upstream(one_api_client, upstream):
    upstream.responses[f"/movie/{MOVIE_ID}"] = httpx.ReadTimeout("too slow")

    with pytest.raises(LotrApiError) as exc_info:
        await one_api_client.get_movie_by_id(MOVIE_ID)

    assert exc_info.value.kind is ErrorKind.UPSTREAM
    assert exc_info.value.details["movieId"] == MOVIE_ID


async def test_non_json_payload_maps_to_upstream(one_api_client, upstream):
    upstream.responses["/movie"] = httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(LotrApiError) as exc_info:
        await one_api_client.get_movies()

    assert exc_info.value.kind is ErrorKind.UPSTREAM
    assert exc_info.value.details == {"endpoint": "/movie"}


@pytest.mark.parametrize("raw_id,encoded", [
    ("abc?x=1", b"/v2/movie/abc%3Fx%3D1"),
    ("abc#frag", b"/v2/movie/abc%23frag"),
    ("a/b", b"/v2/movie/a%2Fb"),
])
async def test_by_id_escapes_id_into_one_segment(one_api_client, upstream, raw_id, encoded):
    with pytest.raises(LotrApiError):
        await one_api_client.get_movie_by_id(raw_id)

    request = upstream.requests[-1]
    assert request.url.raw_path == encoded
    assert request.url.query == b""
