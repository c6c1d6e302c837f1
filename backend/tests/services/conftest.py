"""Service test fixtures — async SQLite DB, stubbed upstream, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the schema created
    - app.state carries the test DatabaseSessionManager and a OneApiClient whose
      httpx transport is an in-process stub (no network)
    - Rate limiting is disabled unless a test switches it back on

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and route tests
    - httpx.MockTransport behind the real OneApiClient: exercises URL building and
      error mapping end to end
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from httpx import ASGITransport, AsyncClient

import lotr_api.models  # noqa: F401
from lotr_api.db.base import Base
from lotr_api.infrastructure.database import DatabaseSessionManager
from lotr_api.infrastructure.one_api_client import OneApiClient
from lotr_api.infrastructure.rate_limit import limiter
from lotr_api.infrastructure.review_store import SqlReviewStore
from lotr_api.main import app
from lotr_api.services.review_service import ReviewService

UPSTREAM_BASE_URL = "https://the-one-api.test/v2"
UPSTREAM_PREFIX = "/v2"


class UpstreamStub:
    """Canned responses keyed by remote path ("/movie", "/movie/<id>")."""

    def __init__(self):
        self.responses: dict[str, httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(UPSTREAM_PREFIX)
        outcome = self.responses.get(path)
        if outcome is None:
            return httpx.Response(404, json={"message": "Not found"})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def db_manager(test_engine):
    return DatabaseSessionManager(test_engine)


@pytest.fixture
def review_store(db_manager):
    return SqlReviewStore(db_manager)


@pytest.fixture
def review_service(review_store):
    return ReviewService(review_store)


@pytest.fixture
def upstream():
    return UpstreamStub()


@pytest.fixture
async def one_api_client(upstream):
    async with httpx.AsyncClient(
        base_url=UPSTREAM_BASE_URL,
        headers={"Authorization": "Bearer test-one-api-key"},
        transport=httpx.MockTransport(upstream.handler),
    ) as http_client:
        yield OneApiClient(http_client)


@pytest.fixture
async def client(db_manager, one_api_client, monkeypatch):
    """FastAPI test client with lifespan resources replaced on app.state."""
    monkeypatch.setattr(limiter, "enabled", False)
    monkeypatch.setattr(app.state, "db_manager", db_manager, raising=False)
    monkeypatch.setattr(
        app.state, "one_api_client", one_api_client, raising=False,
    )
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def review_payload():
    return {
        "movieId": "5cd95395de30eff6ebccde56",
        "userName": "Sam",
        "rating": 5,
        "comment": "<b>Great</b> film",
    }
