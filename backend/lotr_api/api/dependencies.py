"""Route Dependencies — resolve lifespan-owned resources from app.state.

Invariants:
    - Resources are created once in the lifespan; dependencies never construct pools or clients
    - A ReviewService is cheap and built per request around the shared store
"""

from fastapi import Depends, Request

from lotr_api.core.repository_protocols import RemoteCatalog
from lotr_api.infrastructure.database import DatabaseSessionManager
from lotr_api.infrastructure.review_store import SqlReviewStore
from lotr_api.services.review_service import ReviewService


def get_db_manager(request: Request) -> DatabaseSessionManager:
    db_manager = getattr(request.app.state, "db_manager", None)
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    return db_manager


def get_review_service(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> ReviewService:
    return ReviewService(SqlReviewStore(db_manager))


def get_catalog(request: Request) -> RemoteCatalog:
    catalog = getattr(request.app.state, "one_api_client", None)
    if catalog is None:
        raise RuntimeError("The One API client not initialized")
    return catalog
