"""Health & Index — service index and database-backed health probe.

Invariants:
    - GET /health returns 200 when the store answers SELECT 1, otherwise 503
    - The body always has {status, timestamp, services: {database}}
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from lotr_api.api.dependencies import get_db_manager
from lotr_api.core.domain_types import HealthStatus
from lotr_api.infrastructure.database import DatabaseSessionManager

SERVICE_NAME = "Lord of the Rings API"
SERVICE_VERSION = "1.0.0"

router = APIRouter(tags=["health"])


@router.get("/")
async def index():
    return {
        "message": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "endpoints": {
            "health": "/health",
            "movies": "/api/v1/movies",
            "characters": "/api/v1/characters",
            "reviews": "/api/v1/reviews",
        },
    }


@router.get("/health")
async def health_check(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
):
    db_ok = await db_manager.health_check()
    return JSONResponse(
        status_code=(
            status.HTTP_200_OK if db_ok
            else status.HTTP_503_SERVICE_UNAVAILABLE
        ),
        content={
            "status": (
                HealthStatus.HEALTHY if db_ok else HealthStatus.UNHEALTHY
            ).value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": {
                "database": "connected" if db_ok else "disconnected",
            },
        },
    )
