"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.coffee_shop.api.http.deps import get_store
from src.coffee_shop.core.services.database.store import DocumentStoreService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is serving requests."""
    return {"status": "healthy", "service": "coffee_shop"}


@router.get("/ready", response_model=None)
def readiness(
    store: DocumentStoreService = Depends(get_store),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the document store answers a ping, 503 otherwise."""
    store_healthy = store.health_check()
    payload = {
        "status": "ready" if store_healthy else "not_ready",
        "checks": {
            "database": {
                "status": "healthy" if store_healthy else "unhealthy",
                "type": "mongodb",
            }
        },
    }
    if not store_healthy:
        return JSONResponse(status_code=503, content=payload)
    return payload
