"""
Archivist Backend - Health Check Routes
=========================================

What:  Liveness (GET /) and health (GET /health) endpoints.
How:   /health probes the asset database and reports the cache counters.
Who:   Called by Docker health checks, load balancers, and monitoring.

Status levels:
    - healthy:   Database reachable (HTTP 200)
    - unhealthy: Database unreachable (HTTP 503). Cached assets may still
                 be served, but every miss will fail.
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from archivist import __version__
from archivist.dependencies import get_asset_cache, get_asset_store
from archivist.schemas.asset import CacheStatsResponse, HealthResponse
from archivist.services.cache_base import AssetCache
from archivist.services.store_base import AssetStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness probe")
async def root() -> str:
    return "API is running!"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the service, asset database connectivity, "
        "and disk cache counters since startup."
    ),
)
async def health_check(
    response: Response,
    cache: AssetCache = Depends(get_asset_cache),
    store: AssetStore = Depends(get_asset_store),
) -> HealthResponse:
    """
    Check the health of the service and its database.

    Check details:
        Database: SELECT 1 through the asset store's session factory
        Cache:    Counters only; a broken cache never makes us unhealthy
    """
    db_ok = await store.health_check()
    if not db_ok:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        version=__version__,
        database="connected" if db_ok else "disconnected",
        cache=CacheStatsResponse(**cache.stats.as_dict()),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
