"""
Diario de Classe API — Health Check Route
==========================================

What:  Health check endpoint for monitoring and container probes.
How:   Asks the configured repository to ping its backing store.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from diario_api import __version__
from diario_api.dependencies import get_post_repository
from diario_api.repositories.base import PostRepository
from diario_api.schemas.post import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Process start, for uptime reporting
_start_time = time.time()
# Why module level: measured from import, which is process start for uvicorn


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    repository: PostRepository = Depends(get_post_repository),
):
    reachable = await repository.ping()
    if not reachable:
        logger.warning("Health check: %s store unreachable", repository.backend_name)

    body = HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        store=repository.backend_name,
        database="connected" if reachable else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=200 if reachable else 503, content=body.model_dump())
