"""
Health Check Router - Audition Judging Platform
judging/routers/health.py

Reports document store and Redis reachability.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Dict
from datetime import datetime, timezone

import redis

from judging.config import settings
from judging.core.dependencies import get_store
from judging.core.exceptions import RepositoryException
from judging.store.base import DocumentStore

router = APIRouter(tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


#  Dependency Health Checks


def _short(error: Exception) -> str:
    msg = str(error)
    return msg[:100] + "..." if len(msg) > 100 else msg


def check_store(store: DocumentStore) -> str:
    """Check document store health."""
    try:
        if store.ping():
            return f"healthy (backend: {settings.STORE_BACKEND})"
        return "unhealthy: ping returned no result"
    except RepositoryException as e:
        return f"unhealthy: {_short(e)}"


def check_redis() -> str:
    """Check Redis connection health."""
    if not settings.CACHE_ENABLED:
        return "disabled"
    try:
        client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
        )
        client.ping()
        client.close()
        return "healthy"
    except (redis.RedisError, ConnectionError) as e:
        return f"unhealthy: {_short(e)}"


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Document store healthy (cache may be degraded)"},
        503: {"description": "Document store unhealthy"},
    },
    summary="Health check",
    description="Check health of the document store and the results cache.",
)
def health_check(store: DocumentStore = Depends(get_store)):
    dependencies = {
        "store": check_store(store),
        "redis": check_redis(),
    }

    store_healthy = dependencies["store"].startswith("healthy")
    cache_ok = dependencies["redis"] in ("healthy", "disabled")

    if store_healthy and cache_ok:
        overall = "healthy"
    elif store_healthy:
        overall = "degraded"
    else:
        overall = "unhealthy"

    response = HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )

    if store_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
