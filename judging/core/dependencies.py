"""
Dependencies - Audition Judging Platform
judging/core/dependencies.py

FastAPI dependency injection for the document store and tenant-scoped services.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends

from judging.config import settings
from judging.core.tenant import TenantContext, get_tenant
from judging.services.cache import get_cache
from judging.services.candidate_service import CandidateService
from judging.services.deliberation_service import DeliberationService
from judging.services.event_service import EventService
from judging.services.redis_cache import RedisCache
from judging.services.results_service import ResultsService
from judging.services.score_service import ScoreService
from judging.store.base import DocumentStore


@lru_cache()
def get_store() -> DocumentStore:
    """Get cached DocumentStore for the configured backend."""
    if settings.STORE_BACKEND == "memory":
        from judging.store.memory import InMemoryDocumentStore

        return InMemoryDocumentStore()

    from judging.store.snowflake import SnowflakeDocumentStore

    return SnowflakeDocumentStore()


def get_results_cache() -> Optional[RedisCache]:
    """Redis cache, or None when disabled or unreachable."""
    return get_cache()


def get_event_service(
    tenant: TenantContext = Depends(get_tenant),
    store: DocumentStore = Depends(get_store),
    cache: Optional[RedisCache] = Depends(get_results_cache),
) -> EventService:
    return EventService(store, tenant, cache=cache)


def get_candidate_service(
    tenant: TenantContext = Depends(get_tenant),
    store: DocumentStore = Depends(get_store),
    cache: Optional[RedisCache] = Depends(get_results_cache),
) -> CandidateService:
    return CandidateService(store, tenant, cache=cache)


def get_score_service(
    tenant: TenantContext = Depends(get_tenant),
    store: DocumentStore = Depends(get_store),
    cache: Optional[RedisCache] = Depends(get_results_cache),
) -> ScoreService:
    return ScoreService(store, tenant, cache=cache)


def get_results_service(
    tenant: TenantContext = Depends(get_tenant),
    store: DocumentStore = Depends(get_store),
    cache: Optional[RedisCache] = Depends(get_results_cache),
) -> ResultsService:
    return ResultsService(store, tenant, cache=cache)


def get_deliberation_service(
    tenant: TenantContext = Depends(get_tenant),
    store: DocumentStore = Depends(get_store),
    cache: Optional[RedisCache] = Depends(get_results_cache),
) -> DeliberationService:
    return DeliberationService(store, tenant, cache=cache)
