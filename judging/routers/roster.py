"""
Roster Router - Audition Judging Platform
judging/routers/roster.py

Read access to committed roster members.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from judging.config import settings
from judging.core.dependencies import get_store
from judging.core.tenant import TenantContext, get_tenant
from judging.models.roster import RosterMemberResponse
from judging.repositories import EventRepository, RosterRepository
from judging.store.base import DocumentStore

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Roster"])


@router.get(
    "/events/{event_id}/roster",
    response_model=List[RosterMemberResponse],
    summary="Roster members committed for an event",
    description="Ordered by rank.",
)
def get_event_roster(
    event_id: str,
    tenant: TenantContext = Depends(get_tenant),
    store: DocumentStore = Depends(get_store),
) -> List[RosterMemberResponse]:
    EventRepository(store, tenant).require(event_id)
    return RosterRepository(store, tenant).list_for_event(event_id)


@router.get(
    "/roster",
    response_model=List[RosterMemberResponse],
    summary="Organization roster",
)
def get_roster(
    level: Optional[str] = Query(default=None, description="Filter by level label"),
    tenant: TenantContext = Depends(get_tenant),
    store: DocumentStore = Depends(get_store),
) -> List[RosterMemberResponse]:
    return RosterRepository(store, tenant).list_all(level)
