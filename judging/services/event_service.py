"""
Audition Event Service - Audition Judging Platform
judging/services/event_service.py

Event lifecycle: creation, listing and status changes. An organization has at
most one active event; activating one moves any other active event back to
draft within the same store transaction.
"""

from typing import Dict, List, Optional, Set

import structlog

from judging.core.exceptions import InvalidStatusTransitionException
from judging.core.tenant import Actor, TenantContext
from judging.models.enumerations import EventStatus
from judging.models.event import EventCreate, EventResponse
from judging.repositories import (
    CandidateRepository,
    DeliberationRepository,
    EventRepository,
    ScoreRepository,
)
from judging.services.cache import invalidate_results
from judging.services.redis_cache import RedisCache
from judging.store.base import DocumentStore

logger = structlog.get_logger(__name__)

ALLOWED_TRANSITIONS: Dict[EventStatus, Set[EventStatus]] = {
    EventStatus.DRAFT: {EventStatus.ACTIVE},
    EventStatus.ACTIVE: {EventStatus.DRAFT, EventStatus.COMPLETED},
    EventStatus.COMPLETED: {EventStatus.ARCHIVED},
    EventStatus.ARCHIVED: set(),
}


def check_transition(current: EventStatus, requested: EventStatus) -> None:
    if requested not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransitionException(current.value, requested.value)


class EventService:
    """Audition event operations for one organization."""

    def __init__(
        self,
        store: DocumentStore,
        tenant: TenantContext,
        cache: Optional[RedisCache] = None,
    ):
        self.store = store
        self.tenant = tenant
        self.cache = cache
        self.events = EventRepository(store, tenant)
        self.candidates = CandidateRepository(store, tenant)
        self.scores = ScoreRepository(store, tenant)
        self.deliberations = DeliberationRepository(store, tenant)

    def create(self, payload: EventCreate, actor: Actor) -> EventResponse:
        event = self.events.create(name=payload.name, event_date=payload.date, created_by=actor.id)
        logger.info(
            "event_created",
            organization_id=self.tenant.organization_id,
            event_id=event.id,
            created_by=actor.id,
        )
        return event

    def list_events(self, status: Optional[EventStatus] = None) -> List[EventResponse]:
        counts = self.candidates.count_by_event()
        return [
            e.model_copy(update={"candidate_count": counts.get(e.id, 0)})
            for e in self.events.list_all(status)
        ]

    def get(self, event_id: str) -> EventResponse:
        event = self.events.require(event_id)
        count = len(self.candidates.list_for_event(event_id))
        return event.model_copy(update={"candidate_count": count})

    def change_status(self, event_id: str, status: EventStatus, actor: Actor) -> EventResponse:
        """
        Move an event through its lifecycle.

        Requesting the current status is a no-op.

        Raises:
            InvalidStatusTransitionException: transition not in ALLOWED_TRANSITIONS
        """
        event = self.events.require(event_id)
        if event.status == status:
            return self.get(event_id)
        check_transition(event.status, status)

        now = self.events.now()
        fields = {"status": status, "updated_at": now, "updated_by": actor.id}
        if status == EventStatus.COMPLETED:
            fields.update(completed_at=now, completed_by=actor.id)
        elif status == EventStatus.ARCHIVED:
            fields.update(archived_at=now, archived_by=actor.id)

        with self.store.transaction():
            deactivated = []
            if status == EventStatus.ACTIVE:
                for other in self.events.list_all(EventStatus.ACTIVE):
                    if other.id == event_id:
                        continue
                    self.events.update_fields(
                        other.id,
                        status=EventStatus.DRAFT,
                        updated_at=now,
                        updated_by=actor.id,
                    )
                    deactivated.append(other.id)
            self.events.update_fields(event_id, **fields)

        for other_id in deactivated:
            invalidate_results(self.cache, self.tenant.organization_id, other_id)

        logger.info(
            "event_status_changed",
            organization_id=self.tenant.organization_id,
            event_id=event_id,
            previous=event.status.value,
            status=status.value,
            deactivated=deactivated,
            actor=actor.id,
        )
        return self.get(event_id)

    def archive(self, event_id: str, actor: Actor) -> EventResponse:
        return self.change_status(event_id, EventStatus.ARCHIVED, actor)

    def delete(self, event_id: str) -> int:
        """
        Delete an event with its candidates, score records and saved
        deliberation. Committed roster members are kept.

        Returns:
            Number of candidates removed with the event
        """
        self.events.require(event_id)
        with self.store.transaction():
            self.scores.delete_for_event(event_id)
            removed = self.candidates.delete_for_event(event_id)
            self.deliberations.delete_for_event(event_id)
            self.events.delete(event_id)
        invalidate_results(self.cache, self.tenant.organization_id, event_id)

        logger.info(
            "event_deleted",
            organization_id=self.tenant.organization_id,
            event_id=event_id,
            candidates_removed=removed,
        )
        return removed
