"""
Audition Event Repository - Audition Judging Platform
judging/repositories/event_repository.py

Data access layer for AuditionEvent documents.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from judging.models.enumerations import Collection, EventStatus
from judging.models.event import EventResponse
from judging.repositories.base import TenantRepository


class EventRepository(TenantRepository):
    """Repository for audition event documents."""

    COLLECTION = Collection.AUDITION_EVENTS.value
    ENTITY_NAME = "Audition event"

    def create(
        self,
        name: str,
        event_date: date,
        created_by: Optional[str] = None,
        event_id: Optional[str] = None,
    ) -> EventResponse:
        """
        Create a new audition event in draft status.

        Args:
            name: Display name
            event_date: Date of the audition
            created_by: ID of the creating user
            event_id: Explicit ID (imports); generated when omitted

        Returns:
            Created event
        """
        event = EventResponse(
            id=event_id or self.new_id(),
            organization_id=self.organization_id,
            name=name,
            date=event_date,
            status=EventStatus.DRAFT,
            created_at=self.now(),
            created_by=created_by,
        )
        self._insert(event.model_dump(mode="json", exclude={"candidate_count"}))
        return event

    def get_by_id(self, event_id: str) -> Optional[EventResponse]:
        doc = self._get(event_id)
        return EventResponse(**doc) if doc else None

    def require(self, event_id: str) -> EventResponse:
        return EventResponse(**self._require(event_id))

    def list_all(self, status: Optional[EventStatus] = None) -> List[EventResponse]:
        """List the organization's events, newest first."""
        filters: Dict[str, Any] = {}
        if status:
            filters["status"] = status.value
        events = [EventResponse(**doc) for doc in self._find(**filters)]
        events.sort(key=lambda e: e.created_at, reverse=True)
        return events

    def update_fields(self, event_id: str, **fields: Any) -> EventResponse:
        doc = self._update(event_id, _to_json(fields))
        return EventResponse(**doc)

    def delete(self, event_id: str) -> bool:
        return self._delete(event_id)


def _to_json(fields: Dict[str, Any]) -> Dict[str, Any]:
    out = {}
    for key, value in fields.items():
        if isinstance(value, EventStatus):
            value = value.value
        elif hasattr(value, "isoformat"):
            value = value.isoformat()
        out[key] = value
    return out
