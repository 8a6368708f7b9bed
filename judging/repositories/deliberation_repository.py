"""
Deliberation Repository - Audition Judging Platform
judging/repositories/deliberation_repository.py

One DeliberationRecord per (organization, event); the ID is derived from the
pair so saves replace the previous session.
"""

from typing import Optional

from judging.models.deliberation import DeliberationRecordResponse
from judging.models.enumerations import Collection
from judging.repositories.base import TenantRepository


class DeliberationRepository(TenantRepository):
    """Repository for deliberation session documents."""

    COLLECTION = Collection.DELIBERATIONS.value
    ENTITY_NAME = "Deliberation"

    def record_id(self, event_id: str) -> str:
        return self.derived_id(event_id)

    def get_for_event(self, event_id: str) -> Optional[DeliberationRecordResponse]:
        doc = self._get(self.record_id(event_id))
        return DeliberationRecordResponse(**doc) if doc else None

    def save(self, record: DeliberationRecordResponse) -> DeliberationRecordResponse:
        record = record.model_copy(
            update={
                "id": self.record_id(record.event_id),
                "organization_id": self.organization_id,
            }
        )
        self._upsert(record.model_dump(mode="json"))
        return record

    def delete_for_event(self, event_id: str) -> bool:
        return self._delete(self.record_id(event_id))
