"""
Roster Repository - Audition Judging Platform
judging/repositories/roster_repository.py

Data access layer for RosterMember documents written by deliberation.
"""

from typing import List, Optional

from judging.models.enumerations import Collection
from judging.models.roster import RosterMemberResponse
from judging.repositories.base import TenantRepository


class RosterRepository(TenantRepository):
    """Repository for roster member documents."""

    COLLECTION = Collection.ROSTER_MEMBERS.value
    ENTITY_NAME = "Roster member"

    def add(self, member: RosterMemberResponse) -> RosterMemberResponse:
        member = member.model_copy(update={"organization_id": self.organization_id})
        self._insert(member.model_dump(mode="json"))
        return member

    def list_for_event(self, event_id: str) -> List[RosterMemberResponse]:
        """Roster of one event ordered by rank."""
        members = [RosterMemberResponse(**doc) for doc in self._find(event_id=event_id)]
        members.sort(key=lambda m: (m.rank, m.audition_number))
        return members

    def list_all(self, level: Optional[str] = None) -> List[RosterMemberResponse]:
        filters = {"level": level} if level else {}
        members = [RosterMemberResponse(**doc) for doc in self._find(**filters)]
        members.sort(key=lambda m: (m.event_id, m.rank, m.audition_number))
        return members

    def delete_for_event(self, event_id: str) -> int:
        """Remove every member of the organization's roster for the event."""
        return self._delete_where(event_id=event_id)
