"""
Candidate Repository - Audition Judging Platform
judging/repositories/candidate_repository.py

Data access layer for Candidate documents.
"""

from typing import Dict, List, Optional

from judging.models.candidate import CandidateCreate, CandidateResponse
from judging.models.enumerations import Collection
from judging.repositories.base import TenantRepository


class CandidateRepository(TenantRepository):
    """Repository for candidate documents."""

    COLLECTION = Collection.CANDIDATES.value
    ENTITY_NAME = "Candidate"

    def create(self, event_id: str, candidate: CandidateCreate) -> CandidateResponse:
        """Register a candidate in an event."""
        record = CandidateResponse(
            id=self.new_id(),
            organization_id=self.organization_id,
            event_id=event_id,
            created_at=self.now(),
            **candidate.model_dump(),
        )
        self._insert(record.model_dump(mode="json"))
        return record

    def get_by_id(self, candidate_id: str) -> Optional[CandidateResponse]:
        doc = self._get(candidate_id)
        return CandidateResponse(**doc) if doc else None

    def require(self, candidate_id: str) -> CandidateResponse:
        return CandidateResponse(**self._require(candidate_id))

    def list_for_event(self, event_id: str) -> List[CandidateResponse]:
        """Candidates of one event ordered by audition number."""
        candidates = [CandidateResponse(**doc) for doc in self._find(event_id=event_id)]
        candidates.sort(key=lambda c: (c.audition_number, c.name))
        return candidates

    def count_by_event(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for doc in self._find():
            counts[doc["event_id"]] = counts.get(doc["event_id"], 0) + 1
        return counts

    def set_group(self, candidate_id: str, group: str) -> CandidateResponse:
        return CandidateResponse(**self._update(candidate_id, {"group": group}))

    def delete(self, candidate_id: str) -> bool:
        return self._delete(candidate_id)

    def delete_for_event(self, event_id: str) -> int:
        return self._delete_where(event_id=event_id)
