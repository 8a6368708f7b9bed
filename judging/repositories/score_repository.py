"""
Score Record Repository - Audition Judging Platform
judging/repositories/score_repository.py

Data access layer for ScoreRecord documents. A record's ID is derived from
(organization, event, candidate, judge), so a judge has at most one record per
candidate and every save overwrites it in place.
"""

from typing import List, Optional

from judging.models.enumerations import Collection
from judging.models.score import ScoreRecordResponse
from judging.repositories.base import TenantRepository


class ScoreRepository(TenantRepository):
    """Repository for score record documents."""

    COLLECTION = Collection.SCORE_RECORDS.value
    ENTITY_NAME = "Score record"

    def record_id(self, event_id: str, candidate_id: str, judge_id: str) -> str:
        return self.derived_id(event_id, candidate_id, judge_id)

    def get_for_judge(
        self, event_id: str, candidate_id: str, judge_id: str
    ) -> Optional[ScoreRecordResponse]:
        doc = self._get(self.record_id(event_id, candidate_id, judge_id))
        return ScoreRecordResponse(**doc) if doc else None

    def find_for_judge(self, candidate_id: str, judge_id: str) -> Optional[ScoreRecordResponse]:
        """Judge's record for a candidate without knowing the event."""
        docs = self._find(candidate_id=candidate_id, judge_id=judge_id)
        return ScoreRecordResponse(**docs[0]) if docs else None

    def save(self, record: ScoreRecordResponse) -> ScoreRecordResponse:
        """Create or overwrite the judge's record for the candidate."""
        record = record.model_copy(
            update={
                "id": self.record_id(record.event_id, record.candidate_id, record.judge_id),
                "organization_id": self.organization_id,
            }
        )
        self._upsert(record.model_dump(mode="json"))
        return record

    def list_for_candidate(
        self, candidate_id: str, submitted_only: bool = False
    ) -> List[ScoreRecordResponse]:
        filters = {"candidate_id": candidate_id}
        if submitted_only:
            filters["submitted"] = True
        records = [ScoreRecordResponse(**doc) for doc in self._find(**filters)]
        records.sort(key=lambda r: (r.judge_name, r.judge_id))
        return records

    def list_for_event(
        self, event_id: str, submitted_only: bool = False
    ) -> List[ScoreRecordResponse]:
        filters = {"event_id": event_id}
        if submitted_only:
            filters["submitted"] = True
        records = [ScoreRecordResponse(**doc) for doc in self._find(**filters)]
        records.sort(key=lambda r: (r.candidate_id, r.judge_name, r.judge_id))
        return records

    def delete_for_candidate(self, candidate_id: str) -> int:
        return self._delete_where(candidate_id=candidate_id)

    def delete_for_event(self, event_id: str) -> int:
        return self._delete_where(event_id=event_id)
