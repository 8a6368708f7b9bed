"""
Candidate Service - Audition Judging Platform
judging/services/candidate_service.py

Candidate registration, listing, sub-group assignment and removal.
"""

from typing import List, Optional

import structlog

from judging.core.tenant import TenantContext
from judging.models.candidate import (
    AutoGroupRequest,
    CandidateCreate,
    CandidateResponse,
    GroupAssignmentResult,
    GroupAssignments,
)
from judging.repositories import CandidateRepository, EventRepository, ScoreRepository
from judging.services.cache import invalidate_results
from judging.services.redis_cache import RedisCache
from judging.store.base import DocumentStore

logger = structlog.get_logger(__name__)


class CandidateService:
    """Candidate operations for one organization."""

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

    def _invalidate(self, event_id: str) -> None:
        invalidate_results(self.cache, self.tenant.organization_id, event_id)

    def register(self, event_id: str, payload: CandidateCreate) -> CandidateResponse:
        self.events.require(event_id)
        candidate = self.candidates.create(event_id, payload)
        self._invalidate(event_id)
        logger.info(
            "candidate_registered",
            organization_id=self.tenant.organization_id,
            event_id=event_id,
            candidate_id=candidate.id,
            audition_number=candidate.audition_number,
        )
        return candidate

    def list_for_event(self, event_id: str) -> List[CandidateResponse]:
        self.events.require(event_id)
        return self.candidates.list_for_event(event_id)

    def assign_groups(self, event_id: str, payload: GroupAssignments) -> GroupAssignmentResult:
        """Set the group of each listed candidate; IDs outside the event are reported back."""
        self.events.require(event_id)
        in_event = {c.id for c in self.candidates.list_for_event(event_id)}

        updated = 0
        unmatched: List[str] = []
        with self.store.transaction():
            for candidate_id, group in payload.assignments.items():
                if candidate_id not in in_event:
                    unmatched.append(candidate_id)
                    continue
                self.candidates.set_group(candidate_id, group.strip() or "Unassigned")
                updated += 1
        self._invalidate(event_id)

        logger.info("groups_assigned", event_id=event_id, updated=updated, unmatched=len(unmatched))
        return GroupAssignmentResult(updated=updated, unmatched=unmatched)

    def auto_assign_groups(self, event_id: str, payload: AutoGroupRequest) -> GroupAssignmentResult:
        """
        Assign groups by audition-number range. The first matching range wins;
        candidates outside every range keep their group and are reported back.
        """
        self.events.require(event_id)

        updated = 0
        unmatched: List[str] = []
        with self.store.transaction():
            for candidate in self.candidates.list_for_event(event_id):
                match = next(
                    (
                        r for r in payload.ranges
                        if r.min_number <= candidate.audition_number <= r.max_number
                    ),
                    None,
                )
                if match is None:
                    unmatched.append(candidate.id)
                    continue
                self.candidates.set_group(candidate.id, match.group_name)
                updated += 1
        self._invalidate(event_id)

        logger.info("groups_auto_assigned", event_id=event_id, updated=updated, unmatched=len(unmatched))
        return GroupAssignmentResult(updated=updated, unmatched=unmatched)

    def delete(self, candidate_id: str) -> None:
        """Remove a candidate together with its score records."""
        candidate = self.candidates.require(candidate_id)
        with self.store.transaction():
            removed_scores = self.scores.delete_for_candidate(candidate_id)
            self.candidates.delete(candidate_id)
        self._invalidate(candidate.event_id)

        logger.info(
            "candidate_deleted",
            event_id=candidate.event_id,
            candidate_id=candidate_id,
            score_records_removed=removed_scores,
        )
