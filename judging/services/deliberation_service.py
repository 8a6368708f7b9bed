"""
Deliberation Service - Audition Judging Platform
judging/services/deliberation_service.py

Commits level decisions for an event into the persistent roster.

Transfer procedure:
    1. drop cached results and recompute them from the store
    2. delete the event's roster members (previous generation)
    3. write one roster member per candidate under a new generation ID
    4. mark the event completed
    5. save the deliberation record as submitted

Steps 2-5 share one store transaction. Per-candidate write failures are
logged and skipped under the best_effort policy; under fail_fast the first
failure rolls the transaction back.
"""

from collections import Counter
from typing import Dict, List, Optional
from uuid import uuid4

import structlog

from judging.config import settings
from judging.core.exceptions import (
    EntityNotFoundException,
    InvalidStatusTransitionException,
    RepositoryException,
    TransferFailedException,
)
from judging.core.tenant import Actor, TenantContext
from judging.models.deliberation import (
    DeliberationRecordResponse,
    LevelAssignmentsPayload,
    TransferResult,
)
from judging.models.enumerations import EventStatus, RankingMode, TransferPolicy
from judging.models.event import EventResponse
from judging.models.results import CandidateResult
from judging.models.roster import RosterMemberResponse
from judging.repositories import (
    CandidateRepository,
    DeliberationRepository,
    EventRepository,
    RosterRepository,
)
from judging.services.redis_cache import RedisCache
from judging.services.results_service import ResultsService
from judging.store.base import DocumentStore

logger = structlog.get_logger(__name__)

DELIBERATION_STATUSES = {EventStatus.ACTIVE, EventStatus.COMPLETED}


class DeliberationService:
    """Deliberation progress and transfer for one organization."""

    def __init__(
        self,
        store: DocumentStore,
        tenant: TenantContext,
        cache: Optional[RedisCache] = None,
        policy: Optional[TransferPolicy] = None,
        ranking_mode: Optional[RankingMode] = None,
        default_level: Optional[str] = None,
    ):
        self.store = store
        self.tenant = tenant
        self.policy = TransferPolicy(policy or settings.TRANSFER_POLICY)
        self.default_level = default_level or settings.DEFAULT_LEVEL
        self.events = EventRepository(store, tenant)
        self.candidates = CandidateRepository(store, tenant)
        self.roster = RosterRepository(store, tenant)
        self.deliberations = DeliberationRepository(store, tenant)
        self.results = ResultsService(store, tenant, cache=cache, ranking_mode=ranking_mode)

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def get_progress(self, event_id: str) -> DeliberationRecordResponse:
        """Saved session for the event, or an empty one."""
        self.events.require(event_id)
        record = self.deliberations.get_for_event(event_id)
        if record is None:
            return DeliberationRecordResponse(
                organization_id=self.tenant.organization_id, event_id=event_id
            )
        return record

    def save_progress(
        self, event_id: str, payload: LevelAssignmentsPayload, actor: Actor
    ) -> DeliberationRecordResponse:
        """Persist partial assignments without touching the roster."""
        self.events.require(event_id)
        record = self.deliberations.save(
            DeliberationRecordResponse(
                organization_id=self.tenant.organization_id,
                event_id=event_id,
                level_assignments=payload.level_assignments,
                level_counts=payload.level_counts or _count_levels(payload.level_assignments),
                submitted=False,
                updated_at=self.deliberations.now(),
                updated_by=actor.id,
            )
        )
        logger.debug(
            "deliberation_progress_saved",
            event_id=event_id,
            assigned=len(record.level_assignments),
        )
        return record

    # ------------------------------------------------------------------
    # Transfer
    # ------------------------------------------------------------------

    def submit(
        self, event_id: str, payload: LevelAssignmentsPayload, actor: Actor
    ) -> TransferResult:
        """
        Commit level assignments for every candidate of the event.

        Raises:
            EntityNotFoundException: event does not exist
            CrossTenantAccessException: event belongs to another organization
            InvalidStatusTransitionException: event is draft or archived
            TransferFailedException: a roster write failed under fail_fast
        """
        event = self.events.require(event_id)
        if event.status not in DELIBERATION_STATUSES:
            raise InvalidStatusTransitionException(event.status.value, EventStatus.COMPLETED.value)

        self.results.invalidate(event_id)
        ranked = self.results.compute(event_id).results
        candidates = {c.id: c for c in self.candidates.list_for_event(event_id)}

        effective = {
            r.candidate_id: payload.level_assignments.get(r.candidate_id, self.default_level)
            for r in ranked
        }
        level_counts = payload.level_counts or _count_levels(effective)
        generation = str(uuid4())
        now = self.events.now()

        transferred = 0
        skipped: List[str] = []
        with self.store.transaction():
            removed = self.roster.delete_for_event(event_id)

            for result in ranked:
                try:
                    candidate = candidates.get(result.candidate_id)
                    if candidate is None:
                        raise EntityNotFoundException(CandidateRepository.ENTITY_NAME, result.candidate_id)
                    member = self._build_member(
                        event, result, candidate,
                        effective[result.candidate_id], generation, actor, now,
                    )
                    self.roster.add(member)
                    transferred += 1
                except (RepositoryException, ValueError) as e:
                    if self.policy == TransferPolicy.FAIL_FAST:
                        logger.error(
                            "deliberation_transfer_aborted",
                            event_id=event_id,
                            candidate_id=result.candidate_id,
                            error=str(e),
                        )
                        raise TransferFailedException(event_id, result.candidate_id, e) from e
                    logger.warning(
                        "roster_member_write_failed",
                        event_id=event_id,
                        candidate_id=result.candidate_id,
                        error=str(e),
                    )
                    skipped.append(result.candidate_id)

            self.events.update_fields(
                event_id,
                status=EventStatus.COMPLETED,
                completed_at=now,
                completed_by=actor.id,
                updated_at=now,
                updated_by=actor.id,
            )
            self.deliberations.save(
                DeliberationRecordResponse(
                    organization_id=self.tenant.organization_id,
                    event_id=event_id,
                    level_assignments=effective,
                    level_counts=level_counts,
                    submitted=True,
                    submitted_at=now,
                    updated_at=now,
                    updated_by=actor.id,
                )
            )

        self.results.invalidate(event_id)

        logger.info(
            "deliberation_transfer_completed",
            organization_id=self.tenant.organization_id,
            event_id=event_id,
            generation=generation,
            transferred=transferred,
            skipped=len(skipped),
            previous_removed=removed,
            policy=self.policy.value,
        )
        return TransferResult(
            event_id=event_id,
            generation=generation,
            count=transferred,
            skipped=skipped,
            message=f"Successfully transferred {transferred} candidates to the roster",
        )

    def _build_member(
        self, event: EventResponse, result: CandidateResult, candidate, level: str,
        generation: str, actor: Actor, now,
    ) -> RosterMemberResponse:
        return RosterMemberResponse(
            id=self.roster.new_id(),
            organization_id=self.tenant.organization_id,
            event_id=event.id,
            candidate_id=candidate.id,
            generation=generation,
            name=candidate.name,
            audition_number=candidate.audition_number,
            email=candidate.email,
            phone=candidate.phone,
            shirt_size=candidate.shirt_size,
            group=candidate.group,
            previous_member=candidate.previous_member,
            previous_level=candidate.previous_level,
            scores={s.judge_id: s for s in result.individual_scores},
            averages=result.averages,
            average_score=result.total_average,
            judge_count=result.judge_count,
            rank=result.rank,
            level=level,
            event_name=event.name,
            event_date=event.date.isoformat(),
            transferred_at=now,
            transferred_by=actor.id,
        )


def _count_levels(assignments: Dict[str, str]) -> Dict[str, int]:
    return dict(Counter(assignments.values()))
