"""
Score Service - Audition Judging Platform
judging/services/score_service.py

Judge-facing score record operations: submit, draft auto-save, unsubmit and
submission status. Writes are accepted only while the event is active and
always invalidate the event's cached results.
"""

from typing import List, Optional, Tuple

import structlog

from judging.core.exceptions import (
    EntityNotFoundException,
    ScoreAlreadySubmittedException,
    ScoringClosedException,
)
from judging.core.tenant import Actor, TenantContext
from judging.models.candidate import CandidateResponse
from judging.models.enumerations import EventStatus
from judging.models.event import EventResponse
from judging.models.score import (
    BatchStatusResponse,
    DraftSaveResult,
    ScoreDraft,
    ScoreRecordResponse,
    ScoreSubmission,
    SubmissionStatus,
)
from judging.repositories import CandidateRepository, EventRepository, ScoreRepository
from judging.services.cache import invalidate_results
from judging.services.redis_cache import RedisCache
from judging.store.base import DocumentStore

logger = structlog.get_logger(__name__)


class ScoreService:
    """Score record operations for one organization."""

    def __init__(
        self,
        store: DocumentStore,
        tenant: TenantContext,
        cache: Optional[RedisCache] = None,
    ):
        self.tenant = tenant
        self.cache = cache
        self.events = EventRepository(store, tenant)
        self.candidates = CandidateRepository(store, tenant)
        self.scores = ScoreRepository(store, tenant)

    def _open_event(self, candidate_id: str) -> Tuple[CandidateResponse, EventResponse]:
        candidate = self.candidates.require(candidate_id)
        event = self.events.require(candidate.event_id)
        if event.status != EventStatus.ACTIVE:
            raise ScoringClosedException(event.id, event.status.value)
        return candidate, event

    def _invalidate(self, event_id: str) -> None:
        invalidate_results(self.cache, self.tenant.organization_id, event_id)

    def submit(self, submission: ScoreSubmission, actor: Actor) -> ScoreRecordResponse:
        """
        Create or overwrite the judge's record for a candidate.

        A record that is already submitted is locked until unsubmitted.
        Submissions with ``submitted=False`` are treated as draft saves.
        """
        if not submission.submitted:
            draft = ScoreDraft(scores=submission.scores, comments=submission.comments)
            return self.save_draft(submission.candidate_id, draft, actor).record

        candidate, event = self._open_event(submission.candidate_id)
        existing = self.scores.get_for_judge(event.id, candidate.id, actor.id)
        if existing and existing.submitted:
            raise ScoreAlreadySubmittedException(candidate.id, actor.id)

        now = self.scores.now()
        record = self.scores.save(
            ScoreRecordResponse(
                id="",
                organization_id=self.tenant.organization_id,
                event_id=event.id,
                candidate_id=candidate.id,
                judge_id=actor.id,
                judge_name=actor.display_name,
                scores=submission.scores,
                comments=submission.comments,
                submitted=True,
                submitted_at=now,
                timestamp=now,
                last_saved=now,
            )
        )
        self._invalidate(event.id)

        logger.info(
            "score_submitted",
            organization_id=self.tenant.organization_id,
            event_id=event.id,
            candidate_id=candidate.id,
            judge_id=actor.id,
            total=record.total,
            updated=existing is not None,
        )
        return record

    def save_draft(self, candidate_id: str, draft: ScoreDraft, actor: Actor) -> DraftSaveResult:
        """Auto-save a draft. A submitted record is returned unchanged."""
        candidate, event = self._open_event(candidate_id)
        existing = self.scores.get_for_judge(event.id, candidate.id, actor.id)
        if existing and existing.submitted:
            return DraftSaveResult(
                record=existing,
                saved=False,
                message="Scores already submitted; draft not saved",
            )

        now = self.scores.now()
        record = self.scores.save(
            ScoreRecordResponse(
                id="",
                organization_id=self.tenant.organization_id,
                event_id=event.id,
                candidate_id=candidate.id,
                judge_id=actor.id,
                judge_name=actor.display_name,
                scores=draft.scores,
                comments=draft.comments,
                submitted=False,
                submitted_at=None,
                timestamp=existing.timestamp if existing else now,
                last_saved=now,
            )
        )
        self._invalidate(event.id)

        logger.debug(
            "score_draft_saved",
            event_id=event.id,
            candidate_id=candidate.id,
            judge_id=actor.id,
        )
        return DraftSaveResult(record=record, saved=True, message="Draft saved")

    def unsubmit(self, candidate_id: str, actor: Actor) -> ScoreRecordResponse:
        """Return the judge's submitted record to draft so it can be edited."""
        candidate, event = self._open_event(candidate_id)
        existing = self.scores.get_for_judge(event.id, candidate.id, actor.id)
        if existing is None:
            raise EntityNotFoundException(
                ScoreRepository.ENTITY_NAME, self.scores.record_id(event.id, candidate.id, actor.id)
            )
        if not existing.submitted:
            return existing

        record = self.scores.save(
            existing.model_copy(
                update={"submitted": False, "submitted_at": None, "last_saved": self.scores.now()}
            )
        )
        self._invalidate(event.id)

        logger.info(
            "score_unsubmitted",
            event_id=event.id,
            candidate_id=candidate.id,
            judge_id=actor.id,
        )
        return record

    def status(self, candidate_id: str, actor: Actor) -> SubmissionStatus:
        self.candidates.require(candidate_id)
        return _to_status(self.scores.find_for_judge(candidate_id, actor.id))

    def batch_status(self, candidate_ids: List[str], actor: Actor) -> BatchStatusResponse:
        """Status per candidate; unknown candidates report no scores."""
        return BatchStatusResponse(
            statuses={
                candidate_id: _to_status(self.scores.find_for_judge(candidate_id, actor.id))
                for candidate_id in dict.fromkeys(candidate_ids)
            }
        )

    def list_for_candidate(self, candidate_id: str) -> List[ScoreRecordResponse]:
        self.candidates.require(candidate_id)
        return self.scores.list_for_candidate(candidate_id)


def _to_status(record: Optional[ScoreRecordResponse]) -> SubmissionStatus:
    if record is None:
        return SubmissionStatus()
    return SubmissionStatus(
        submitted=record.submitted,
        has_scores=True,
        scores=record.scores,
        comments=record.comments,
    )
