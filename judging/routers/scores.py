"""
Score Router - Audition Judging Platform
judging/routers/scores.py

Judge score submission, draft auto-save, unsubmit and submission status.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from judging.config import settings
from judging.core.dependencies import get_score_service
from judging.core.tenant import Actor, get_actor
from judging.models.score import (
    BatchStatusRequest,
    BatchStatusResponse,
    DraftSaveResult,
    ScoreDraft,
    ScoreRecordResponse,
    ScoreSubmission,
    SubmissionStatus,
)
from judging.services.score_service import ScoreService

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Scores"])


@router.post(
    "/scores",
    response_model=ScoreRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit scores for a candidate",
    description=(
        "Creates or overwrites the calling judge's record. Category values are "
        "clamped to their range. A submitted record must be unsubmitted before "
        "it can be submitted again."
    ),
)
def submit_scores(
    payload: ScoreSubmission,
    actor: Actor = Depends(get_actor),
    service: ScoreService = Depends(get_score_service),
) -> ScoreRecordResponse:
    return service.submit(payload, actor)


@router.put(
    "/scores/draft/{candidate_id}",
    response_model=DraftSaveResult,
    summary="Auto-save draft scores",
)
def save_draft(
    candidate_id: str,
    payload: ScoreDraft,
    actor: Actor = Depends(get_actor),
    service: ScoreService = Depends(get_score_service),
) -> DraftSaveResult:
    return service.save_draft(candidate_id, payload, actor)


@router.put(
    "/scores/unsubmit/{candidate_id}",
    response_model=ScoreRecordResponse,
    summary="Unsubmit scores to allow edits",
)
def unsubmit_scores(
    candidate_id: str,
    actor: Actor = Depends(get_actor),
    service: ScoreService = Depends(get_score_service),
) -> ScoreRecordResponse:
    return service.unsubmit(candidate_id, actor)


@router.get(
    "/scores/status/{candidate_id}",
    response_model=SubmissionStatus,
    summary="Submission status for the calling judge",
)
def submission_status(
    candidate_id: str,
    actor: Actor = Depends(get_actor),
    service: ScoreService = Depends(get_score_service),
) -> SubmissionStatus:
    return service.status(candidate_id, actor)


@router.post(
    "/scores/status/batch",
    response_model=BatchStatusResponse,
    summary="Submission status for many candidates",
)
def batch_submission_status(
    payload: BatchStatusRequest,
    actor: Actor = Depends(get_actor),
    service: ScoreService = Depends(get_score_service),
) -> BatchStatusResponse:
    return service.batch_status(payload.candidate_ids, actor)


@router.get(
    "/scores/{candidate_id}",
    response_model=List[ScoreRecordResponse],
    summary="All judges' score records for a candidate",
)
def list_scores(
    candidate_id: str,
    service: ScoreService = Depends(get_score_service),
) -> List[ScoreRecordResponse]:
    return service.list_for_candidate(candidate_id)
