"""
Deliberation Router - Audition Judging Platform
judging/routers/deliberations.py

Deliberation progress and transfer into the roster.
"""

from fastapi import APIRouter, Depends

from judging.config import settings
from judging.core.dependencies import get_deliberation_service
from judging.core.tenant import Actor, get_actor
from judging.models.deliberation import (
    DeliberationRecordResponse,
    LevelAssignmentsPayload,
    TransferResult,
)
from judging.services.deliberation_service import DeliberationService

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Deliberations"])


@router.get(
    "/deliberations/{event_id}",
    response_model=DeliberationRecordResponse,
    summary="Saved deliberation session",
    description="Returns an empty session when none has been saved.",
)
def get_deliberation(
    event_id: str,
    service: DeliberationService = Depends(get_deliberation_service),
) -> DeliberationRecordResponse:
    return service.get_progress(event_id)


@router.put(
    "/deliberations/{event_id}/progress",
    response_model=DeliberationRecordResponse,
    summary="Save deliberation progress",
)
def save_deliberation_progress(
    event_id: str,
    payload: LevelAssignmentsPayload,
    actor: Actor = Depends(get_actor),
    service: DeliberationService = Depends(get_deliberation_service),
) -> DeliberationRecordResponse:
    return service.save_progress(event_id, payload, actor)


@router.post(
    "/deliberations/{event_id}/submit",
    response_model=TransferResult,
    summary="Submit deliberation and transfer to the roster",
    description=(
        "Recomputes results, replaces the event's roster members with one per "
        "candidate at the assigned level and marks the event completed."
    ),
)
def submit_deliberation(
    event_id: str,
    payload: LevelAssignmentsPayload,
    actor: Actor = Depends(get_actor),
    service: DeliberationService = Depends(get_deliberation_service),
) -> TransferResult:
    return service.submit(event_id, payload, actor)
