"""
Candidate Router - Audition Judging Platform
judging/routers/candidates.py

Candidate registration, listing and group assignment.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from judging.config import settings
from judging.core.dependencies import get_candidate_service
from judging.models.candidate import (
    AutoGroupRequest,
    CandidateCreate,
    CandidateResponse,
    GroupAssignmentResult,
    GroupAssignments,
)
from judging.models.common import MessageResponse
from judging.services.candidate_service import CandidateService

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Candidates"])


@router.post(
    "/events/{event_id}/candidates",
    response_model=CandidateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a candidate",
)
def register_candidate(
    event_id: str,
    payload: CandidateCreate,
    service: CandidateService = Depends(get_candidate_service),
) -> CandidateResponse:
    return service.register(event_id, payload)


@router.get(
    "/events/{event_id}/candidates",
    response_model=List[CandidateResponse],
    summary="List candidates of an event",
    description="Ordered by audition number.",
)
def list_candidates(
    event_id: str,
    service: CandidateService = Depends(get_candidate_service),
) -> List[CandidateResponse]:
    return service.list_for_event(event_id)


@router.post(
    "/events/{event_id}/candidates/groups",
    response_model=GroupAssignmentResult,
    summary="Assign groups to candidates",
)
def assign_groups(
    event_id: str,
    payload: GroupAssignments,
    service: CandidateService = Depends(get_candidate_service),
) -> GroupAssignmentResult:
    return service.assign_groups(event_id, payload)


@router.post(
    "/events/{event_id}/candidates/auto-groups",
    response_model=GroupAssignmentResult,
    summary="Assign groups by audition number range",
)
def auto_assign_groups(
    event_id: str,
    payload: AutoGroupRequest,
    service: CandidateService = Depends(get_candidate_service),
) -> GroupAssignmentResult:
    return service.auto_assign_groups(event_id, payload)


@router.delete(
    "/candidates/{candidate_id}",
    response_model=MessageResponse,
    summary="Delete a candidate",
    description="Deletes the candidate and its score records.",
)
def delete_candidate(
    candidate_id: str,
    service: CandidateService = Depends(get_candidate_service),
) -> MessageResponse:
    service.delete(candidate_id)
    return MessageResponse(message=f"Candidate {candidate_id} deleted")
