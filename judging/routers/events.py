"""
Audition Event Router - Audition Judging Platform
judging/routers/events.py

Event creation, listing and lifecycle changes.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from judging.config import settings
from judging.core.dependencies import get_event_service
from judging.core.tenant import Actor, get_actor
from judging.models.common import MessageResponse
from judging.models.enumerations import EventStatus
from judging.models.event import EventCreate, EventResponse, StatusUpdate
from judging.services.event_service import EventService

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Audition Events"])


@router.post(
    "/events",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an audition event",
    description="Creates an audition event in draft status. Name and date are required.",
)
def create_event(
    payload: EventCreate,
    actor: Actor = Depends(get_actor),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    return service.create(payload, actor)


@router.get(
    "/events",
    response_model=List[EventResponse],
    summary="List audition events",
    description="Lists the organization's events, newest first, with candidate counts.",
)
def list_events(
    status_filter: Optional[EventStatus] = Query(default=None, alias="status"),
    service: EventService = Depends(get_event_service),
) -> List[EventResponse]:
    return service.list_events(status_filter)


@router.get(
    "/events/{event_id}",
    response_model=EventResponse,
    summary="Get an audition event",
)
def get_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    return service.get(event_id)


@router.patch(
    "/events/{event_id}/status",
    response_model=EventResponse,
    summary="Change event status",
    description=(
        "Allowed: draft→active, active→draft, active→completed, completed→archived. "
        "Activating an event moves any other active event back to draft."
    ),
)
def change_event_status(
    event_id: str,
    payload: StatusUpdate,
    actor: Actor = Depends(get_actor),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    return service.change_status(event_id, payload.status, actor)


@router.post(
    "/events/{event_id}/archive",
    response_model=EventResponse,
    summary="Archive a completed event",
)
def archive_event(
    event_id: str,
    actor: Actor = Depends(get_actor),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    return service.archive(event_id, actor)


@router.delete(
    "/events/{event_id}",
    response_model=MessageResponse,
    summary="Delete an audition event",
    description="Deletes the event with its candidates and score records. Roster members are kept.",
)
def delete_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
) -> MessageResponse:
    removed = service.delete(event_id)
    return MessageResponse(message=f"Audition event {event_id} deleted", count=removed)
