from pydantic import BaseModel, Field, field_validator
from datetime import date as EventDate, datetime, timezone
from typing import Optional

from judging.models.enumerations import EventStatus


class EventBase(BaseModel):
    """
    Base Pydantic model for an audition event.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name of the audition round"
    )

    date: EventDate = Field(
        ...,
        description="Date the audition takes place"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Event name must not be blank")
        return v


class EventCreate(EventBase):
    """
    Model for creating a new audition event.
    """
    pass


class EventResponse(EventBase):
    """
    Model stored in the audition_events collection and returned by the API.
    """

    id: str = Field(..., description="Audition event identifier")
    organization_id: str = Field(..., description="Owning organization")

    status: EventStatus = Field(
        default=EventStatus.DRAFT,
        description="Lifecycle status: draft, active, completed, archived"
    )

    candidate_count: int = Field(default=0, ge=0)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Record creation timestamp (UTC)"
    )
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None
    archived_at: Optional[datetime] = None
    archived_by: Optional[str] = None


class StatusUpdate(BaseModel):
    """
    Model for changing an audition event's status.
    """

    status: EventStatus = Field(
        ...,
        description="New status for the audition event"
    )
