from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime, timezone
from typing import Dict, List, Optional


class CandidateBase(BaseModel):
    """
    Registration fields for a candidate in one audition event.
    """

    name: str = Field(..., min_length=1, max_length=255)
    audition_number: int = Field(..., ge=0, description="Number worn at the audition")
    email: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=64)
    shirt_size: str = Field(default="", max_length=16)
    group: str = Field(default="Unassigned", max_length=64, description="Assigned sub-group")
    previous_member: bool = False
    previous_level: str = Field(default="", max_length=64)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Candidate name must not be blank")
        return v


class CandidateCreate(CandidateBase):
    """
    Model for registering a candidate.
    """
    pass


class CandidateResponse(CandidateBase):
    """
    Model stored in the candidates collection and returned by the API.
    """

    id: str
    organization_id: str
    event_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class GroupAssignments(BaseModel):
    """
    Explicit group per candidate: {candidate_id: group}.
    """

    assignments: Dict[str, str] = Field(..., min_length=1)


class GroupRange(BaseModel):
    """
    Audition numbers in [min_number, max_number] go to group_name.
    """

    group_name: str = Field(..., min_length=1, max_length=64)
    min_number: int = Field(..., ge=0)
    max_number: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.max_number < self.min_number:
            raise ValueError("max_number must be >= min_number")
        return self


class AutoGroupRequest(BaseModel):
    """
    Range-based group assignment; the first matching range wins.
    """

    ranges: List[GroupRange] = Field(..., min_length=1)


class GroupAssignmentResult(BaseModel):
    updated: int
    unmatched: List[str] = Field(default_factory=list)
