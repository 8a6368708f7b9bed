from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Dict, List, Optional


class LevelAssignmentsPayload(BaseModel):
    """
    Administrator level choices: {candidate_id: level label}.

    Candidates missing from the mapping fall back to the default level when
    the deliberation is submitted.
    """

    level_assignments: Dict[str, str] = Field(default_factory=dict)
    level_counts: Optional[Dict[str, int]] = None

    @field_validator("level_assignments")
    @classmethod
    def drop_blank_levels(cls, v: Dict[str, str]) -> Dict[str, str]:
        return {k: level.strip() for k, level in v.items() if level and level.strip()}


class DeliberationRecordResponse(BaseModel):
    """
    Saved deliberation session for an event, used to resume work.
    """

    id: Optional[str] = None
    organization_id: str
    event_id: str
    level_assignments: Dict[str, str] = Field(default_factory=dict)
    level_counts: Dict[str, int] = Field(default_factory=dict)
    submitted: bool = False
    submitted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


class TransferResult(BaseModel):
    """
    Outcome of a deliberation transfer.
    """

    event_id: str
    generation: str
    count: int = Field(..., ge=0, description="Candidates written to the roster")
    skipped: List[str] = Field(default_factory=list, description="Candidates whose write failed")
    message: str
