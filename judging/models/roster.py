from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Dict, Optional

from judging.models.results import JudgeScoreBreakdown
from judging.models.score import CategoryScores


class RosterMemberResponse(BaseModel):
    """
    A candidate committed to the roster by deliberation.
    """

    id: str
    organization_id: str
    event_id: str
    candidate_id: str
    generation: str = Field(..., description="Deliberation run that produced this record")

    name: str
    audition_number: int
    email: str = ""
    phone: str = ""
    shirt_size: str = ""
    group: str = "Unassigned"
    previous_member: bool = False
    previous_level: str = ""

    scores: Dict[str, JudgeScoreBreakdown] = Field(
        default_factory=dict, description="Per-judge breakdown keyed by judge ID"
    )
    averages: CategoryScores = Field(default_factory=CategoryScores)
    average_score: float = Field(default=0.0, ge=0, le=32)
    judge_count: int = Field(default=0, ge=0)
    rank: int = Field(default=0, ge=0)
    level: str

    event_name: str = ""
    event_date: Optional[str] = None
    transferred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    transferred_by: str
