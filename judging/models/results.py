from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from judging.models.enumerations import RankingMode
from judging.models.score import CategoryScores


class CategoryVariances(BaseModel):
    """
    Population variance of the judges' values per category.

    Not clamped: a 0-8 category can reach a variance of 16.
    """

    kick: float = Field(default=0.0, ge=0)
    jump: float = Field(default=0.0, ge=0)
    turn: float = Field(default=0.0, ge=0)
    performance: float = Field(default=0.0, ge=0)
    execution: float = Field(default=0.0, ge=0)
    technique: float = Field(default=0.0, ge=0)


class JudgeScoreBreakdown(BaseModel):
    """
    One judge's raw category values for a candidate.
    """

    judge_id: str
    judge_name: str = ""
    scores: CategoryScores
    total: float
    comments: str = ""
    submitted_at: Optional[datetime] = None


class CandidateResult(BaseModel):
    """
    Aggregated scores and rank for one candidate (derived, not persisted).
    """

    candidate_id: str
    name: str
    audition_number: int
    group: str = "Unassigned"
    averages: CategoryScores = Field(default_factory=CategoryScores)
    variances: CategoryVariances = Field(default_factory=CategoryVariances)
    total_average: float = Field(default=0.0, ge=0, le=32)
    total_variance: float = Field(default=0.0, ge=0)
    judge_count: int = Field(default=0, ge=0)
    rank: int = Field(default=0, ge=0)
    individual_scores: List[JudgeScoreBreakdown] = Field(default_factory=list)


class EventResults(BaseModel):
    """
    Ranked results for an audition event; also the cached payload.
    """

    event_id: str
    organization_id: str
    ranking_mode: RankingMode = RankingMode.POSITIONAL
    results: List[CandidateResult] = Field(default_factory=list)
    computed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SuggestedLevels(BaseModel):
    """
    Level pre-assignment by rank, used to seed a deliberation session.
    """

    event_id: str
    level_assignments: Dict[str, str] = Field(default_factory=dict)
    level_counts: Dict[str, int] = Field(default_factory=dict)
