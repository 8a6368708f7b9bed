from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from datetime import datetime, timezone
from typing import Dict, List, Optional

from judging.config import CATEGORY_MAX_SCORES
from judging.scoring.utils import coerce_score


class CategoryScores(BaseModel):
    """
    The six rubric categories.

    Input is lenient: missing or non-numeric values become 0 and numeric
    values are clamped to the category maximum instead of being rejected.
    """

    model_config = ConfigDict(extra="ignore")

    kick: float = 0.0
    jump: float = 0.0
    turn: float = 0.0
    performance: float = 0.0
    execution: float = 0.0
    technique: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def coerce_category(cls, v, info: ValidationInfo) -> float:
        return float(coerce_score(v, CATEGORY_MAX_SCORES[info.field_name]))

    @property
    def total(self) -> float:
        return sum(getattr(self, c) for c in CATEGORY_MAX_SCORES)


class ScoreSubmission(BaseModel):
    """
    Payload for submitting (or re-saving) a judge's score for a candidate.
    """

    candidate_id: str = Field(..., min_length=1)
    scores: CategoryScores = Field(default_factory=CategoryScores)
    comments: str = Field(default="", max_length=5000)
    submitted: bool = Field(default=True, description="False keeps the record as a draft")

    @field_validator("scores", mode="before")
    @classmethod
    def tolerate_missing_scores(cls, v):
        return v if isinstance(v, (dict, CategoryScores)) else {}


class ScoreDraft(BaseModel):
    """
    Payload for auto-saving a draft.
    """

    scores: CategoryScores = Field(default_factory=CategoryScores)
    comments: str = Field(default="", max_length=5000)

    @field_validator("scores", mode="before")
    @classmethod
    def tolerate_missing_scores(cls, v):
        return v if isinstance(v, (dict, CategoryScores)) else {}


class ScoreRecordResponse(BaseModel):
    """
    One judge's evaluation of one candidate, as stored in score_records.
    """

    id: str
    organization_id: str
    event_id: str
    candidate_id: str
    judge_id: str
    judge_name: str = ""
    scores: CategoryScores = Field(default_factory=CategoryScores)
    comments: str = ""
    submitted: bool = False
    submitted_at: Optional[datetime] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_saved: Optional[datetime] = None

    @field_validator("scores", mode="before")
    @classmethod
    def tolerate_missing_scores(cls, v):
        return v if isinstance(v, (dict, CategoryScores)) else {}

    @property
    def total(self) -> float:
        return self.scores.total


class DraftSaveResult(BaseModel):
    record: ScoreRecordResponse
    saved: bool
    message: str


class SubmissionStatus(BaseModel):
    """
    Whether the calling judge has a draft or final score for a candidate.
    """

    submitted: bool = False
    has_scores: bool = False
    scores: Optional[CategoryScores] = None
    comments: Optional[str] = None


class BatchStatusRequest(BaseModel):
    candidate_ids: List[str] = Field(default_factory=list)


class BatchStatusResponse(BaseModel):
    statuses: Dict[str, SubmissionStatus] = Field(default_factory=dict)
