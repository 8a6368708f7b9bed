from enum import Enum

class EventStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"

class JudgeRole(str, Enum):
    JUDGE = "judge"
    ADMIN = "admin"
    SECRETARY = "secretary"

class ScoreCategory(str, Enum):
    KICK = "kick"                # 0-4
    JUMP = "jump"                # 0-4
    TURN = "turn"                # 0-4
    PERFORMANCE = "performance"  # 0-4
    EXECUTION = "execution"      # 0-8
    TECHNIQUE = "technique"      # 0-8

class Collection(str, Enum):
    AUDITION_EVENTS = "audition_events"
    CANDIDATES = "candidates"
    SCORE_RECORDS = "score_records"
    ROSTER_MEMBERS = "roster_members"
    DELIBERATIONS = "deliberations"

class TransferPolicy(str, Enum):
    BEST_EFFORT = "best_effort"  # log and skip failed candidates
    FAIL_FAST = "fail_fast"      # abort and roll back on first failure

class RankingMode(str, Enum):
    POSITIONAL = "positional"    # 30, 22, 22, 10 -> 1, 2, 3, 4
    TIE_AWARE = "tie_aware"      # 30, 22, 22, 10 -> 1, 2, 2, 4
