from judging.repositories.base import TenantRepository
from judging.repositories.candidate_repository import CandidateRepository
from judging.repositories.deliberation_repository import DeliberationRepository
from judging.repositories.event_repository import EventRepository
from judging.repositories.roster_repository import RosterRepository
from judging.repositories.score_repository import ScoreRepository

__all__ = [
    "TenantRepository",
    "EventRepository",
    "CandidateRepository",
    "ScoreRepository",
    "RosterRepository",
    "DeliberationRepository",
]
