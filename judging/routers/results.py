"""
Results Router - Audition Judging Platform
judging/routers/results.py

Ranked results and level suggestions for an event.
"""

from fastapi import APIRouter, Depends

from judging.config import settings
from judging.core.dependencies import get_results_service
from judging.models.results import EventResults, SuggestedLevels
from judging.services.results_service import ResultsService

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Results"])


@router.get(
    "/events/{event_id}/results",
    response_model=EventResults,
    summary="Ranked results for an event",
    description=(
        "Trimmed-mean category averages, variances, totals and ranks per "
        f"candidate. Cached for {settings.CACHE_TTL_RESULTS}s."
    ),
)
def get_results(
    event_id: str,
    service: ResultsService = Depends(get_results_service),
) -> EventResults:
    return service.get_results(event_id)


@router.get(
    "/events/{event_id}/results/suggested-levels",
    response_model=SuggestedLevels,
    summary="Level suggestions by rank",
)
def get_suggested_levels(
    event_id: str,
    service: ResultsService = Depends(get_results_service),
) -> SuggestedLevels:
    return service.suggest_levels(event_id)
