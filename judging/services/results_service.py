"""
Results Service - Audition Judging Platform
judging/services/results_service.py

Read model over score records: trimmed-mean aggregation per candidate, ranking
and level suggestions. Ranked results are cached in Redis per
(organization, event).
"""

import math
from collections import defaultdict
from typing import Dict, List, Optional

import redis
import structlog

from judging.config import settings
from judging.core.tenant import TenantContext
from judging.models.enumerations import RankingMode
from judging.models.results import (
    CandidateResult,
    EventResults,
    JudgeScoreBreakdown,
    SuggestedLevels,
)
from judging.models.score import ScoreRecordResponse
from judging.repositories import CandidateRepository, EventRepository, ScoreRepository
from judging.scoring.aggregator import TrimmedMeanAggregator
from judging.scoring.ranker import rank
from judging.services.cache import (
    TTL_RESULTS,
    invalidate_results,
    results_key,
    results_version_key,
)
from judging.services.redis_cache import RedisCache
from judging.store.base import DocumentStore

logger = structlog.get_logger(__name__)


def breakdown(record: ScoreRecordResponse) -> JudgeScoreBreakdown:
    return JudgeScoreBreakdown(
        judge_id=record.judge_id,
        judge_name=record.judge_name,
        scores=record.scores,
        total=record.total,
        comments=record.comments,
        submitted_at=record.submitted_at,
    )


class ResultsService:
    """Aggregated, ranked results for one organization's events."""

    def __init__(
        self,
        store: DocumentStore,
        tenant: TenantContext,
        cache: Optional[RedisCache] = None,
        ranking_mode: Optional[RankingMode] = None,
    ):
        self.tenant = tenant
        self.cache = cache
        self.ranking_mode = RankingMode(ranking_mode or settings.RANKING_MODE)
        self.events = EventRepository(store, tenant)
        self.candidates = CandidateRepository(store, tenant)
        self.scores = ScoreRepository(store, tenant)
        self.aggregator = TrimmedMeanAggregator()

    def compute(self, event_id: str) -> EventResults:
        """Aggregate and rank every candidate of the event straight from the store."""
        self.events.require(event_id)
        candidates = self.candidates.list_for_event(event_id)

        submitted: Dict[str, List[ScoreRecordResponse]] = defaultdict(list)
        for record in self.scores.list_for_event(event_id, submitted_only=True):
            submitted[record.candidate_id].append(record)

        unranked: List[CandidateResult] = []
        for candidate in candidates:
            records = submitted.get(candidate.id, [])
            agg = self.aggregator.aggregate_records(records, candidate_id=candidate.id)
            unranked.append(
                CandidateResult(
                    candidate_id=candidate.id,
                    name=candidate.name,
                    audition_number=candidate.audition_number,
                    group=candidate.group,
                    averages=agg.averages_as_floats(),
                    variances=agg.variances_as_floats(),
                    total_average=float(agg.total_average),
                    total_variance=float(agg.total_variance),
                    judge_count=agg.judge_count,
                    individual_scores=[breakdown(r) for r in records],
                )
            )

        ranked = [
            result.model_copy(update={"rank": position})
            for position, result in rank(unranked, key=lambda r: r.total_average, mode=self.ranking_mode)
        ]

        logger.info(
            "results_computed",
            organization_id=self.tenant.organization_id,
            event_id=event_id,
            candidates=len(ranked),
            ranking_mode=self.ranking_mode.value,
        )
        return EventResults(
            event_id=event_id,
            organization_id=self.tenant.organization_id,
            ranking_mode=self.ranking_mode,
            results=ranked,
        )

    def get_results(self, event_id: str) -> EventResults:
        """
        Ranked results, served from cache when present.

        The version is read before computing; an invalidation that lands
        during the computation moves readers to the next version.
        """
        self.events.require(event_id)
        organization_id = self.tenant.organization_id
        key = None

        if self.cache:
            try:
                version = self.cache.get_version(results_version_key(organization_id, event_id))
                key = results_key(organization_id, event_id, version)
                cached = self.cache.get(key, EventResults)
                if cached:
                    logger.debug("results_cache_hit", key=key)
                    return cached
            except (redis.RedisError, ValueError) as e:
                logger.warning("results_cache_read_failed", key=key, error=str(e))

        results = self.compute(event_id)

        if self.cache and key:
            try:
                self.cache.set(key, results, TTL_RESULTS)
            except redis.RedisError as e:
                logger.warning("results_cache_write_failed", key=key, error=str(e))

        return results

    def invalidate(self, event_id: str) -> None:
        invalidate_results(self.cache, self.tenant.organization_id, event_id)

    def suggest_levels(
        self, event_id: str, labels: Optional[List[str]] = None
    ) -> SuggestedLevels:
        """
        Pre-assign levels by rank.

        The ranked list is cut into contiguous chunks of ceil(n / len(labels)),
        best candidates in the first label.
        """
        labels = labels or settings.LEVEL_LABELS
        results = self.get_results(event_id).results
        per_level = max(1, math.ceil(len(results) / len(labels)))

        assignments: Dict[str, str] = {}
        counts: Dict[str, int] = {label: 0 for label in labels}
        for index, result in enumerate(results):
            label = labels[min(index // per_level, len(labels) - 1)]
            assignments[result.candidate_id] = label
            counts[label] += 1

        return SuggestedLevels(
            event_id=event_id,
            level_assignments=assignments,
            level_counts=counts,
        )
