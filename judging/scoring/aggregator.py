# judging/scoring/aggregator.py
"""
Trimmed-Mean Aggregator
-----------------------
Combines the submitted score records of one candidate into per-category
averages.

Formula (per category, n = number of submitted records):
    n <= 2 : average = Σ values / n
    n  > 2 : drop one lowest and one highest value, average the rest
    total  = Σ category averages          in [0, 32]

Variance is the population variance of each judge's raw total. It is
reported next to the average and never feeds the ranking.
"""
import structlog
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping

from judging.config import CATEGORY_MAX_SCORES
from judging.scoring.utils import (
    coerce_score,
    population_variance,
    trimmed_mean,
)

logger = structlog.get_logger(__name__)

CATEGORIES: List[str] = list(CATEGORY_MAX_SCORES)


@dataclass
class AggregationResult:
    """Output of TrimmedMeanAggregator.aggregate()."""
    category_averages: Dict[str, Decimal]
    category_variances: Dict[str, Decimal]
    total_average: Decimal       # Σ category averages, in [0, 32]
    total_variance: Decimal      # population variance of per-judge totals
    judge_count: int
    judge_totals: List[Decimal] = field(default_factory=list)

    def averages_as_floats(self) -> Dict[str, float]:
        return {c: float(v) for c, v in self.category_averages.items()}

    def variances_as_floats(self) -> Dict[str, float]:
        return {c: float(v) for c, v in self.category_variances.items()}


def _category_values(score_maps: Iterable[Mapping[str, Any]]) -> Dict[str, List[Decimal]]:
    values: Dict[str, List[Decimal]] = {c: [] for c in CATEGORIES}
    for scores in score_maps:
        for category in CATEGORIES:
            values[category].append(
                coerce_score(scores.get(category), CATEGORY_MAX_SCORES[category])
            )
    return values


class TrimmedMeanAggregator:
    """Aggregate submitted judge scores for one candidate."""

    def aggregate(self, score_maps: List[Mapping[str, Any]], candidate_id: str = "") -> AggregationResult:
        """
        Args:
            score_maps: Category mappings of the candidate's submitted records,
                        one per judge. Missing or malformed categories count as 0.
            candidate_id: Used for logging only.

        Returns:
            AggregationResult; all zeros with judge_count 0 for an empty input.
        """
        qualifying = len(score_maps)
        values = _category_values(score_maps)

        averages = {c: trimmed_mean(values[c], qualifying) for c in CATEGORIES}
        variances = {c: population_variance(values[c]) for c in CATEGORIES}
        total = sum(averages.values(), Decimal("0"))

        judge_totals = [
            sum((values[c][i] for c in CATEGORIES), Decimal("0"))
            for i in range(qualifying)
        ]
        total_variance = population_variance(judge_totals)

        logger.debug(
            "scores_aggregated",
            candidate_id=candidate_id,
            judge_count=qualifying,
            trimmed=qualifying > 2,
            total_average=float(total),
            total_variance=float(total_variance),
        )

        return AggregationResult(
            category_averages=averages,
            category_variances=variances,
            total_average=total,
            total_variance=total_variance,
            judge_count=qualifying,
            judge_totals=judge_totals,
        )

    def aggregate_records(self, records: Iterable[Any], candidate_id: str = "") -> AggregationResult:
        """Aggregate ScoreRecord objects, ignoring drafts."""
        score_maps = [
            r.scores.model_dump() for r in records if getattr(r, "submitted", False)
        ]
        return self.aggregate(score_maps, candidate_id=candidate_id)
