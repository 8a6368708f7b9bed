from judging.scoring.aggregator import AggregationResult, TrimmedMeanAggregator
from judging.scoring.ranker import rank, rank_totals

__all__ = ["AggregationResult", "TrimmedMeanAggregator", "rank", "rank_totals"]
