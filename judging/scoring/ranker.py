# judging/scoring/ranker.py
"""
Ranker
------
Orders candidates by total average, highest first, and assigns ranks.

    positional : ties keep their sort position   30, 22, 22, 10 -> 1, 2, 3, 4
    tie_aware  : competition ranking             30, 22, 22, 10 -> 1, 2, 2, 4

The sort is stable, so tied candidates keep their input order (callers pass
candidates ordered by audition number).
"""
from decimal import Decimal
from typing import Callable, List, Sequence, Tuple, TypeVar, Union

from judging.models.enumerations import RankingMode

T = TypeVar("T")

Number = Union[Decimal, float, int]


def rank(
    items: Sequence[T],
    key: Callable[[T], Number],
    mode: RankingMode = RankingMode.POSITIONAL,
) -> List[Tuple[int, T]]:
    """
    Args:
        items: Candidates in tie-break order.
        key: Returns the total average used for ordering.
        mode: Tie handling.

    Returns:
        (rank, item) pairs, best first. Ranks start at 1.
    """
    ordered = sorted(items, key=lambda item: Decimal(str(key(item))), reverse=True)

    ranked: List[Tuple[int, T]] = []
    previous = None
    previous_rank = 0
    for position, item in enumerate(ordered, start=1):
        value = Decimal(str(key(item)))
        if RankingMode(mode) == RankingMode.TIE_AWARE and value == previous:
            current = previous_rank
        else:
            current = position
        ranked.append((current, item))
        previous, previous_rank = value, current
    return ranked


def rank_totals(totals: Sequence[Number], mode: RankingMode = RankingMode.POSITIONAL) -> List[int]:
    """Ranks for a list of totals, returned in input order."""
    indexed = list(enumerate(totals))
    ranks = [0] * len(indexed)
    for r, (index, _) in rank(indexed, key=lambda pair: pair[1], mode=mode):
        ranks[index] = r
    return ranks
