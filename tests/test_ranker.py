"""
Ranker Tests - Audition Judging Platform
tests/test_ranker.py
"""
from decimal import Decimal

from judging.models.enumerations import RankingMode
from judging.scoring.ranker import rank, rank_totals


class TestPositionalRanking:
    """Default mode: ties keep consecutive ranks by position."""

    def test_tied_totals_get_consecutive_ranks(self):
        assert rank_totals([30, 22, 22, 10]) == [1, 2, 3, 4]

    def test_ranks_returned_in_input_order(self):
        assert rank_totals([10, 30, 22]) == [3, 1, 2]

    def test_tie_break_keeps_input_order(self):
        items = [("first", 22), ("second", 22), ("third", 30)]
        ranked = rank(items, key=lambda item: item[1])
        assert [(r, name) for r, (name, _) in ranked] == [
            (1, "third"),
            (2, "first"),
            (3, "second"),
        ]

    def test_all_zero_totals_still_ranked(self):
        assert rank_totals([0, 0, 0]) == [1, 2, 3]

    def test_empty(self):
        assert rank_totals([]) == []

    def test_decimal_and_float_keys_compare_equal(self):
        assert rank_totals([Decimal("22.5"), 22.5], mode=RankingMode.TIE_AWARE) == [1, 1]


class TestTieAwareRanking:
    """Alternative mode: standard competition ranking."""

    def test_ties_share_rank_and_next_rank_skips(self):
        assert rank_totals([30, 22, 22, 10], mode=RankingMode.TIE_AWARE) == [1, 2, 2, 4]

    def test_accepts_mode_string(self):
        assert rank_totals([5, 5], mode="tie_aware") == [1, 1]

    def test_no_ties_matches_positional(self):
        totals = [12, 31, 7, 19]
        assert rank_totals(totals, mode=RankingMode.TIE_AWARE) == rank_totals(totals)
