"""
Unit tests for the rank ladder.
"""

import pytest

from app.scoring.rank_table import RANK_TABLE, RankTier, get_rank, rank_index


class TestRankTable:
    """Structural invariants of the compiled-in table."""

    def test_has_fourteen_tiers(self):
        assert len(RANK_TABLE) == 14

    def test_min_scores_strictly_increasing(self):
        mins = [r.min_score for r in RANK_TABLE]
        assert mins[0] == 0
        assert all(a < b for a, b in zip(mins, mins[1:]))

    def test_tiers_are_contiguous(self):
        for lower, upper in zip(RANK_TABLE, RANK_TABLE[1:]):
            assert lower.max_score == upper.min_score

    def test_only_last_tier_unbounded(self):
        assert RANK_TABLE[-1].max_score is None
        assert RANK_TABLE[-1].is_top
        assert all(r.max_score is not None for r in RANK_TABLE[:-1])

    def test_table_order_matches_enum(self):
        assert [r.tier for r in RANK_TABLE] == list(RankTier)

    def test_contains_is_half_open(self):
        silver = get_rank(RankTier.SILVER_1)
        assert silver.contains(160)
        assert silver.contains(199.99)
        assert not silver.contains(200)
        assert not silver.contains(159.99)

    def test_entries_are_immutable(self):
        with pytest.raises(Exception):
            RANK_TABLE[0].min_score = 10


class TestRankIndex:
    def test_index_of_each_tier(self):
        for i, rank in enumerate(RANK_TABLE):
            assert rank_index(rank.tier) == i

    def test_unknown_tier(self):
        with pytest.raises(KeyError):
            rank_index("mythic")
