"""Scoring engine — normalized score, 1RM estimate, rank ladder."""

from app.scoring.rank_table import RANK_TABLE, RankInfo, RankProgress, RankTier
from app.scoring.wilks import compute_normalized_score, estimate_one_rep_max, lookup_rank, progress_to_next

__all__ = [
    "RANK_TABLE",
    "RankInfo",
    "RankProgress",
    "RankTier",
    "compute_normalized_score",
    "estimate_one_rep_max",
    "lookup_rank",
    "progress_to_next",
]
