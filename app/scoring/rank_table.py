"""
Rank ladder — fourteen ordered tiers of normalized score.

Each tier covers the half-open interval ``[min_score, max_score)``.  The
last tier is unbounded (``max_score is None``).  Taken together the
intervals cover ``[0, inf)`` without gaps or overlaps:

    bronze1  [0, 80)      silver1 [160, 200)   gold1 [260, 290)
    bronze2  [80, 120)    silver2 [200, 230)   gold2 [290, 320)
    bronze3  [120, 160)   silver3 [230, 260)   gold3 [320, 350)

    platinum1 [350, 380)  gym_master  [440, 500)
    platinum2 [380, 410)  powerlifter [500, inf)
    platinum3 [410, 440)

The table is compiled-in domain data and never mutated at runtime.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RankTier(str, Enum):
    """Tier identifiers, lowest first."""
    BRONZE_1 = "bronze1"
    BRONZE_2 = "bronze2"
    BRONZE_3 = "bronze3"
    SILVER_1 = "silver1"
    SILVER_2 = "silver2"
    SILVER_3 = "silver3"
    GOLD_1 = "gold1"
    GOLD_2 = "gold2"
    GOLD_3 = "gold3"
    PLATINUM_1 = "platinum1"
    PLATINUM_2 = "platinum2"
    PLATINUM_3 = "platinum3"
    GYM_MASTER = "gym_master"
    POWERLIFTER = "powerlifter"


class RankInfo(BaseModel):
    """One rung of the ladder plus its display metadata."""

    model_config = ConfigDict(frozen=True)

    tier: RankTier
    label: str = Field(..., description="English display label")
    label_ja: str = Field(..., description="Japanese display label")
    min_score: float = Field(..., ge=0.0, description="Inclusive lower bound")
    max_score: Optional[float] = Field(None, description="Exclusive upper bound (None = unbounded)")
    color: str
    glow_color: str
    icon: str

    @property
    def is_top(self) -> bool:
        return self.max_score is None

    def contains(self, score: float) -> bool:
        """Whether *score* falls inside ``[min_score, max_score)``."""
        if score < self.min_score:
            return False
        return self.max_score is None or score < self.max_score


class RankProgress(BaseModel):
    """Position of a score inside its tier and distance to the next one."""

    current_rank: RankInfo
    next_rank: Optional[RankInfo] = Field(None, description="None when the current tier is the top tier")
    progress_percent: float = Field(..., ge=0.0, le=100.0, description="Progress through the current tier (0-100)")
    points_to_next: float = Field(..., ge=0.0, description="Score still missing to reach the next tier")


def _rank(tier: RankTier, label: str, label_ja: str, min_score: float, max_score: Optional[float],
          color: str, glow_color: str, icon: str, ) -> RankInfo:
    return RankInfo(tier=tier, label=label, label_ja=label_ja, min_score=min_score, max_score=max_score,
                    color=color, glow_color=glow_color, icon=icon, )


_BRONZE = ("#cd7f32", "rgba(205,127,50,0.5)", "🥉")
_SILVER = ("#c0c0c0", "rgba(192,192,192,0.5)", "🥈")
_GOLD = ("#ffd700", "rgba(255,215,0,0.5)", "🥇")
_PLATINUM = ("#e5e4e2", "rgba(229,228,226,0.7)", "💎")

RANK_TABLE: tuple[RankInfo, ...] = (
    _rank(RankTier.BRONZE_1, "Bronze I", "ブロンズ I", 0, 80, *_BRONZE),
    _rank(RankTier.BRONZE_2, "Bronze II", "ブロンズ II", 80, 120, *_BRONZE),
    _rank(RankTier.BRONZE_3, "Bronze III", "ブロンズ III", 120, 160, "#b87333", "rgba(184,115,51,0.5)", "🥉"),
    _rank(RankTier.SILVER_1, "Silver I", "シルバー I", 160, 200, *_SILVER),
    _rank(RankTier.SILVER_2, "Silver II", "シルバー II", 200, 230, *_SILVER),
    _rank(RankTier.SILVER_3, "Silver III", "シルバー III", 230, 260, "#a8a9ad", "rgba(168,169,173,0.5)", "🥈"),
    _rank(RankTier.GOLD_1, "Gold I", "ゴールド I", 260, 290, *_GOLD),
    _rank(RankTier.GOLD_2, "Gold II", "ゴールド II", 290, 320, *_GOLD),
    _rank(RankTier.GOLD_3, "Gold III", "ゴールド III", 320, 350, "#f0c000", "rgba(240,192,0,0.5)", "🥇"),
    _rank(RankTier.PLATINUM_1, "Platinum I", "プラチナ I", 350, 380, *_PLATINUM),
    _rank(RankTier.PLATINUM_2, "Platinum II", "プラチナ II", 380, 410, *_PLATINUM),
    _rank(RankTier.PLATINUM_3, "Platinum III", "プラチナ III", 410, 440, "#d0d0e8", "rgba(208,208,232,0.7)", "💎"),
    _rank(RankTier.GYM_MASTER, "Gym Master", "ジムの主", 440, 500, "#ff4500", "rgba(255,69,0,0.6)", "👑"),
    _rank(RankTier.POWERLIFTER, "Powerlifter", "パワーリフター", 500, None, "#a855f7", "rgba(168,85,247,0.7)", "⚡"),
)


def rank_index(tier: RankTier) -> int:
    """Position of *tier* in :data:`RANK_TABLE`."""
    for i, rank in enumerate(RANK_TABLE):
        if rank.tier == tier:
            return i
    raise KeyError(f"Unknown tier: {tier!r}")


def get_rank(tier: RankTier) -> RankInfo:
    return RANK_TABLE[rank_index(tier)]
