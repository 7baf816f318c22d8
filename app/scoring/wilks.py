"""
Scoring engine — body-weight-normalized score, 1RM estimation and rank lookup.

Normalized score
----------------
The score is the men's Wilks formula: a quintic polynomial in bodyweight
gives the denominator of a coefficient, and the lifted total is scaled by
that coefficient::

    P(bw)  = a + b·bw + c·bw² + d·bw³ + e·bw⁴ + f·bw⁵
    score  = total × 500 / P(bw)

Accepted bodyweights are 40 kg ≤ bw ≤ 635 kg.  This departs from the
raw formula above 201.9 kg: there ``P`` is evaluated at 201.9 kg instead
of the actual bodyweight, because the raw quintic crosses zero near
290 kg and would give negative or infinite scores.  Inside the
common 50-120 kg band lighter lifters get a larger coefficient; the curve
is *not* monotonic across the full domain.

One-rep max
-----------
Epley's estimator ``1RM = w × (1 + reps / 30)``, valid for 1-30 reps.  A
single is returned unchanged (no extrapolation at the measured point).

Ranks
-----
Ranks come from :data:`~app.scoring.rank_table.RANK_TABLE`.  Scores that
are negative, zero or NaN fall through to the lowest tier instead of
raising.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from app.core.exceptions import DomainRangeError
from app.scoring.rank_table import RANK_TABLE, RankInfo, RankProgress, rank_index

# ======================================================================
# Constants
# ======================================================================

WILKS_COEFFICIENTS: dict[str, float] = {
    "a": -216.0475144,
    "b": 16.2606339,
    "c": -0.002388645,
    "d": -0.00113732,
    "e": 7.01863e-6,
    "f": -1.291e-8,
}

BODYWEIGHT_MIN_KG = 40.0
BODYWEIGHT_MAX_KG = 635.0

# The quintic turns over and crosses zero near 290 kg; heavier lifters
# are scored at this bodyweight, as in competition Wilks tables
POLYNOMIAL_BODYWEIGHT_CAP_KG = 201.9

REPS_MIN = 1
REPS_MAX = 30


# ======================================================================
# Helpers
# ======================================================================


def round_half_away(value: float, digits: int) -> float:
    """Round to *digits* decimals with ties going away from zero.

    Goes through :class:`~decimal.Decimal` on the shortest repr of the
    float so ``116.65`` rounds to ``116.7`` rather than the binary
    neighbour's ``116.6``.  Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(repr(value))
    with localcontext() as ctx:
        # Room for every integer digit plus the kept decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 3)
        quantum = Decimal(1).scaleb(-digits)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def wilks_denominator(bodyweight_kg: float) -> float:
    """Evaluate the quintic ``P(bw)``."""
    c = WILKS_COEFFICIENTS
    bw = bodyweight_kg
    return (c["a"] + c["b"] * bw + c["c"] * bw ** 2 + c["d"] * bw ** 3 + c["e"] * bw ** 4 + c["f"] * bw ** 5)


# ======================================================================
# Public API
# ======================================================================


def compute_normalized_score(bodyweight_kg: float, total_kg: float) -> float:
    """Body-weight-normalized score for a lifted total.

    Args:
        bodyweight_kg: Athlete bodyweight, 40-635 kg.
        total_kg: Sum of bench, squat and deadlift 1RMs, > 0.

    Returns:
        Score rounded to 2 decimals.

    Raises:
        DomainRangeError: If either argument is outside its valid range.
    """
    if not BODYWEIGHT_MIN_KG <= bodyweight_kg <= BODYWEIGHT_MAX_KG:
        raise DomainRangeError("bodyweight_kg", bodyweight_kg,
                               f"between {BODYWEIGHT_MIN_KG:g} and {BODYWEIGHT_MAX_KG:g} kg")
    if not (total_kg > 0 and math.isfinite(total_kg)):
        raise DomainRangeError("total_kg", total_kg, "a finite value greater than 0 kg")

    coefficient = 500.0 / wilks_denominator(min(bodyweight_kg, POLYNOMIAL_BODYWEIGHT_CAP_KG))
    score = total_kg * coefficient
    if not math.isfinite(score):
        raise DomainRangeError("total_kg", total_kg, "small enough for a finite score")
    return round_half_away(score, 2)


def estimate_one_rep_max(weight_kg: float, reps: int) -> float:
    """Epley one-rep-max estimate.

    Raises:
        DomainRangeError: If ``reps`` is outside 1-30 or ``weight_kg <= 0``.
    """
    if not REPS_MIN <= reps <= REPS_MAX:
        raise DomainRangeError("reps", reps, f"between {REPS_MIN} and {REPS_MAX}")
    if not (weight_kg > 0 and math.isfinite(weight_kg)):
        raise DomainRangeError("weight_kg", weight_kg, "a finite value greater than 0 kg")

    if reps == 1:
        return weight_kg
    estimate = weight_kg * (1 + reps / 30)
    if not math.isfinite(estimate):
        raise DomainRangeError("weight_kg", weight_kg, "small enough for a finite estimate")
    return round_half_away(estimate, 1)


def lookup_rank(score: float) -> RankInfo:
    """Return the tier containing *score*.

    Scans from the top tier down and returns the first tier whose
    ``min_score <= score``.  Anything below the lowest bound (including
    NaN) maps to the lowest tier.
    """
    for rank in reversed(RANK_TABLE):
        if score >= rank.min_score:
            return rank
    return RANK_TABLE[0]


def progress_to_next(score: float) -> RankProgress:
    """Progress through the current tier towards the next one.

    The top tier is terminal: ``next_rank`` is ``None``, progress is 100
    and no points are missing.
    """
    # NaN and -inf have no position inside a tier
    if math.isnan(score) or score == -math.inf:
        score = 0.0

    current = lookup_rank(score)
    index = rank_index(current.tier)

    if current.max_score is None or index == len(RANK_TABLE) - 1:
        return RankProgress(current_rank=current, next_rank=None, progress_percent=100.0, points_to_next=0.0)

    span = current.max_score - current.min_score
    percent = min(100.0, max(0.0, (score - current.min_score) / span * 100))
    points = max(0.0, current.max_score - score)

    return RankProgress(current_rank=current, next_rank=RANK_TABLE[index + 1],
                        progress_percent=round_half_away(percent, 1), points_to_next=round_half_away(points, 2), )
