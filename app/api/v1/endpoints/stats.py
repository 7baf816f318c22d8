"""
Stats endpoints: score, tier progress and history summaries.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_aggregator
from app.schemas.stats import DayNutritionSummary, SessionSummary, StatsResponse
from app.schemas.weight import WeightEntry
from app.services.stats_service import StatsAggregator

router = APIRouter()


@router.get("", summary="Get the normalized score and rank progress.", response_model=StatsResponse)
def get_stats(aggregator: StatsAggregator = Depends(get_aggregator)):
    return aggregator.compute_stats()


@router.get("/sessions", summary="Summaries of the most recent sessions.", response_model=list[SessionSummary], )
def get_recent_sessions(limit: int = Query(7, ge=1, le=100), aggregator: StatsAggregator = Depends(get_aggregator)):
    return aggregator.recent_sessions(limit)


@router.get("/nutrition", summary="Daily nutrition totals against the kcal target.",
            response_model=list[DayNutritionSummary], )
def get_nutrition(day: Optional[datetime.date] = Query(None, description="Single day (defaults to recent days)"),
                  limit: int = Query(7, ge=1, le=100), aggregator: StatsAggregator = Depends(get_aggregator), ):
    if day:
        return [aggregator.nutrition_for_day(day)]
    return aggregator.recent_nutrition(limit)


@router.get("/weights", summary="Recent bodyweight trend, oldest first.", response_model=list[WeightEntry])
def get_weight_trend(limit: int = Query(14, ge=1, le=365), aggregator: StatsAggregator = Depends(get_aggregator)):
    return aggregator.weight_trend(limit)
