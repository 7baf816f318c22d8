"""Business logic services."""

from app.services.nutrition_service import NutritionEstimator
from app.services.planning_service import PlanningAssistant
from app.services.stats_service import StatsAggregator
from app.services.training_service import CompletionResult, TrainingService

__all__ = [
    "CompletionResult",
    "NutritionEstimator",
    "PlanningAssistant",
    "StatsAggregator",
    "TrainingService",
]
