"""
Shared API dependencies.

Reusable FastAPI dependencies wiring the process-wide record repository
and the collaborator services built on it.
"""

from typing import Any

from fastapi import Depends, HTTPException, Request, status

from app.core.config import settings
from app.db.repositories.records import RecordRepository
from app.services.nutrition_service import NutritionEstimator
from app.services.planning_service import PlanningAssistant
from app.services.stats_service import StatsAggregator
from app.services.training_service import TrainingService


def get_repository(request: Request) -> RecordRepository:
    """The repository created in the application lifespan."""
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Store not initialised", )
    if not repository.is_hydrated:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Store is still loading", )
    return repository


def get_llm_client(request: Request) -> Any:
    client = getattr(request.app.state, "llm_client", None)
    if client is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Assistant not configured", )
    return client


def get_aggregator(repository: RecordRepository = Depends(get_repository)) -> StatsAggregator:
    return StatsAggregator(repository, kcal_target=settings.DAILY_KCAL_TARGET)


def get_training_service(repository: RecordRepository = Depends(get_repository)) -> TrainingService:
    return TrainingService(repository, strict_one_rep_max=settings.STRICT_ONE_REP_MAX)


def get_nutrition_estimator(client: Any = Depends(get_llm_client)) -> NutritionEstimator:
    return NutritionEstimator(client, model=settings.NUTRITION_MODEL, max_tokens=settings.NUTRITION_MAX_TOKENS)


def get_planning_assistant(repository: RecordRepository = Depends(get_repository),
                           aggregator: StatsAggregator = Depends(get_aggregator),
                           client: Any = Depends(get_llm_client), ) -> PlanningAssistant:
    return PlanningAssistant(client, repository, aggregator, model=settings.CHAT_MODEL,
                             max_tokens=settings.CHAT_MAX_TOKENS, )
