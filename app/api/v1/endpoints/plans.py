"""
Weekly menu and goal endpoints.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_repository
from app.db.repositories.records import RecordRepository
from app.schemas.goals import GoalData
from app.schemas.menu import WeeklyMenu

router = APIRouter()


@router.get("/menu", summary="Get the weekly menu templates.", response_model=WeeklyMenu)
def get_menu(repository: RecordRepository = Depends(get_repository)):
    return repository.get_weekly_menu()


@router.put("/menu", summary="Replace the weekly menu.", response_model=WeeklyMenu)
def update_menu(menu: WeeklyMenu, repository: RecordRepository = Depends(get_repository)):
    return repository.save_weekly_menu(menu)


@router.get("/goals", summary="Get the short, mid and long-term goals.", response_model=GoalData)
def get_goals(repository: RecordRepository = Depends(get_repository)):
    return repository.get_goals()


@router.put("/goals", summary="Replace the goals.", response_model=GoalData)
def update_goals(goals: GoalData, repository: RecordRepository = Depends(get_repository)):
    return repository.save_goals(goals)
