"""
Meal log endpoints.
"""

import datetime

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_repository
from app.db.repositories.records import RecordRepository
from app.schemas.meal import DayMealRecord, MealEntry

router = APIRouter()


def _require_entry(repository: RecordRepository, date: datetime.date, entry_id: str) -> MealEntry:
    record = repository.get_day_meals(date)
    entry = next((e for e in record.entries if e.id == entry_id), None) if record else None
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                            detail=f"Meal entry '{entry_id}' not found on {date.isoformat()}", )
    return entry


@router.get("", summary="List day records, most recent first.", response_model=list[DayMealRecord])
def list_meals(repository: RecordRepository = Depends(get_repository)):
    return repository.list_meal_records()


@router.get("/{date}", summary="Get the meals logged on a date.", response_model=DayMealRecord)
def get_day_meals(date: datetime.date, repository: RecordRepository = Depends(get_repository)):
    return repository.get_day_meals(date) or DayMealRecord(date=date)


@router.post("/{date}", summary="Log a meal entry.", response_model=MealEntry, status_code=status.HTTP_201_CREATED, )
def add_meal(date: datetime.date, entry: MealEntry, repository: RecordRepository = Depends(get_repository)):
    return repository.add_meal_entry(date, entry)


@router.put("/{date}/{entry_id}", summary="Edit a meal entry.", response_model=MealEntry)
def update_meal(date: datetime.date, entry_id: str, entry: MealEntry,
                repository: RecordRepository = Depends(get_repository), ):
    _require_entry(repository, date, entry_id)
    return repository.update_meal_entry(date, entry.model_copy(update={"id": entry_id}))


@router.delete("/{date}/{entry_id}", summary="Delete a meal entry.", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal(date: datetime.date, entry_id: str, repository: RecordRepository = Depends(get_repository)):
    _require_entry(repository, date, entry_id)
    repository.remove_meal_entry(date, entry_id)
