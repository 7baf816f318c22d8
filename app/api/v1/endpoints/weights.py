"""
Bodyweight log endpoints.

Logging a weight replaces any entry for the same date and updates the
profile bodyweight.
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_repository
from app.db.repositories.records import RecordRepository
from app.schemas.weight import WeightEntry

router = APIRouter()


@router.get("", summary="List the weight log.", response_model=list[WeightEntry])
def list_weights(repository: RecordRepository = Depends(get_repository)):
    return repository.list_weights()


@router.post("", summary="Log a bodyweight.", response_model=WeightEntry, status_code=status.HTTP_201_CREATED)
def add_weight(entry: WeightEntry, repository: RecordRepository = Depends(get_repository)):
    return repository.add_weight(entry)
