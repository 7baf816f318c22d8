"""
Profile endpoints.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_repository
from app.db.repositories.records import RecordRepository
from app.schemas.profile import UserProfile

router = APIRouter()


@router.get("", summary="Get the local user's profile.", response_model=UserProfile)
def get_profile(repository: RecordRepository = Depends(get_repository)):
    return repository.get_profile()


@router.put("", summary="Replace the profile.", response_model=UserProfile)
def update_profile(profile: UserProfile, repository: RecordRepository = Depends(get_repository)):
    return repository.save_profile(profile)
