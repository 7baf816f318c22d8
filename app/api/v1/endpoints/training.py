"""
Training session endpoints.

One session per calendar day; fetching a day without a stored session
returns a fresh one built from that weekday's menu template.
"""

import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_repository, get_training_service
from app.db.repositories.records import RecordRepository
from app.schemas.training_session import TrainingSession
from app.services.training_service import CompletionResult, TrainingService

router = APIRouter()


@router.get("", summary="List sessions, most recent first.", response_model=list[TrainingSession])
def list_sessions(limit: int = Query(30, ge=1, le=365), repository: RecordRepository = Depends(get_repository)):
    return repository.list_sessions()[:limit]


@router.get("/{date}", summary="Get or start the session for a date.", response_model=TrainingSession)
def get_session_for_date(date: datetime.date, service: TrainingService = Depends(get_training_service)):
    return service.start_session(date)


@router.put("", summary="Save a session (upsert by id).", response_model=TrainingSession)
def save_session(session: TrainingSession, service: TrainingService = Depends(get_training_service)):
    return service.save_session(session)


@router.post("/{session_id}/complete", summary="Finish a session and apply 1RM updates.",
             response_model=CompletionResult, )
def complete_session(session_id: str, service: TrainingService = Depends(get_training_service)):
    session = service.get_session(session_id)
    if not session:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Session '{session_id}' not found", )
    return service.complete_session(session)
