"""
Assistant endpoints: nutrition estimation and the planning chat.

The chat reply streams as newline-delimited JSON, one frame per line
(``{"type": "text", ...}``, ``{"type": "usage", ...}`` or
``{"type": "error", ...}``).
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from app.api.dependencies import get_nutrition_estimator, get_planning_assistant, get_repository
from app.core.exceptions import CollaboratorFault, InvalidRequestError
from app.db.repositories.records import RecordRepository
from app.schemas.chat import ChatMessage, ChatRequest, ChatTokenTotals
from app.schemas.nutrition import NutritionEstimate, NutritionRequest
from app.services.nutrition_service import NutritionEstimator
from app.services.planning_service import PlanningAssistant

router = APIRouter()


@router.post("/nutrition", summary="Estimate the macros of one serving of a food.", response_model=NutritionEstimate, )
async def estimate_nutrition(data: NutritionRequest,
                             estimator: NutritionEstimator = Depends(get_nutrition_estimator), ):
    try:
        return await estimator.estimate(data.food_name)
    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except CollaboratorFault as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.user_message) from e


@router.post("/chat", summary="Send a message to the planning assistant (streamed).")
async def chat(data: ChatRequest, assistant: PlanningAssistant = Depends(get_planning_assistant)):
    if not data.content.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message content is required")

    async def frames():
        async for frame in assistant.converse(data.content):
            yield frame.model_dump_json() + "\n"

    return StreamingResponse(frames(), media_type="application/x-ndjson")


@router.get("/chat/history", summary="Get the chat history, oldest first.", response_model=list[ChatMessage])
def get_chat_history(repository: RecordRepository = Depends(get_repository)):
    return repository.list_chat_messages()


@router.delete("/chat/history", summary="Clear the chat history.", status_code=status.HTTP_204_NO_CONTENT)
def clear_chat_history(repository: RecordRepository = Depends(get_repository)):
    repository.clear_chat_history()


@router.get("/chat/tokens", summary="Get cumulative chat token usage.", response_model=ChatTokenTotals)
def get_chat_tokens(repository: RecordRepository = Depends(get_repository)):
    return repository.get_chat_token_totals()
