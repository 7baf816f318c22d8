"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import assistant, meals, plans, profile, stats, training, weights

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    stats.router, prefix="/stats", tags=["Stats"]
)
api_router.include_router(
    profile.router, prefix="/profile", tags=["Profile"]
)
api_router.include_router(
    training.router,
    prefix="/training/sessions",
    tags=["Training sessions"],
)
api_router.include_router(
    meals.router, prefix="/meals", tags=["Meals"]
)
api_router.include_router(
    weights.router, prefix="/weights", tags=["Bodyweight"]
)
api_router.include_router(
    plans.router, prefix="/plans", tags=["Plans and goals"]
)
api_router.include_router(
    assistant.router, prefix="/assistant", tags=["Assistant"]
)
