"""Pydantic schemas for records, derived values and collaborator payloads."""

from app.schemas.chat import (
    ChatMessage,
    ChatRole,
    ChatTokenTotals,
    ErrorFrame,
    TextFrame,
    TokenUsage,
    UsageFrame,
)
from app.schemas.goals import GoalData, GoalEntry, GoalHorizon
from app.schemas.meal import DayMealRecord, MealEntry
from app.schemas.menu import MenuTemplateItem, WeeklyMenu
from app.schemas.nutrition import NutritionEstimate, NutritionRequest
from app.schemas.profile import Lift, UserProfile
from app.schemas.stats import DayNutritionSummary, OneRepMaxUpdate, SessionSummary, StatsResponse
from app.schemas.training_session import ExerciseRecord, SetRecord, TrainingSession
from app.schemas.weight import WeightEntry

__all__ = [
    "ChatMessage",
    "ChatRole",
    "ChatTokenTotals",
    "ErrorFrame",
    "TextFrame",
    "TokenUsage",
    "UsageFrame",
    "GoalData",
    "GoalEntry",
    "GoalHorizon",
    "DayMealRecord",
    "MealEntry",
    "MenuTemplateItem",
    "WeeklyMenu",
    "NutritionEstimate",
    "NutritionRequest",
    "Lift",
    "UserProfile",
    "DayNutritionSummary",
    "OneRepMaxUpdate",
    "SessionSummary",
    "StatsResponse",
    "ExerciseRecord",
    "SetRecord",
    "TrainingSession",
    "WeightEntry",
]
