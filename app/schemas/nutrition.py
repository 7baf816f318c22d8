"""Nutrition-estimation request/response schemas."""

from pydantic import BaseModel, Field


class NutritionRequest(BaseModel):
    food_name: str = Field(..., max_length=200, description="Food or dish to estimate")


class NutritionEstimate(BaseModel):
    """Estimated macros for a standard single serving."""

    kcal: int = Field(..., ge=0)
    protein: float = Field(..., ge=0.0, description="Protein (g, 1 decimal)")
    fat: float = Field(..., ge=0.0, description="Fat (g, 1 decimal)")
    carbs: float = Field(..., ge=0.0, description="Carbohydrates (g, 1 decimal)")
