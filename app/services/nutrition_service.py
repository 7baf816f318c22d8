"""
Nutrition estimation service.

Asks the remote model for the macros of one standard serving of a food
and normalizes the answer: kcal becomes a non-negative integer, macros
non-negative grams with one decimal.
"""

import json
import logging
from typing import Any

from app.core.exceptions import CollaboratorFault, InvalidRequestError
from app.schemas.nutrition import NutritionEstimate
from app.scoring.wilks import round_half_away

logger = logging.getLogger(__name__)

SERVICE_NAME = "nutrition"
FALLBACK_MESSAGE = "Failed to estimate nutrients."

SYSTEM_PROMPT = ("You are a nutrition expert. Return only valid JSON with numeric values for kcal, protein, fat, "
                 "and carbs.")

USER_PROMPT = """Return the nutrients of one standard serving of "{food_name}" as JSON.
Format: {{"kcal": number, "protein": number, "fat": number, "carbs": number}}
kcal: calories (integer), protein/fat/carbs: grams (1 decimal)"""


def _number(data: dict[str, Any], field: str) -> float:
    value = data.get(field, 0)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"'{field}' is not a number: {value!r}")
    return max(0.0, float(value))


def parse_estimate(text: str) -> NutritionEstimate:
    """Turn the model's JSON answer into a :class:`NutritionEstimate`.

    Raises:
        ValueError: If the text is not a JSON object with numeric fields.
    """
    data = json.loads(text or "{}")
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return NutritionEstimate(kcal=int(round_half_away(_number(data, "kcal"), 0)),
                             protein=round_half_away(_number(data, "protein"), 1),
                             fat=round_half_away(_number(data, "fat"), 1),
                             carbs=round_half_away(_number(data, "carbs"), 1), )


class NutritionEstimator:
    """Client for the nutrition-estimation collaborator."""

    def __init__(self, client: Any, model: str, max_tokens: int = 200):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    async def estimate(self, food_name: str) -> NutritionEstimate:
        """Estimate macros for *food_name*.

        Raises:
            InvalidRequestError: If the name is empty after trimming.
            CollaboratorFault: If the remote call or its answer fails.
        """
        name = (food_name or "").strip()
        if not name:
            raise InvalidRequestError("A food name is required")

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                stream=False,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": USER_PROMPT.format(food_name=name)},
                ],
            )
            text = completion.choices[0].message.content if completion.choices else None
            return parse_estimate(text or "{}")
        except ValueError as e:
            logger.warning("Unusable nutrition answer for '%s': %s", name, e)
            raise CollaboratorFault(SERVICE_NAME, FALLBACK_MESSAGE, str(e)) from e
        except Exception as e:
            logger.exception("Nutrition estimation failed for '%s'", name)
            raise CollaboratorFault(SERVICE_NAME, FALLBACK_MESSAGE, str(e)) from e
