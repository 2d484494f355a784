"""Calorie estimation from free-text meal descriptions."""

import logging
from dataclasses import dataclass
from typing import Protocol

from burnfit.domain.estimates import NO_ESTIMATE, CalorieEstimate
from burnfit.domain.profile import DietaryPreference

_logger = logging.getLogger(__name__)

ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "estimatedCalories": {"type": "number", "minimum": 0},
        "confirmedFoodName": {"type": "string"},
    },
    "required": ["estimatedCalories", "confirmedFoodName"],
    "additionalProperties": False,
}


class EstimatorClient(Protocol):
    """Interface for LLM text-to-calories estimation."""

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured estimation data."""


@dataclass
class TextEstimatorService:
    """Service that asks an LLM for the calories in a described meal."""

    client: EstimatorClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def estimate(
        self,
        description: str,
        dietary_preference: DietaryPreference = DietaryPreference.NONE,
    ) -> CalorieEstimate:
        """Estimate calories for a description; failures yield zero calories."""
        try:
            raw = await self.client.estimate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema=ESTIMATE_SCHEMA,
                prompt=_estimate_prompt(description, dietary_preference),
            )
            return CalorieEstimate.model_validate(raw)
        except Exception:
            _logger.warning("Text estimate failed, using fallback", exc_info=True)
            return NO_ESTIMATE.model_copy()


def _estimate_prompt(description: str, dietary_preference: DietaryPreference) -> str:
    prompt = (
        f'Estimate calories for: "{description}". '
        "Return JSON with 'estimatedCalories' and 'confirmedFoodName', "
        "a short normalized name for the food."
    )
    if dietary_preference != DietaryPreference.NONE:
        prompt += f" The user follows a {dietary_preference} diet."
    return prompt
