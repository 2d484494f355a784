"""Food photo calorie estimation using LLMs."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from burnfit.domain.estimates import UNKNOWN_DISH, FoodGuess
from burnfit.domain.profile import DietaryPreference

_logger = logging.getLogger(__name__)

VISION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foodName": {"type": "string"},
        "estimatedCalories": {"type": "number", "minimum": 0},
    },
    "required": ["foodName", "estimatedCalories"],
    "additionalProperties": False,
}


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured vision extraction data."""


@dataclass
class VisionService:
    """Service that prepares the photo prompt and validates the guess."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def estimate(
        self,
        image_bytes: bytes,
        mime_type: str | None = None,
        dietary_preference: DietaryPreference = DietaryPreference.NONE,
    ) -> FoodGuess:
        """Identify the dish in a photo and estimate its calories.

        Any client failure or malformed output degrades to "Unknown Dish"
        with zero calories.
        """
        data_url = _to_data_url(image_bytes, mime_type)
        try:
            raw = await self.client.extract(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_data_url=data_url,
                schema=VISION_SCHEMA,
                prompt=_vision_prompt(dietary_preference),
            )
            return FoodGuess.model_validate(raw)
        except Exception:
            _logger.warning("Vision estimate failed, using fallback", exc_info=True)
            return UNKNOWN_DISH.model_copy()


def _vision_prompt(dietary_preference: DietaryPreference) -> str:
    prompt = (
        "Identify this food and estimate its total calories. "
        "Return JSON with 'foodName' and 'estimatedCalories'."
    )
    if dietary_preference != DietaryPreference.NONE:
        prompt += (
            f" The user follows a {dietary_preference} diet; "
            "use that as a hint when the dish is ambiguous."
        )
    return prompt


def _to_data_url(image_bytes: bytes, mime_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL for image input."""
    resolved = mime_type or _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{resolved};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
