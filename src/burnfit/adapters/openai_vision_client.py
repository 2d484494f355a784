"""OpenAI Responses API client for food photo estimates."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from burnfit.adapters.openai_responses import read_json_output, structured_request
from burnfit.services.vision import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Sends the meal photo as an ``input_image`` next to the prompt."""

    client: AsyncOpenAI

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
        content: list[dict[str, object]] = [
            {"type": "input_text", "text": prompt},
            {"type": "input_image", "image_url": image_data_url},
        ]
        response = await self.client.responses.create(
            **structured_request(
                model=model,
                reasoning_effort=reasoning_effort,
                store=store,
                format_name="food_guess",
                schema=schema,
                content=content,
            )
        )
        return read_json_output(response)
