"""OpenAI Responses API client for text calorie estimates."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from burnfit.adapters.openai_responses import read_json_output, structured_request
from burnfit.services.estimator import EstimatorClient


@dataclass
class OpenAIEstimatorClient(EstimatorClient):
    """Estimator client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Ask for calories of a described meal as strict JSON."""
        response = await self.client.responses.create(
            **structured_request(
                model=model,
                reasoning_effort=reasoning_effort,
                store=store,
                format_name="calorie_estimate",
                schema=schema,
                content=prompt,
            )
        )
        return read_json_output(response)
