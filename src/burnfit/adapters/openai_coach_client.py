"""OpenAI Responses API client for coach replies."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from burnfit.domain.coach import ChatMessage
from burnfit.services.coach import CoachClient


@dataclass
class OpenAICoachClient(CoachClient):
    """Coach client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    async def reply(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        history: list[ChatMessage],
        message: str,
    ) -> str:
        """Send the conversation with system instructions and return the text."""
        turns = [{"role": str(turn.role), "content": turn.text} for turn in history]
        turns.append({"role": "user", "content": message})
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": instructions,
            "input": turns,
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        return response.output_text or ""
