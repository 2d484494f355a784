"""Tests for the OpenAI adapters."""

import asyncio
import json

import pytest

from burnfit.adapters.openai_coach_client import OpenAICoachClient
from burnfit.adapters.openai_estimator_client import OpenAIEstimatorClient
from burnfit.adapters.openai_vision_client import OpenAIVisionClient
from burnfit.domain.coach import ChatMessage, ChatRole


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = "") -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_vision_client_parses_output() -> None:
    openai = _FakeOpenAI(json.dumps({"foodName": "Dosa", "estimatedCalories": 170}))
    client = OpenAIVisionClient(client=openai)

    result = asyncio.run(
        client.extract(
            model="gpt-5-mini",
            reasoning_effort="low",
            store=False,
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            schema={"type": "object"},
            prompt="Identify this food",
        )
    )

    assert result == {"foodName": "Dosa", "estimatedCalories": 170}
    payload = openai.responses.last_payload
    content = payload["input"][0]["content"]
    assert content[1] == {
        "type": "input_image",
        "image_url": "data:image/jpeg;base64,ZmFrZQ==",
    }
    assert payload["text"]["format"]["name"] == "food_guess"
    assert payload["reasoning"] == {"effort": "low"}


def test_openai_vision_client_rejects_empty_output() -> None:
    client = OpenAIVisionClient(client=_FakeOpenAI(""))

    with pytest.raises(RuntimeError):
        asyncio.run(
            client.extract(
                model="gpt-5-mini",
                reasoning_effort=None,
                store=False,
                image_data_url="data:image/png;base64,ZmFrZQ==",
                schema={"type": "object"},
                prompt="Identify this food",
            )
        )


def test_openai_estimator_client_sends_strict_schema() -> None:
    openai = _FakeOpenAI(
        json.dumps({"estimatedCalories": 95, "confirmedFoodName": "Apple"})
    )
    client = OpenAIEstimatorClient(client=openai)

    result = asyncio.run(
        client.estimate(
            model="gpt-5-mini",
            reasoning_effort=None,
            store=False,
            schema={"type": "object"},
            prompt='Estimate calories for: "apple".',
        )
    )

    assert result == {"estimatedCalories": 95, "confirmedFoodName": "Apple"}
    payload = openai.responses.last_payload
    assert payload["text"]["format"]["name"] == "calorie_estimate"
    assert payload["text"]["format"]["strict"] is True
    assert "reasoning" not in payload


def test_openai_coach_client_sends_history_then_message() -> None:
    openai = _FakeOpenAI("Try a 10 minute walk.")
    client = OpenAICoachClient(client=openai)
    history = [
        ChatMessage(ChatRole.ASSISTANT, "Hey there!"),
        ChatMessage(ChatRole.USER, "Hi"),
    ]

    reply = asyncio.run(
        client.reply(
            model="gpt-5.2",
            reasoning_effort="low",
            store=False,
            instructions="You are a coach.",
            history=history,
            message="What now?",
        )
    )

    assert reply == "Try a 10 minute walk."
    payload = openai.responses.last_payload
    assert payload["instructions"] == "You are a coach."
    assert payload["input"] == [
        {"role": "assistant", "content": "Hey there!"},
        {"role": "user", "content": "Hi"},
        {"role": "user", "content": "What now?"},
    ]


def test_openai_coach_client_returns_empty_text() -> None:
    client = OpenAICoachClient(client=_FakeOpenAI(""))

    reply = asyncio.run(
        client.reply(
            model="gpt-5.2",
            reasoning_effort=None,
            store=False,
            instructions="You are a coach.",
            history=[],
            message="Hello",
        )
    )

    assert reply == ""
