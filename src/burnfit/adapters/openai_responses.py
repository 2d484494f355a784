"""Helpers for structured-output calls to the OpenAI Responses API."""

import json


def structured_request(  # noqa: PLR0913
    *,
    model: str,
    reasoning_effort: str | None,
    store: bool,
    format_name: str,
    schema: dict[str, object],
    content: str | list[dict[str, object]],
) -> dict[str, object]:
    """Build a single-turn request constrained to a strict JSON schema."""
    payload: dict[str, object] = {
        "model": model,
        "input": [{"role": "user", "content": content}],
        "text": {
            "format": {
                "type": "json_schema",
                "name": format_name,
                "strict": True,
                "schema": schema,
            }
        },
        "store": store,
    }
    if reasoning_effort:
        payload["reasoning"] = {"effort": reasoning_effort}
    return payload


def read_json_output(response: object) -> dict[str, object]:
    """Decode the JSON document in a response; empty output is an error."""
    output_text = getattr(response, "output_text", None)
    if not output_text:
        raise RuntimeError("OpenAI returned an empty response")
    return json.loads(output_text)
