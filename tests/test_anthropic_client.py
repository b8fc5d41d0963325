"""Tests for the Anthropic structured-output adapter."""

import json

import httpx
import pytest

from core.anthropic_client import AnthropicStructuredClient
from util.errors import ModelInvocationFailed, SchemaViolation

SCHEMA = {
    "type": "object",
    "properties": {"sampleSize": {"type": "string"}, "sources": {"type": "array"}},
    "required": ["sampleSize", "sources"],
}


def _client(handler) -> AnthropicStructuredClient:
    return AnthropicStructuredClient(
        api_key="sk-ant-test",
        model="claude-test",
        api_url="https://api.anthropic.test/v1/messages",
        transport=httpx.MockTransport(handler),
    )


async def _generate(client: AnthropicStructuredClient) -> dict:
    return await client.generate(
        system="sys",
        prompt="Page 1: N = 12",
        tool_name="record_sampleSize",
        output_schema=SCHEMA,
    )


@pytest.mark.asyncio
async def test_forced_tool_call_input_is_returned() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "content": [
                    {"type": "text", "text": "Recording."},
                    {
                        "type": "tool_use",
                        "id": "toolu_1",
                        "name": "record_sampleSize",
                        "input": {"sampleSize": "12", "sources": [{"page": 1, "text": "N = 12"}]},
                    },
                ],
                "stop_reason": "tool_use",
            },
        )

    out = await _generate(_client(handler))

    assert out == {"sampleSize": "12", "sources": [{"page": 1, "text": "N = 12"}]}
    assert seen["headers"]["x-api-key"] == "sk-ant-test"
    body = seen["body"]
    assert body["tool_choice"] == {"type": "tool", "name": "record_sampleSize"}
    assert body["tools"][0]["input_schema"] == SCHEMA
    assert body["messages"] == [{"role": "user", "content": "Page 1: N = 12"}]
    assert body["system"] == "sys"
    assert body["temperature"] == 0.0


@pytest.mark.asyncio
async def test_provider_error_status_is_invocation_failure() -> None:
    client = _client(lambda request: httpx.Response(529, json={"type": "error"}))

    with pytest.raises(ModelInvocationFailed):
        await _generate(client)


@pytest.mark.asyncio
async def test_transport_error_is_invocation_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ModelInvocationFailed):
        await _generate(_client(handler))


@pytest.mark.asyncio
async def test_non_json_body_is_invocation_failure() -> None:
    client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(ModelInvocationFailed):
        await _generate(client)


@pytest.mark.asyncio
async def test_missing_tool_call_is_schema_violation() -> None:
    client = _client(
        lambda request: httpx.Response(
            200,
            json={"content": [{"type": "text", "text": "245"}], "stop_reason": "end_turn"},
        )
    )

    with pytest.raises(SchemaViolation):
        await _generate(client)
