# core/anthropic_client.py
from typing import Any, Dict, Optional, Protocol
import httpx
from config.settings import settings
import logging
from util.errors import ModelInvocationFailed, SchemaViolation
from util.timing import timed

logger = logging.getLogger(__name__)


class StructuredModel(Protocol):
    """
    Model-invocation boundary: one instruction in, one object shaped by
    `output_schema` out. Implementations raise ModelInvocationFailed for
    transport/provider errors and SchemaViolation when no object comes back.
    """

    async def generate(
        self,
        *,
        system: str,
        prompt: str,
        tool_name: str,
        output_schema: Dict[str, Any],
    ) -> Dict[str, Any]: ...


def anthropic_headers(api_key: str) -> Dict[str, str]:
    return {
        "x-api-key": api_key,
        "anthropic-version": settings.ANTHROPIC_VERSION,
        "content-type": "application/json",
    }


def _tool_input(data: Dict[str, Any], tool_name: str) -> Optional[Dict[str, Any]]:
    """
    Pull the forced tool call's input out of a Messages API response.
    """
    for node in data.get("content") or []:
        if (
            isinstance(node, dict)
            and node.get("type") == "tool_use"
            and node.get("name") == tool_name
            and isinstance(node.get("input"), dict)
        ):
            return node["input"]
    return None


class AnthropicStructuredClient:
    """
    Anthropic Messages API over httpx. The output contract is declared as a
    single forced tool whose input schema is the expected result object.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str = settings.ANTHROPIC_MODEL,
        api_url: str = settings.ANTHROPIC_API_URL,
        max_tokens: int = settings.MODEL_MAX_TOKENS,
        timeout: float = settings.MODEL_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._url = api_url
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._transport = transport

    async def _post_json(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST the payload. Raises ModelInvocationFailed for transport errors,
        non-2xx statuses and non-JSON bodies.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                r = await client.post(self._url, headers=anthropic_headers(self._api_key), json=payload)
                r.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("ai.http.status status=%d model=%s", e.response.status_code, self._model)
            raise ModelInvocationFailed() from e
        except httpx.HTTPError as e:
            logger.error("ai.http.error err=%s model=%s", type(e).__name__, self._model)
            raise ModelInvocationFailed() from e
        try:
            data = r.json()
        except ValueError as e:
            logger.error("ai.http.body.invalid model=%s", self._model)
            raise ModelInvocationFailed() from e
        if not isinstance(data, dict):
            raise ModelInvocationFailed()
        return data

    async def generate(
        self,
        *,
        system: str,
        prompt: str,
        tool_name: str,
        output_schema: Dict[str, Any],
    ) -> Dict[str, Any]:
        payload = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "system": system,
            "messages": [{"role": "user", "content": prompt}],
            "tools": [
                {
                    "name": tool_name,
                    "description": "Record the answer and the sources that justify it.",
                    "input_schema": output_schema,
                }
            ],
            "tool_choice": {"type": "tool", "name": tool_name},
            "temperature": 0.0,
        }
        with timed(logger, "ai.generate", tool=tool_name, model=self._model):
            data = await self._post_json(payload)

        out = _tool_input(data, tool_name)
        if out is None:
            logger.error(
                "ai.generate.no_tool_input tool=%s stop=%s", tool_name, data.get("stop_reason")
            )
            raise SchemaViolation(f"{tool_name}: model returned no structured output")
        return out
