"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; give every required variable a test value.
for _key, _value in {
    "APP_ENV": "prod",
    "REDIS_URL": "redis://localhost:6379/15",
    "PERSISTENCE_TTL_SECONDS": "3600",
    "ALLOWED_ORIGIN": "http://localhost:3000",
    "RATE_LIMIT_TIMES": "100",
    "RATE_LIMIT_SECONDS": "60",
    "MAX_FILE_MB": "5",
    "TRUST_PROXY": "false",
    "ANTHROPIC_API_URL": "https://api.anthropic.test/v1/messages",
    "ANTHROPIC_MODEL": "claude-test",
    "ANTHROPIC_VERSION": "2023-06-01",
}.items():
    os.environ.setdefault(_key, _value)

import asyncio
from typing import Any, Callable, Dict, List, Optional, Union

import pytest

from core.entities import PageCorpus

Response = Union[Dict[str, Any], Exception, Callable[[str, str], Dict[str, Any]]]


class FakeModel:
    """Scripted model boundary.

    Each response is a dict (returned as the structured output), an exception
    (raised), or a callable taking (prompt, tool_name) and returning a dict.
    A single response is reused for every call.
    """

    def __init__(self, *responses: Response, delay: float = 0.0) -> None:
        self._responses = list(responses)
        self._delay = delay
        self.calls: List[Dict[str, Any]] = []

    async def generate(
        self,
        *,
        system: str,
        prompt: str,
        tool_name: str,
        output_schema: Dict[str, Any],
    ) -> Dict[str, Any]:
        self.calls.append(
            {
                "system": system,
                "prompt": prompt,
                "tool_name": tool_name,
                "output_schema": output_schema,
            }
        )
        if self._delay:
            await asyncio.sleep(self._delay)
        if not self._responses:
            raise RuntimeError("No fake response configured")
        response = self._responses[0] if len(self._responses) == 1 else self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(prompt, tool_name)
        return response


class FakeRedis:
    """In-memory subset of the redis.asyncio client used by the repositories."""

    def __init__(self) -> None:
        self.store: Dict[str, Any] = {}
        self.ttls: Dict[str, int] = {}

    @staticmethod
    def _b(v: Any) -> bytes:
        if isinstance(v, (bytes, bytearray)):
            return bytes(v)
        return str(v).encode("utf-8")

    async def get(self, key: str) -> Optional[bytes]:
        return self.store.get(key)

    async def set(self, key: str, value: Any, ex: Optional[int] = None) -> bool:
        self.store[key] = self._b(value)
        if ex:
            self.ttls[key] = ex
        return True

    async def delete(self, *keys: str) -> int:
        n = 0
        for k in keys:
            if self.store.pop(k, None) is not None:
                n += 1
            self.ttls.pop(k, None)
        return n

    async def incr(self, key: str) -> int:
        value = int(self.store.get(key, b"0")) + 1
        self.store[key] = self._b(value)
        return value

    async def hset(self, key: str, mapping: Dict[str, Any]) -> int:
        h = self.store.setdefault(key, {})
        for k, v in mapping.items():
            h[self._b(k)] = self._b(v)
        return len(mapping)

    async def hgetall(self, key: str) -> Dict[bytes, bytes]:
        return dict(self.store.get(key) or {})

    async def expire(self, key: str, seconds: int) -> bool:
        if key not in self.store:
            return False
        self.ttls[key] = seconds
        return True


def tool_output(field: str, value: Any, *sources: Dict[str, Any]) -> Dict[str, Any]:
    return {field: value, "sources": list(sources)}


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def participants_corpus() -> PageCorpus:
    return PageCorpus.from_texts(
        ["Participants were 30 graduate students from a university in Japan."],
        document_id="doc-1",
        generation=1,
    )


@pytest.fixture
def no_ai_corpus() -> PageCorpus:
    return PageCorpus.from_texts(
        [
            "This study examines reading habits of secondary school pupils "
            "using paper-based diaries kept over one semester."
        ],
        generation=1,
    )


@pytest.fixture
def two_page_corpus() -> PageCorpus:
    return PageCorpus.from_texts(
        [
            "Introduction. Teacher professional development has been widely studied.",
            "Method. The survey was completed by N = 245 teachers across 12 schools.",
        ],
        generation=1,
    )
