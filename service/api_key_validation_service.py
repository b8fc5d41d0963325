# service/api_key_validation_service.py
import logging
from typing import Optional
import httpx
from fastapi import status
from config.settings import settings
from core.anthropic_client import anthropic_headers
from util.enums import ErrorMessage
from util.errors import AppError
from util.timing import timed

logger = logging.getLogger(__name__)

_REJECTED = (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


class ApiKeyValidationService:
    """
    Checks a caller's Anthropic key with a one-token request before any flow
    spends it on a full-document prompt. The key is never stored or logged.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._url = settings.ANTHROPIC_API_URL
        self._model = settings.ANTHROPIC_MODEL
        self._transport = transport

    async def _ping(self, api_key: str) -> httpx.Response:
        probe = {
            "model": self._model,
            "max_tokens": 1,
            "messages": [{"role": "user", "content": "Ping"}],
        }
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(10.0, connect=5.0), transport=self._transport
        ) as client:
            return await client.post(self._url, headers=anthropic_headers(api_key), json=probe)

    async def validate_key(self, api_key: str) -> None:
        try:
            with timed(logger, "api.key.ping", model=self._model):
                res = await self._ping(api_key)
        except httpx.RequestError as e:
            logger.error("api.key.request_error err=%s", type(e).__name__)
            raise AppError.of(ErrorMessage.INTERNAL_ERROR) from e

        if res.is_success:
            return
        if res.status_code in _REJECTED:
            logger.warning("api.key.rejected status=%d", res.status_code)
            raise AppError.of(ErrorMessage.INVALID_API_KEY)

        logger.error("api.key.unexpected status=%d", res.status_code)
        raise AppError.of(ErrorMessage.INTERNAL_ERROR)
