# config/cache.py
import asyncio
from typing import Optional
from redis.asyncio import Redis, from_url
from config.settings import settings

_client: Optional[Redis] = None
_lock = asyncio.Lock()


async def get_redis() -> Redis:
    """
    Shared Redis client for the document store and the rate limiter.
    Concurrent flows may race on first use; the lock keeps one client.
    """
    global _client
    if _client is not None:
        return _client
    async with _lock:
        if _client is None:
            client = from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=False,  # PDF blobs are raw bytes
                socket_keepalive=True,
                health_check_interval=30,
            )
            # Fail fast on startup if Redis is unreachable.
            await client.ping()
            _client = client
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
