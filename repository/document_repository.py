# repository/document_repository.py
from typing import Final, Optional
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from model.document import StoredDocument
from repository.namespaces import CURRENT_BLOB, CURRENT_DOCUMENT, GENERATION

META_KEY: Final[str] = CURRENT_DOCUMENT
BLOB_KEY: Final[str] = CURRENT_BLOB


def _s(v: object, default: str = "") -> str:
    if v is None:
        return default
    return v.decode("utf-8") if isinstance(v, (bytes, bytearray)) else str(v)


class DocumentRepository:
    """
    Redis-backed single-document store.

    Flow:
    - save() evicts whatever was stored before, then writes metadata + bytes.
    - Every save/clear bumps the generation counter; flows compare it to detect
      that the document changed under them.
    - TTL is refreshed on read so the document survives active sessions.
    """

    def __init__(
        self,
        ttl_seconds: int = settings.PERSISTENCE_TTL_SECONDS,
        client: Optional[Redis] = None,
    ) -> None:
        self._ttl = int(ttl_seconds)
        self._redis = client

    async def _client(self) -> Redis:
        return self._redis if self._redis is not None else await get_redis()

    async def current_generation(self) -> int:
        r = await self._client()
        return int(_s(await r.get(GENERATION), "0") or 0)

    async def save(self, doc_id: str, name: str, data: bytes) -> int:
        """
        Replace the stored document. Returns the new generation.
        """
        r = await self._client()
        await r.delete(META_KEY, BLOB_KEY)
        generation = int(await r.incr(GENERATION))
        await r.hset(
            META_KEY,
            mapping={"id": doc_id, "name": name, "generation": str(generation)},
        )
        await r.set(BLOB_KEY, data, ex=self._ttl)
        await r.expire(META_KEY, self._ttl)
        return generation

    async def load_most_recent(self) -> Optional[StoredDocument]:
        r = await self._client()
        h = await r.hgetall(META_KEY)
        if not h:
            return None
        data = await r.get(BLOB_KEY)
        if data is None:
            return None
        await r.expire(META_KEY, self._ttl)
        await r.expire(BLOB_KEY, self._ttl)
        meta = {_s(k): v for k, v in h.items()}
        return StoredDocument(
            id=_s(meta.get("id")),
            name=_s(meta.get("name")),
            data=bytes(data),
            generation=int(_s(meta.get("generation"), "0") or 0),
        )

    async def clear_all(self) -> int:
        """
        Remove the stored document. Returns the new generation.
        """
        r = await self._client()
        await r.delete(META_KEY, BLOB_KEY)
        return int(await r.incr(GENERATION))
