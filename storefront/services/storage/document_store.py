"""Redis-backed JSON document collections."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

import redis.asyncio as redis
from pydantic import BaseModel

from storefront.config import settings
from storefront.errors import DocumentNotFoundError, DuplicateDocumentError

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound=BaseModel)

_redis_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Return a singleton Redis client for the current process."""

    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_client


class RedisDocumentStore(Generic[DocumentT]):
    """One named collection of pydantic documents keyed by their ``id``.

    Documents live in a hash as JSON; a sorted set scored by a per-collection
    counter remembers insertion order so full scans are deterministic.
    """

    def __init__(
        self,
        client: redis.Redis,
        collection: str,
        model: type[DocumentT],
        *,
        prefix: str | None = None,
    ) -> None:
        self._client = client
        self.collection = collection
        self._model = model
        key_prefix = prefix if prefix is not None else settings.STORE_KEY_PREFIX
        self._base_key = f"{key_prefix}{collection}"
        self._docs_key = f"{self._base_key}:docs"
        self._order_key = f"{self._base_key}:order"
        self._seq_key = f"{self._base_key}:seq"

    async def insert(self, document: DocumentT) -> DocumentT:
        doc_id = document.id  # type: ignore[attr-defined]
        seq = await self._client.incr(self._seq_key)
        async with self._client.pipeline(transaction=True) as pipe:
            pipe.hset(self._docs_key, doc_id, document.model_dump_json())
            pipe.zadd(self._order_key, {doc_id: seq})
            await pipe.execute()
        logger.debug("Inserted %s document %s", self.collection, doc_id)
        return document

    async def get(self, doc_id: str) -> DocumentT | None:
        raw = await self._client.hget(self._docs_key, doc_id)
        if raw is None:
            return None
        return self._model.model_validate_json(raw)

    async def require(self, doc_id: str) -> DocumentT:
        document = await self.get(doc_id)
        if document is None:
            raise DocumentNotFoundError(self.collection, doc_id)
        return document

    async def replace(self, document: DocumentT) -> DocumentT:
        doc_id = document.id  # type: ignore[attr-defined]
        if not await self._client.hexists(self._docs_key, doc_id):
            raise DocumentNotFoundError(self.collection, doc_id)
        await self._client.hset(self._docs_key, doc_id, document.model_dump_json())
        return document

    async def delete(self, doc_id: str) -> DocumentT:
        document = await self.require(doc_id)
        async with self._client.pipeline(transaction=True) as pipe:
            pipe.hdel(self._docs_key, doc_id)
            pipe.zrem(self._order_key, doc_id)
            await pipe.execute()
        logger.debug("Deleted %s document %s", self.collection, doc_id)
        return document

    async def all(self) -> list[DocumentT]:
        """Return every document in insertion order."""
        ids = await self._client.zrange(self._order_key, 0, -1)
        if not ids:
            return []
        raws = await self._client.hmget(self._docs_key, ids)
        return [self._model.model_validate_json(raw) for raw in raws if raw is not None]

    async def find(self, predicate: Callable[[DocumentT], bool]) -> list[DocumentT]:
        return [document for document in await self.all() if predicate(document)]

    async def count(self, predicate: Callable[[DocumentT], bool] | None = None) -> int:
        if predicate is None:
            return await self._client.hlen(self._docs_key)
        return len(await self.find(predicate))

    async def try_claim(self, field: str, value: str, doc_id: str) -> bool:
        """Atomically reserve ``value`` of a unique ``field`` for ``doc_id``."""
        return bool(
            await self._client.hsetnx(f"{self._base_key}:{field}", value, doc_id)
        )

    async def claim(self, field: str, value: str, doc_id: str) -> None:
        if not await self.try_claim(field, value, doc_id):
            raise DuplicateDocumentError(self.collection, field, value)

    async def release(self, field: str, value: str) -> None:
        await self._client.hdel(f"{self._base_key}:{field}", value)
