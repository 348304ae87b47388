"""
Redis-backed document store for formatkit.

Each collection is a Redis hash mapping document id to a JSON-encoded
document. Queries load the collection and filter by equality, which
suits the small, short-lived collections the gateway writes (codes,
session logs, opt-ins).
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Mapping
from typing import Any

import redis.asyncio as aioredis
import structlog
from redis.exceptions import RedisError, WatchError

from formatkit.config import get_settings
from formatkit.errors import PersistenceError
from formatkit.store.base import DocumentStore, StoredDocument, matches

logger = structlog.get_logger(__name__)

MAX_UPDATE_ATTEMPTS = 5


def _decode(collection: str, doc_id: str, payload: str) -> dict[str, Any]:
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        logger.error("document_decode_failed", collection=collection, doc_id=doc_id)
        raise PersistenceError(f"document {doc_id} in {collection} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise PersistenceError(f"document {doc_id} in {collection} is not a JSON object")
    return data


class RedisDocumentStore(DocumentStore):
    """Async Redis implementation of :class:`DocumentStore`.

    Args:
        url: Redis connection URL.  Falls back to ``Settings.redis_url``.
    """

    def __init__(self, url: str | None = None) -> None:
        self._url = url or get_settings().redis_url
        self._redis: aioredis.Redis | None = None

    # ── lifecycle ──

    async def connect(self) -> None:
        """Establish the Redis connection (idempotent)."""
        if self._redis is None:
            self._redis = aioredis.from_url(
                self._url,
                decode_responses=True,
            )

    async def close(self) -> None:
        """Close the Redis connection, if open."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

    @property
    def redis(self) -> aioredis.Redis:
        """Return the underlying ``aioredis.Redis`` instance.

        Raises:
            RuntimeError: If ``connect()`` has not been called.
        """
        if self._redis is None:
            raise RuntimeError("RedisDocumentStore is not connected. Call connect() first.")
        return self._redis

    # ── document operations ──

    async def put(self, collection: str, record: Mapping[str, Any]) -> str:
        """Store *record* under a fresh id in *collection*.

        Returns:
            The generated document id.
        """
        doc_id = uuid.uuid4().hex
        try:
            await self.redis.hset(collection, doc_id, json.dumps(dict(record)))
        except RedisError as exc:
            logger.exception("document_put_failed", collection=collection)
            raise PersistenceError(f"unable to save document to {collection}: {exc}") from exc
        logger.debug("document_put", collection=collection, doc_id=doc_id)
        return doc_id

    async def query(
        self,
        collection: str,
        predicates: Mapping[str, Any],
    ) -> list[StoredDocument]:
        """Return documents in *collection* matching every predicate."""
        try:
            raw: dict[str, str] = await self.redis.hgetall(collection)  # type: ignore[misc]
        except RedisError as exc:
            logger.exception("document_query_failed", collection=collection)
            raise PersistenceError(f"unable to query {collection}: {exc}") from exc

        found: list[StoredDocument] = []
        for doc_id, payload in raw.items():
            data = _decode(collection, doc_id, payload)
            if matches(data, predicates):
                found.append(StoredDocument(id=doc_id, data=data))
        return found

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: Mapping[str, Any],
    ) -> None:
        """Merge *fields* into the stored document *doc_id*.

        The read and the write run under ``WATCH``, so a concurrent write
        to the collection restarts the merge instead of being overwritten.

        Raises:
            PersistenceError: The document is missing or unreadable, Redis
                fails, or the collection keeps changing for
                ``MAX_UPDATE_ATTEMPTS`` attempts.
        """
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                for attempt in range(1, MAX_UPDATE_ATTEMPTS + 1):
                    try:
                        await pipe.watch(collection)
                        payload = await pipe.hget(collection, doc_id)
                        if payload is None:
                            raise PersistenceError(f"document {doc_id} not found in {collection}")
                        data = _decode(collection, doc_id, payload)
                        data.update(fields)
                        pipe.multi()
                        pipe.hset(collection, doc_id, json.dumps(data))
                        await pipe.execute()
                        break
                    except WatchError:
                        logger.info(
                            "document_update_conflict",
                            collection=collection,
                            doc_id=doc_id,
                            attempt=attempt,
                        )
                else:
                    raise PersistenceError(
                        f"unable to update {doc_id} in {collection}: "
                        f"concurrent writes after {MAX_UPDATE_ATTEMPTS} attempts"
                    )
        except RedisError as exc:
            logger.exception("document_update_failed", collection=collection, doc_id=doc_id)
            raise PersistenceError(f"unable to update {doc_id} in {collection}: {exc}") from exc
        logger.debug("document_updated", collection=collection, doc_id=doc_id)

    # ── health check ──

    async def health_check(self) -> bool:
        """Verify connectivity by issuing a ``PING``.

        Returns:
            ``True`` if Redis responds, ``False`` otherwise.
        """
        try:
            return bool(await self.redis.ping())
        except Exception:  # noqa: BLE001
            return False
