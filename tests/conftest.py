"""Shared fixtures for formatkit tests."""

from __future__ import annotations

import os
import uuid
from collections.abc import Mapping
from typing import Any

import pytest

# Set env vars before any formatkit import reads settings.
os.environ.setdefault("FK_ENVIRONMENT", "production")
os.environ.setdefault("FK_DEBUG", "false")
os.environ.setdefault("FK_REDIS_URL", "redis://localhost:6379/0")

from formatkit.config import Settings, get_settings  # noqa: E402
from formatkit.errors import PersistenceError  # noqa: E402
from formatkit.store.base import DocumentStore, StoredDocument, matches  # noqa: E402


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed ``DocumentStore`` for exercising the gateway."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}

    async def put(self, collection: str, record: Mapping[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        self.collections.setdefault(collection, {})[doc_id] = dict(record)
        return doc_id

    async def query(
        self,
        collection: str,
        predicates: Mapping[str, Any],
    ) -> list[StoredDocument]:
        docs = self.collections.get(collection, {})
        return [
            StoredDocument(id=doc_id, data=dict(data))
            for doc_id, data in docs.items()
            if matches(data, predicates)
        ]

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: Mapping[str, Any],
    ) -> None:
        docs = self.collections.get(collection, {})
        if doc_id not in docs:
            raise PersistenceError(f"document {doc_id} not found in {collection}")
        docs[doc_id].update(fields)


# ─── Fixtures ────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Drop the cached settings so env patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings() -> Settings:
    return Settings(environment="production", root_collection_suffix="")


@pytest.fixture()
def staging_settings() -> Settings:
    return Settings(environment="staging", root_collection_suffix="")


@pytest.fixture()
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()
