"""
Document-store access for formatkit.

This package provides the abstract ``DocumentStore`` interface used by
the verification gateway and its Redis-backed implementation.
"""

from formatkit.store.base import DocumentStore, StoredDocument, matches, suffix_collection
from formatkit.store.redis_store import RedisDocumentStore

__all__ = [
    "DocumentStore",
    "RedisDocumentStore",
    "StoredDocument",
    "matches",
    "suffix_collection",
]
