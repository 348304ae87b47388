"""
Abstract document-store interface for formatkit.

Defines the ``DocumentStore`` contract the verification gateway writes
through: put a record, query by equality predicates, and merge fields
into an existing document. Also holds the collection-suffix helper used
to keep non-production data in separate collections.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class StoredDocument:
    """A document read back from the store.

    Attributes:
        id: Store-assigned document id.
        data: Document fields.
    """

    id: str
    data: dict[str, Any] = field(default_factory=dict)


def suffix_collection(name: str, suffix: str) -> str:
    """Return *name* with ``_<suffix>`` appended, e.g. ``otps_staging``.

    An empty *suffix* leaves the name unchanged.
    """
    if not suffix:
        return name
    return f"{name}_{suffix}"


def matches(data: Mapping[str, Any], predicates: Mapping[str, Any]) -> bool:
    """Return ``True`` when every predicate equals the field in *data*.

    Booleans only equal booleans, so ``True`` does not match a stored ``1``.
    Other numbers compare by value (``1`` matches ``1.0``).
    """
    for key, expected in predicates.items():
        actual = data.get(key)
        if isinstance(actual, bool) or isinstance(expected, bool):
            if type(actual) is not type(expected) or actual != expected:
                return False
        elif actual != expected:
            return False
    return True


class DocumentStore(ABC):
    """Abstract base class for document-store backends.

    Implementations raise :class:`~formatkit.errors.PersistenceError`
    for any backend failure or unreadable document. Queries filter with
    :func:`matches`.
    """

    @abstractmethod
    async def put(self, collection: str, record: Mapping[str, Any]) -> str:
        """Insert *record* into *collection* and return its new id."""
        ...  # pragma: no cover

    @abstractmethod
    async def query(
        self,
        collection: str,
        predicates: Mapping[str, Any],
    ) -> list[StoredDocument]:
        """Return every document whose fields equal all *predicates*."""
        ...  # pragma: no cover

    @abstractmethod
    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: Mapping[str, Any],
    ) -> None:
        """Merge *fields* into document *doc_id*.

        Raises:
            PersistenceError: If the document does not exist.
        """
        ...  # pragma: no cover
