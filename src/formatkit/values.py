"""
Tagged classification of JSON-compatible values.

``ValueKind`` names the variants a generic record may hold, so the
converters can branch on a closed set of kinds instead of ad-hoc
``isinstance`` checks.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

GenericRecord = dict[str, Any]


class ValueKind(str, Enum):
    """Variants of a JSON-compatible value."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    NULL = "null"
    UNSUPPORTED = "unsupported"


def value_kind(value: Any) -> ValueKind:
    """Classify *value* into its :class:`ValueKind`.

    ``bool`` is checked before numbers since it subclasses ``int``.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.UNSUPPORTED


def describe(value: Any) -> str:
    """Return ``"<kind> (<python type>)"`` for diagnostics."""
    return f"{value_kind(value).value} ({type(value).__name__})"
