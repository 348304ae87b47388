"""
Structure and mapping converters for formatkit.

Converts arbitrary structured values (pydantic models, dataclasses,
mappings) into generic JSON records, and converts between string-valued
and loosely-typed mappings.

``to_generic_record`` goes through a JSON round-trip and returns every
integer as a ``float``. The JSON encoding has no separate integer type
and existing callers compare against the float form, so this coercion is
kept on purpose.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic_core import to_jsonable_python

from formatkit.config import get_settings
from formatkit.errors import EncodingError, TypeMismatchError
from formatkit.values import GenericRecord, ValueKind, describe, value_kind

logger = structlog.get_logger(__name__)

INVALID_STRING_PREFIX = "invalid string value: "


def to_generic_record(item: Any) -> GenericRecord:
    """Convert *item* into a generic ``dict`` by way of JSON.

    Fields are emitted under their serialization aliases. Integers come
    back as floats (``1`` becomes ``1.0``). ``None`` gives an empty dict.
    NaN and infinities are rejected rather than written as non-standard JSON.

    Raises:
        EncodingError: *item* holds something JSON cannot express, or it
            does not encode to a JSON object.
    """
    try:
        encoded = json.dumps(to_jsonable_python(item, by_alias=True), allow_nan=False)
    except (ValueError, TypeError) as exc:
        raise EncodingError(f"unable to marshal to JSON: {exc}") from exc

    try:
        decoded = json.loads(encoded, parse_int=float)
    except json.JSONDecodeError as exc:
        raise EncodingError(f"unable to unmarshal from JSON to map: {exc}") from exc

    if decoded is None:
        return {}
    if value_kind(decoded) is not ValueKind.MAPPING:
        raise EncodingError(
            f"unable to unmarshal from JSON to map: got {value_kind(decoded).value}"
        )
    return decoded


def map_any_to_map_string(mapping: Mapping[str, Any] | None) -> dict[str, str]:
    """Return a copy of *mapping* whose values are all strings.

    Raises:
        TypeMismatchError: for the first value that is not a ``str``; no
            partial result is returned.
    """
    out: dict[str, str] = {}
    if not mapping:
        return out
    for key, value in mapping.items():
        kind = value_kind(value)
        if kind is not ValueKind.STRING:
            raise TypeMismatchError(key, value, kind.value)
        out[key] = value
    return out


def coerce_any_to_string(
    mapping: Mapping[str, Any] | None,
    *,
    debug: bool | None = None,
) -> dict[str, str]:
    """Best-effort conversion of *mapping* to string values.

    Never raises. Non-string values are replaced by
    ``"invalid string value: <repr>"`` and, when *debug* (or
    ``Settings.debug``) is on, a warning is logged for each of them.
    Prefer :func:`map_any_to_map_string` in new code.
    """
    out: dict[str, str] = {}
    if not mapping:
        return out
    if debug is None:
        debug = get_settings().debug
    for key, value in mapping.items():
        if value_kind(value) is ValueKind.STRING:
            out[key] = value
            continue
        out[key] = f"{INVALID_STRING_PREFIX}{value!r}"
        if debug:
            logger.warning(
                "non_string_value_coerced",
                key=key,
                value=repr(value),
                kind=describe(value),
            )
    return out


def map_string_to_map_any(mapping: Mapping[str, str] | None) -> dict[str, Any]:
    """Widen a string-valued mapping to ``dict[str, Any]``."""
    if not mapping:
        return {}
    return dict(mapping)
