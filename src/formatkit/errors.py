"""
Exception hierarchy for formatkit.

Every helper reports bad input by raising one of these; none of them
retries or recovers on its own.
"""

from __future__ import annotations

from typing import Any


class FormatKitError(Exception):
    """Base class for all formatkit errors."""


class EncodingError(FormatKitError):
    """Raised when a value cannot be round-tripped through JSON."""


class TypeMismatchError(FormatKitError):
    """Raised when a strict mapping conversion meets a non-string value."""

    def __init__(self, key: str, value: Any, kind: str) -> None:
        self.key = key
        self.value = value
        self.kind = kind
        super().__init__(f"value {value!r} for key {key!r} is of kind {kind}, not a string")


class InvalidFormatError(FormatKitError):
    """Raised when a phone number fails format validation."""


class ParseError(FormatKitError):
    """Raised when a phone number passes validation but cannot be parsed."""


class NoMatchingCodeError(FormatKitError):
    """Raised when no valid verification code matches the phone number."""


class PersistenceError(FormatKitError):
    """Raised when the document store fails a read or write."""
