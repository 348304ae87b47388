"""
formatkit: shared conversion and formatting helpers.

Provides JSON-based structure/mapping converters, phone-number (MSISDN)
validation and normalization, secure code generation, and the
verification gateway that records one-time codes, USSD sessions and
opt-ins in a document store.
"""

from formatkit.config import Settings, get_settings
from formatkit.converters import (
    coerce_any_to_string,
    map_any_to_map_string,
    map_string_to_map_any,
    to_generic_record,
)
from formatkit.errors import (
    EncodingError,
    FormatKitError,
    InvalidFormatError,
    NoMatchingCodeError,
    ParseError,
    PersistenceError,
    TypeMismatchError,
)
from formatkit.phone import PhoneNumberValidator, is_msisdn_valid, normalize_msisdn

__version__ = "0.1.0"

__all__ = [
    "EncodingError",
    "FormatKitError",
    "InvalidFormatError",
    "NoMatchingCodeError",
    "ParseError",
    "PersistenceError",
    "PhoneNumberValidator",
    "Settings",
    "TypeMismatchError",
    "coerce_any_to_string",
    "get_settings",
    "is_msisdn_valid",
    "map_any_to_map_string",
    "map_string_to_map_any",
    "normalize_msisdn",
    "to_generic_record",
]
