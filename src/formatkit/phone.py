"""
Phone-number (MSISDN) validation and normalization for formatkit.

Validation is a three-step gate: a minimum length, a strict Kenyan
mobile pattern, then a permissive international pattern. Numbers that
pass are parsed with ``phonenumbers`` in the default region and
rendered as ``+<country code><national number>``.
"""

from __future__ import annotations

import re

import phonenumbers
import structlog

from formatkit import metrics
from formatkit.config import (
    INTERNATIONAL_MSISDN_PATTERN,
    KENYAN_MSISDN_PATTERN,
    Settings,
    get_settings,
)
from formatkit.errors import InvalidFormatError, ParseError

logger = structlog.get_logger(__name__)

DEFAULT_REGION = "KE"
MIN_MSISDN_LENGTH = 10


class PhoneNumberValidator:
    """Validates and normalizes phone numbers against configurable patterns.

    Args:
        default_region: Region assumed when a number has no country code.
        kenyan_pattern: Strict pattern tried first.
        international_pattern: Permissive pattern tried when the strict one
            does not match.
        min_length: Inputs shorter than this are invalid.
    """

    def __init__(
        self,
        default_region: str = DEFAULT_REGION,
        *,
        kenyan_pattern: str = KENYAN_MSISDN_PATTERN,
        international_pattern: str = INTERNATIONAL_MSISDN_PATTERN,
        min_length: int = MIN_MSISDN_LENGTH,
    ) -> None:
        self._region = default_region.upper()
        self._kenyan = re.compile(kenyan_pattern, re.ASCII)
        self._international = re.compile(international_pattern, re.ASCII)
        self._min_length = min_length

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> PhoneNumberValidator:
        """Build a validator from ``Settings`` (the cached instance by default)."""
        settings = settings or get_settings()
        return cls(
            settings.default_region,
            kenyan_pattern=settings.kenyan_msisdn_pattern,
            international_pattern=settings.international_msisdn_pattern,
            min_length=settings.msisdn_min_length,
        )

    @property
    def default_region(self) -> str:
        return self._region

    def is_valid(self, msisdn: str) -> bool:
        """Return ``True`` when *msisdn* looks like a usable phone number."""
        if len(msisdn) < self._min_length:
            return False
        if self._kenyan.fullmatch(msisdn):
            return True
        return self._international.fullmatch(msisdn) is not None

    def normalize(self, msisdn: str) -> str:
        """Return *msisdn* in international format, e.g. ``+254723002959``.

        Raises:
            InvalidFormatError: *msisdn* fails :meth:`is_valid`.
            ParseError: ``phonenumbers`` rejects a number that passed the
                pattern checks.
        """
        if not self.is_valid(msisdn):
            metrics.msisdn_normalizations_total.labels(outcome="invalid").inc()
            raise InvalidFormatError(f"invalid phone number: {msisdn}")
        try:
            parsed = phonenumbers.parse(msisdn, self._region)
        except phonenumbers.NumberParseException as exc:
            metrics.msisdn_normalizations_total.labels(outcome="parse_error").inc()
            logger.info("msisdn_parse_failed", region=self._region, error=str(exc))
            raise ParseError(f"unable to parse phone number {msisdn}: {exc}") from exc

        # Extensions are dropped; the result is always "+" followed by digits.
        parsed.extension = None
        formatted = phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.INTERNATIONAL)
        normalized = formatted.replace(" ", "").replace("-", "")
        metrics.msisdn_normalizations_total.labels(outcome="ok").inc()
        logger.debug("msisdn_normalized", msisdn=normalized)
        return normalized


def is_msisdn_valid(msisdn: str) -> bool:
    """Validate *msisdn* with a validator built from the current settings."""
    return PhoneNumberValidator.from_settings().is_valid(msisdn)


def normalize_msisdn(msisdn: str) -> str:
    """Normalize *msisdn* with a validator built from the current settings."""
    return PhoneNumberValidator.from_settings().normalize(msisdn)
