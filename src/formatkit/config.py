"""
Environment-based configuration management for formatkit.

Uses pydantic-settings to load configuration values from environment
variables and .env files. The phone validator, the verification gateway
and the document store read their defaults from this module so that
regions, prefix tables and collection names can be changed without
touching code.

All environment variables are prefixed with ``FK_`` to avoid collisions.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Kenyan mobile MSISDNs: optional 254 / +254 / 0 prefix, then a 9-digit
# subscriber number on the 7xx or 1xx ranges.
KENYAN_MSISDN_PATTERN = r"^(?:254|\+254|0)?((7|1)(?:(?:[129][0-9])|(?:0[0-8])|(4[0-1]))[0-9]{6})$"

# Loose international format: optional (+CC) / 00CC, digit groups joined by
# - . space \ or /, optional extension. Digit runs are possessive so failing
# input cannot backtrack exponentially.
INTERNATIONAL_MSISDN_PATTERN = (
    r"^(?:(?:\(?(?:00|\+)([1-4]\d\d|[1-9]\d?)\)?)?[\-\.\ \\/]?)?"
    r"((?:\(?\d++\)?[\-\.\ \\/]?)*)"
    r"(?:[\-\.\ \\/]?(?:#|ext\.?|extension|x)[\-\.\ \\/]?(\d+))?$"
)


class Settings(BaseSettings):
    """Central configuration loaded from ``FK_``-prefixed environment variables.

    Attributes:
        environment: Deployment environment name (``production``, ``staging``...).
        debug: Enables diagnostic logging in the lossy converters.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        default_region: ISO-3166 region used to parse numbers without a country code.
        msisdn_min_length: Inputs shorter than this are rejected outright.
        kenyan_msisdn_pattern: Strict pattern for Kenyan mobile numbers.
        international_msisdn_pattern: Permissive fallback pattern.
        root_collection_suffix: Suffix appended to document-store collection names.
        otp_collection: Collection holding one-time verification codes.
        phone_opt_in_collection: Collection holding phone opt-in records.
        ussd_session_collection: Collection holding USSD session logs.
        redis_url: Redis URL backing the document store.
        otp_digits: Length of generated one-time codes.
        email_local_part: Local part used for generated test emails.
        email_domain: Domain used for generated test emails.
    """

    model_config = SettingsConfigDict(
        env_prefix="FK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Runtime ──
    environment: str = Field(default="production", description="Deployment environment name.")
    debug: bool = Field(default=False, description="Enable converter diagnostics.")
    log_level: str = Field(default="INFO", description="Logging level.")

    # ── Phone numbers ──
    default_region: str = Field(
        default="KE",
        min_length=2,
        max_length=2,
        description="Region used when a number carries no country code.",
    )
    msisdn_min_length: int = Field(default=10, ge=1, description="Minimum raw MSISDN length.")
    kenyan_msisdn_pattern: str = Field(
        default=KENYAN_MSISDN_PATTERN,
        description="Strict Kenyan mobile-number pattern.",
    )
    international_msisdn_pattern: str = Field(
        default=INTERNATIONAL_MSISDN_PATTERN,
        description="Permissive international phone-number pattern.",
    )

    # ── Document store ──
    root_collection_suffix: str = Field(
        default="",
        description="Collection suffix; derived from the environment when empty.",
    )
    otp_collection: str = Field(default="otps", description="One-time code collection.")
    phone_opt_in_collection: str = Field(
        default="phone_opt_ins",
        description="Phone opt-in collection.",
    )
    ussd_session_collection: str = Field(
        default="ussd_signup_sessions",
        description="USSD session log collection.",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL.",
    )

    # ── Generators ──
    otp_digits: int = Field(default=6, ge=4, le=12, description="One-time code length.")
    email_local_part: str = Field(default="be.well", description="Generated email local part.")
    email_domain: str = Field(default="bewell.co.ke", description="Generated email domain.")

    @field_validator("kenyan_msisdn_pattern", "international_msisdn_pattern")
    @classmethod
    def _pattern_compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regular expression: {exc}") from exc
        return value

    @field_validator("default_region")
    @classmethod
    def _upper_region(cls, value: str) -> str:
        return value.upper()

    @property
    def collection_suffix(self) -> str:
        """Suffix applied to every collection name.

        An explicit ``root_collection_suffix`` wins; otherwise production
        uses bare names and every other environment uses its own name.
        """
        if self.root_collection_suffix:
            return self.root_collection_suffix
        if self.environment.lower() == "production":
            return ""
        return self.environment.lower()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()
