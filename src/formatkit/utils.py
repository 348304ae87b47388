"""
Shared utility functions for formatkit.

Membership tests over sequences, cryptographically secure numeric
codes for verification, and timestamp-disambiguated email addresses.
"""

from __future__ import annotations

import secrets
import time
from collections.abc import Iterable

from formatkit.config import get_settings


def string_slice_contains(items: Iterable[str], target: str) -> bool:
    """Return ``True`` if *target* is one of *items*."""
    for item in items:
        if item == target:
            return True
    return False


def int_slice_contains(items: Iterable[int], target: int) -> bool:
    """Return ``True`` if *target* is one of *items*."""
    for item in items:
        if item == target:
            return True
    return False


def generate_random_with_n_digits(number_of_digits: int) -> str:
    """Return a random numeric code exactly *number_of_digits* long.

    Uses :mod:`secrets`; leading zeros are kept so every code has the
    same length.

    Raises:
        ValueError: If *number_of_digits* is less than 1.
    """
    if number_of_digits < 1:
        raise ValueError("number_of_digits must be at least 1")
    value = secrets.randbelow(10**number_of_digits)
    return str(value).zfill(number_of_digits)


def generate_random_email(local_part: str | None = None, domain: str | None = None) -> str:
    """Return a plus-addressed email unique to the current second.

    e.g. ``be.well+1700000000@bewell.co.ke``; every generated address
    lands in the same mailbox.
    """
    settings = get_settings()
    local_part = local_part or settings.email_local_part
    domain = domain or settings.email_domain
    return f"{local_part}+{int(time.time())}@{domain}"
