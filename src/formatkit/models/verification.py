"""
Verification record models for formatkit.

Field names on the wire are camelCase (``authorizationCode``,
``isValid``) to match documents already held in the store; Python
attributes stay snake_case.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


class VerificationCode(BaseModel):
    """A one-time code issued to a phone number.

    Created valid when the code is issued; ``is_valid`` flips to ``False``
    once the code has been used.

    Attributes:
        msisdn: Normalized phone number the code was sent to.
        authorization_code: The code itself.
        is_valid: Whether the code can still be used.
        message: Text of the message that carried the code.
        timestamp: Issue time (UTC).
    """

    model_config = {"populate_by_name": True}

    msisdn: str = Field(..., min_length=1, description="Normalized phone number.")
    authorization_code: str = Field(
        ...,
        alias="authorizationCode",
        min_length=1,
        description="One-time verification code.",
    )
    is_valid: bool = Field(default=True, alias="isValid", description="Code is unused.")
    message: str = Field(default="", description="Message that carried the code.")
    timestamp: datetime = Field(default_factory=_utc_now, description="Issue time (UTC).")


class USSDSessionLog(BaseModel):
    """Log entry for a registration that arrived over USSD."""

    model_config = {"populate_by_name": True}

    msisdn: str = Field(..., min_length=1, description="Normalized phone number.")
    session_id: str = Field(..., alias="sessionID", description="Telco USSD session id.")


class PhoneOptIn(BaseModel):
    """Whether a phone number has opted in to communication."""

    model_config = {"populate_by_name": True}

    msisdn: str = Field(..., min_length=1, description="Normalized phone number.")
    opted_in: bool = Field(..., alias="optedIn", description="Opt-in flag.")
