"""
Shared Pydantic record models for formatkit.

Records persisted by the verification gateway: one-time verification
codes, USSD session logs, and phone opt-ins.
"""

from formatkit.models.verification import PhoneOptIn, USSDSessionLog, VerificationCode

__all__ = [
    "PhoneOptIn",
    "USSDSessionLog",
    "VerificationCode",
]
