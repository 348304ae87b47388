"""
Prometheus metrics helpers for formatkit.

Counters for phone-number normalization and code verification outcomes.
Registered on the default registry so host services expose them with
their own ``/metrics`` endpoint.
"""

from __future__ import annotations

from prometheus_client import Counter

msisdn_normalizations_total = Counter(
    "formatkit_msisdn_normalizations_total",
    "Phone-number normalization attempts",
    ["outcome"],
)
verifications_total = Counter(
    "formatkit_verifications_total",
    "Phone-number verification attempts",
    ["channel", "outcome"],
)
