"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Histogram

# ============================================================
# Contract Gateway Metrics
# ============================================================

contract_calls_total = Counter(
    "consigne_contract_calls_total",
    "Total contract bridge calls",
    ["method", "phase", "status"],
)

contract_call_duration_seconds = Histogram(
    "consigne_contract_call_duration_seconds",
    "Contract bridge call duration in seconds",
    ["method", "phase"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# ============================================================
# Enumeration Metrics
# ============================================================

enumeration_skipped_total = Counter(
    "consigne_enumeration_skipped_total",
    "Payment indices or bodies skipped during enumeration",
    ["stage", "reason"],
)

# ============================================================
# Identity Cache Metrics
# ============================================================

identity_cache_lookups_total = Counter(
    "consigne_identity_cache_lookups_total",
    "Identity cache lookups",
    ["result"],
)

identity_cache_evictions_total = Counter(
    "consigne_identity_cache_evictions_total",
    "Identity cache entries removed after failed validation",
    ["reason"],
)
