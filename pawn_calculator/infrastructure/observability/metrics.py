"""Prometheus metrics for monitoring quotes, weight config health and admin access"""

from prometheus_client import Counter, Histogram

# Quote metrics
quote_counter = Counter(
    "pawn_quote_total",
    "Total loan quotes calculated",
    ["collateral", "repayment_mode", "outcome"],  # outcome: ok | invalid_input | calculation_diverged
)

effective_rate_histogram = Histogram(
    "pawn_quote_effective_rate_percent",
    "Effective annual rate of successful quotes",
    buckets=[1.0, 2.0, 2.5, 3.0, 3.5, 4.0, 5.0, 7.5, 10.0],
)

# Weight config metrics
weight_fallback_counter = Counter(
    "pawn_weight_fallback_total",
    "Weight table reads that fell back to the defaults because the store was unavailable",
)

weight_update_counter = Counter(
    "pawn_weight_updates_total",
    "Admin weight table updates",
    ["outcome"],  # saved | rejected | failed
)

# Admin access
admin_auth_failures_counter = Counter(
    "pawn_admin_auth_failures_total",
    "Rejected admin credential checks",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_quote(collateral: str, repayment_mode: str, outcome: str, effective_rate_percent: float | None) -> None:
    """Record quote metrics; rates are only observed for successful quotes"""
    quote_counter.labels(collateral=collateral, repayment_mode=repayment_mode, outcome=outcome).inc()
    if outcome == "ok" and effective_rate_percent is not None:
        effective_rate_histogram.observe(effective_rate_percent)
