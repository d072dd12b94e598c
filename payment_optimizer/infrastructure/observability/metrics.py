"""Prometheus metrics for monitoring allocations, overrides and projected score changes"""

from prometheus_client import Counter, Histogram

# Allocation metrics
allocation_counter = Counter(
    "payment_optimizer_allocation_total",
    "Total allocation runs",
    ["strategy", "outcome"],  # outcome: planned | rejected
)

allocation_duration_histogram = Histogram(
    "payment_optimizer_allocation_seconds",
    "Time spent computing an allocation plan",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
)

score_change_histogram = Histogram(
    "payment_optimizer_score_change_points",
    "Projected score change of computed plans",
    buckets=[-50, -10, 0, 5, 10, 20, 40, 70, 107],
)

unallocated_plan_counter = Counter(
    "payment_optimizer_unallocated_plans_total",
    "Plans that left funds unallocated",
)

# Override metrics
override_counter = Counter(
    "payment_optimizer_override_total",
    "Manual overrides applied",
    ["clamped"],  # true | false
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_allocation(strategy: str, duration_seconds: float, score_change_points: float, unallocated_cents: int) -> None:
    """Record metrics for a successful allocation"""
    allocation_counter.labels(strategy=strategy, outcome="planned").inc()
    allocation_duration_histogram.observe(duration_seconds)
    score_change_histogram.observe(score_change_points)

    if unallocated_cents > 0:
        unallocated_plan_counter.inc()


def record_rejection(strategy: str) -> None:
    """Record an allocation that failed validation"""
    allocation_counter.labels(strategy=strategy, outcome="rejected").inc()


def record_override(clamped: bool) -> None:
    override_counter.labels(clamped="true" if clamped else "false").inc()
