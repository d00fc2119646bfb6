"""Prometheus metrics for monitoring approval rates, decline reasons, offers and risk API health"""

from typing import Iterable

from prometheus_client import Counter, Histogram

# Evaluation metrics
evaluation_counter = Counter(
    "autoloan_evaluation_total",
    "Total loan evaluations",
    ["outcome"],  # approved | declined | failed
)

rule_violation_counter = Counter(
    "autoloan_rule_violation_total",
    "Underwriting rule violations by code",
    ["code"],  # MAX_LTV | MAX_DTI | MIN_INCOME | MAX_PD
)

offers_histogram = Histogram(
    "autoloan_offers_per_evaluation",
    "Lender offers returned per approved evaluation",
    buckets=[0, 1, 2, 3, 5, 10],
)

# Risk API metrics
risk_api_latency_histogram = Histogram(
    "risk_api_latency_seconds",
    "Remote risk scorer response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

risk_api_failures_counter = Counter(
    "risk_api_failures_total",
    "Failed remote risk scorer calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_evaluation(approved: bool, violation_codes: Iterable[str], offer_count: int) -> None:
    """Record outcome metrics for approval rate and decline reason analysis"""
    evaluation_counter.labels(outcome="approved" if approved else "declined").inc()

    for code in violation_codes:
        rule_violation_counter.labels(code=code).inc()

    if approved:
        offers_histogram.observe(offer_count)


def record_failed_evaluation() -> None:
    evaluation_counter.labels(outcome="failed").inc()
