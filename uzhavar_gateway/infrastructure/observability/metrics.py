"""Prometheus metrics for settlements, notifications and the assistant"""

from decimal import Decimal
from prometheus_client import Counter, Histogram

# Settlement metrics
sale_counter = Counter(
    "uzhavar_sales_total",
    "Total sales recorded",
    ["market_id"],
)

sale_net_amount_histogram = Histogram(
    "uzhavar_sale_net_amount",
    "Net amount credited to farmers per sale",
    buckets=[1_000, 5_000, 10_000, 25_000, 50_000, 100_000, 250_000],
)

settlement_rejections_counter = Counter(
    "uzhavar_settlement_rejections_total",
    "Sale attempts rejected by validation or state checks",
    ["reason"],  # invalid_input | invalid_state | not_found
)

# Notification metrics
sms_log_counter = Counter(
    "uzhavar_sms_logs_total",
    "Farmer notifications logged",
    ["kind"],  # sale_notice | daily_summary
)

# Assistant metrics
assistant_latency_histogram = Histogram(
    "assistant_latency_seconds",
    "Assistant language-model response time",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0],
)

assistant_failure_counter = Counter(
    "assistant_failures_total",
    "Assistant calls answered with the fallback reply",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_settlement(market_id: str, net_amount: Decimal) -> None:
    """Record one successful settlement and its sale notice"""
    sale_counter.labels(market_id=market_id).inc()
    sale_net_amount_histogram.observe(float(net_amount))
    sms_log_counter.labels(kind="sale_notice").inc()
