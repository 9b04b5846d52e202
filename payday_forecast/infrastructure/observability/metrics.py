"""Prometheus metrics for monitoring forecasts, health grades, and history queries"""

from decimal import Decimal

from prometheus_client import Counter, Histogram

# Forecast metrics
projection_counter = Counter(
    "payday_forecast_projection_total",
    "Total balance projections computed",
)

lowest_balance_bucket_counter = Counter(
    "payday_forecast_lowest_balance_bucket",
    "Lowest projected balance per forecast, by bucket",
    ["bucket"],  # negative, $0-$100, $100-$1000, $1000+
)

# Health metrics
health_grade_counter = Counter(
    "payday_forecast_health_grade_total",
    "Health grades issued",
    ["grade"],
)

# History metrics
history_query_counter = Counter(
    "payday_forecast_history_query_total",
    "History aggregation queries served",
    ["query"],  # filter | totals | latest
)

# Reducer metrics
action_counter = Counter(
    "payday_forecast_action_total",
    "Snapshot actions applied",
    ["action", "outcome"],  # outcome: applied | rejected
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(lowest_balance: Decimal) -> None:
    """Record forecast metrics, bucketing the tightest projected balance"""
    projection_counter.inc()

    if lowest_balance < 0:
        bucket = "negative"
    elif lowest_balance <= 100:
        bucket = "$0-$100"
    elif lowest_balance <= 1000:
        bucket = "$100-$1000"
    else:
        bucket = "$1000+"

    lowest_balance_bucket_counter.labels(bucket=bucket).inc()


def record_health_grade(grade: str) -> None:
    health_grade_counter.labels(grade=grade).inc()
