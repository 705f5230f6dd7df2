"""Prometheus metrics for forecast outcomes and HTTP latency"""

from prometheus_client import Counter, Histogram

from cashflow_tracker.domain.models import ForecastResult

# Forecast metrics
forecast_counter = Counter(
    "cashflow_forecast_total",
    "Total cash-flow forecasts computed",
    ["outcome"],  # healthy | shortfall
)

forecast_horizon_histogram = Histogram(
    "cashflow_forecast_horizon_days",
    "Projection horizon length in days",
    buckets=[30, 45, 60, 90, 180, 365, 730],
)

salary_events_counter = Counter(
    "cashflow_salary_events_total",
    "Projected salary payments emitted by forecasts",
)

# Record store
record_not_found_counter = Counter(
    "cashflow_record_not_found_total",
    "Lookups of incomes, expenses or loans that did not exist",
    ["entity"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_forecast(result: ForecastResult) -> None:
    """Record forecast metrics for monitoring how often users run short"""
    outcome = "shortfall" if result.shortfall_date else "healthy"
    forecast_counter.labels(outcome=outcome).inc()
    forecast_horizon_histogram.observe(result.horizon_days)
    salary_events_counter.inc(len(result.salary_events))
