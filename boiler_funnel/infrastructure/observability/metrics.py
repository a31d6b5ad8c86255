"""Prometheus metrics for funnel conversion, finance quotes and payment gateway health"""

from prometheus_client import Counter, Histogram

# Funnel metrics
submission_counter = Counter(
    "boiler_funnel_submissions_total",
    "Form submissions created",
)

finance_quote_counter = Counter(
    "boiler_funnel_finance_quotes_total",
    "Finance quotes computed",
    ["apr_band"],  # zero_apr | interest_bearing
)

booking_counter = Counter(
    "boiler_funnel_bookings_total",
    "Install dates confirmed",
    ["status"],  # available | surcharge
)

# Payment metrics
payment_intent_counter = Counter(
    "boiler_funnel_payment_intents_total",
    "Payment intents by outcome",
    ["outcome"],  # created | succeeded | not_completed
)

payment_gateway_failures_counter = Counter(
    "payment_gateway_failures_total",
    "Failed payment gateway calls",
)

payment_gateway_latency_histogram = Histogram(
    "payment_gateway_latency_seconds",
    "Payment gateway response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_finance_quote(apr: float) -> None:
    apr_band = "zero_apr" if apr == 0 else "interest_bearing"
    finance_quote_counter.labels(apr_band=apr_band).inc()


def record_booking(status: str) -> None:
    booking_counter.labels(status=status).inc()


def record_payment_intent(outcome: str) -> None:
    payment_intent_counter.labels(outcome=outcome).inc()
