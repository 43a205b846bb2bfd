"""Shared OTel metrics instruments for the posts client."""

from opentelemetry import metrics

METER_NAME = "remote_posts"

meter = metrics.get_meter(METER_NAME)

rest_requests_total = meter.create_counter(
    name="rest_requests_total",
    description="Total outbound REST requests by operation and outcome",
    unit="1",
)

rest_request_duration = meter.create_histogram(
    name="rest_request_duration_seconds",
    description="Duration of outbound REST requests",
    unit="s",
)

gateway_errors_total = meter.create_counter(
    name="gateway_errors_total",
    description="Client errors translated to HTTP responses by the gateway",
    unit="1",
)
