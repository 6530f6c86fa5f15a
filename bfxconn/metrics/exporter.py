"""Prometheus metrics collectors and helpers.

This module exposes counters and histograms for venue requests, orders and
reported errors, plus a helper for starting the metrics HTTP server.
"""

from prometheus_client import Counter, Gauge, Histogram, start_http_server

# Metric collectors
REQUESTS_TOTAL = Counter(
    "venue_requests_total", "HTTP requests issued to the venue", ["venue", "method", "result"]
)
REQUEST_LATENCY = Histogram(
    "venue_request_latency_seconds",
    "Round-trip latency of venue requests in seconds",
    ["venue", "method"],
)
VENUE_ERRORS_TOTAL = Counter(
    "venue_errors_total", "Responses carrying a venue error message", ["venue"]
)
ORDERS_TOTAL = Counter(
    "orders_total", "Limit orders submitted", ["venue", "side", "result"]
)
ERRORS_TOTAL = Counter("errors_total", "Total errors encountered", ["venue", "stage"])
QUOTE_PRICE = Gauge("quote_price", "Last observed top-of-book price", ["venue", "side"])


def start_metrics_server(port: int) -> None:
    """Start the Prometheus metrics server on the provided ``port``.

    Parameters
    ----------
    port:
        TCP port to bind the HTTP server to.
    """

    # Be tolerant of env-sourced strings like "9110".
    start_http_server(int(port))
