"""
Prometheus Metrics for the chat backend.

DATA FLOW:
    This file                  presentation/api/metrics.py         Observability Stack
    ─────────                  ────────────────────────────         ───────────────────
    Define metrics ──────────► /metrics endpoint ──────────────►   Prometheus ──► Grafana

METRIC TYPES:
    - Gauge: Value goes up/down (live connections)
    - Counter: Value only goes up (delivered / dropped events, errors)
"""

from prometheus_client import (
    Gauge,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
LIVE_CONNECTIONS = Gauge(
    "chat_live_connections", "Number of registered realtime connections"
)

EVENTS_DELIVERED_TOTAL = Counter(
    "chat_events_delivered_total",
    "Realtime events handed to a live connection",
    ["kind"],
)

EVENTS_DROPPED_TOTAL = Counter(
    "chat_events_dropped_total",
    "Realtime events dropped for a connection (closed or outbox full)",
    ["kind"],
)

ERRORS_TOTAL = Counter(
    "chat_errors_total",
    "Total number of errors by type",
    ["error_type"],
)


# =============================================================================
# LABEL CONSTANTS
# =============================================================================
class MetricsErrorType:
    """Error type labels for chat_errors_total metric."""

    STORE_FAILED = "store_failed"
    SEND_FAILED = "send_failed"
    SOCKET_HANDLER_FAILED = "socket_handler_failed"
    UNHANDLED = "unhandled"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def set_live_connections(count: int):
    """Integration point: infrastructure/realtime/connection_registry.py"""
    LIVE_CONNECTIONS.set(count)


def increment_delivered(kind: str):
    """Integration point: infrastructure/realtime/fanout_dispatcher.py"""
    EVENTS_DELIVERED_TOTAL.labels(kind=kind).inc()


def increment_dropped(kind: str):
    """Integration point: infrastructure/realtime/fanout_dispatcher.py"""
    EVENTS_DROPPED_TOTAL.labels(kind=kind).inc()


def increment_error(error_type: str):
    ERRORS_TOTAL.labels(error_type=error_type).inc()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "set_live_connections",
    "increment_delivered",
    "increment_dropped",
    "increment_error",
    "get_metrics_content",
    "MetricsErrorType",
]
