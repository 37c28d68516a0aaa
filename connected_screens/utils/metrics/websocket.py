"""
Prometheus metrics for WebSocket connection monitoring.

This module defines metrics for tracking relay connections, received and
sent messages, rejected frames and per-target broadcast failures.
"""

from prometheus_client import Counter, Gauge, Histogram

from connected_screens.utils.metrics._helpers import get_or_create

# WebSocket Connection Metrics
ws_connections_active = get_or_create(
    Gauge, "ws_connections_active", "Number of active WebSocket connections"
)

ws_connections_total = get_or_create(
    Counter, "ws_connections_total", "Total WebSocket connections accepted"
)

ws_messages_received_total = get_or_create(
    Counter,
    "ws_messages_received_total",
    "Total WebSocket messages received",
    ["type"],  # move, or any other client supplied type
)

ws_messages_sent_total = get_or_create(
    Counter,
    "ws_messages_sent_total",
    "Total WebSocket messages sent",
    ["type"],  # init, update
)

ws_invalid_messages_total = get_or_create(
    Counter,
    "ws_invalid_messages_total",
    "Total WebSocket messages dropped as invalid",
    ["reason"],  # invalid_json, not_an_object, missing_type, invalid_move
)

ws_broadcast_failures_total = get_or_create(
    Counter,
    "ws_broadcast_failures_total",
    "Total per-connection send failures during broadcast",
)

ws_broadcast_duration_seconds = get_or_create(
    Histogram,
    "ws_broadcast_duration_seconds",
    "Time spent broadcasting one update to all connections",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)
