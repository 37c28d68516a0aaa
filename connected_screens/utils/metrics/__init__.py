"""
Prometheus metrics definitions and utilities.

All metrics are re-exported here so callers can write:

    from connected_screens.utils.metrics import ws_connections_active
"""

from connected_screens.utils.metrics.websocket import (
    ws_broadcast_duration_seconds,
    ws_broadcast_failures_total,
    ws_connections_active,
    ws_connections_total,
    ws_invalid_messages_total,
    ws_messages_received_total,
    ws_messages_sent_total,
)

__all__ = [
    "ws_connections_active",
    "ws_connections_total",
    "ws_messages_received_total",
    "ws_messages_sent_total",
    "ws_invalid_messages_total",
    "ws_broadcast_failures_total",
    "ws_broadcast_duration_seconds",
]
