"""
Custom exception classes for the relay.

These exceptions are raised while decoding and validating incoming
WebSocket frames and are handled per message by the broadcaster, so a bad
frame never takes down the connection or the process.
"""


class InvalidMessageError(Exception):
    """
    Incoming message could not be accepted.

    Raised when a frame is not valid JSON, is not a JSON object, has no
    message type, or carries a move whose values fail validation.

    Attributes:
        reason: Short machine-readable label used for logs and metrics
            (``invalid_json``, ``not_an_object``, ``missing_type``,
            ``invalid_move``).
    """

    def __init__(self, reason: str, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason}: {detail}" if detail else reason)


class BroadcastError(Exception):
    """
    Sending a message to a single connection failed.

    Raised by the broadcaster's per-target send and caught inside
    broadcast, so that one failing socket does not stop delivery to the
    remaining targets.
    """

    def __init__(self, connection_id: int | None, cause: Exception) -> None:
        self.connection_id = connection_id
        self.cause = cause
        super().__init__(
            f"Failed to send to connection {connection_id}: {cause!r}"
        )
