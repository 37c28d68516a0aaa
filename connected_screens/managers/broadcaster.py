import asyncio
import json
import time
from dataclasses import dataclass
from typing import Any

from fastapi import WebSocket
from pydantic import ValidationError

from connected_screens.api.ws.constants import MessageType
from connected_screens.exceptions import BroadcastError, InvalidMessageError
from connected_screens.logging import logger
from connected_screens.managers.connection_registry import (
    ConnectionEntry,
    ConnectionRegistry,
)
from connected_screens.schemas.messages import (
    InitMessage,
    MoveMessage,
    UpdateMessage,
)
from connected_screens.schemas.state import Position, SharedState
from connected_screens.settings import Settings, app_settings
from connected_screens.utils.metrics import (
    ws_broadcast_duration_seconds,
    ws_broadcast_failures_total,
    ws_connections_active,
    ws_connections_total,
    ws_invalid_messages_total,
    ws_messages_received_total,
    ws_messages_sent_total,
)


@dataclass(frozen=True)
class MoveBounds:
    """Optional limits a move must respect before it touches the state."""

    position_min: float | None = None
    position_max: float | None = None
    max_screen_index: int | None = None

    def check(self, move: MoveMessage) -> None:
        """
        Raises InvalidMessageError if the move falls outside the bounds.
        """
        for axis in ("x", "y"):
            value = getattr(move.position, axis)
            if self.position_min is not None and value < self.position_min:
                raise InvalidMessageError(
                    "invalid_move",
                    f"position.{axis}={value} is below {self.position_min}",
                )
            if self.position_max is not None and value > self.position_max:
                raise InvalidMessageError(
                    "invalid_move",
                    f"position.{axis}={value} is above {self.position_max}",
                )

        if (
            self.max_screen_index is not None
            and move.screen > self.max_screen_index
        ):
            raise InvalidMessageError(
                "invalid_move",
                f"screen={move.screen} is above {self.max_screen_index}",
            )


def parse_message(raw: str | bytes) -> dict[str, Any]:
    """
    Decode one WebSocket frame into a JSON object with a string "type".

    Args:
        raw: Text frame, or binary frame holding UTF-8 encoded JSON.

    Returns:
        The decoded JSON object.

    Raises:
        InvalidMessageError: If the frame is not a JSON object with a type.
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidMessageError("invalid_json", str(e)) from e

    if not isinstance(payload, dict):
        raise InvalidMessageError(
            "not_an_object", f"got {type(payload).__name__}"
        )

    if not isinstance(payload.get("type"), str):
        raise InvalidMessageError("missing_type")

    return payload


class PositionBroadcaster:
    """
    Owner of the shared ball state and the fan-out of its changes.

    One instance lives on ``app.state.broadcaster`` for the lifetime of the
    application. Connection lifecycle events from the WebSocket endpoint go
    through ``on_connect``, ``on_message`` and ``on_disconnect``; the shared
    state is only ever changed by a valid move.

    The state lock is only held to write the state and snapshot the payload
    and targets; sends happen after it is released. Each connection has its
    own send lock, acquired in the order the state was written, so every
    client still observes updates in write order and a stalled client only
    delays itself. A send that exceeds ``send_timeout`` counts as failed.
    """

    def __init__(
        self,
        initial_state: SharedState | None = None,
        registry: ConnectionRegistry | None = None,
        bounds: MoveBounds | None = None,
        send_timeout: float | None = None,
    ) -> None:
        self._state = initial_state or SharedState(
            position=Position(x=50.0, y=50.0), screen_index=0
        )
        self.registry = registry or ConnectionRegistry()
        self.bounds = bounds or MoveBounds()
        self.send_timeout = send_timeout
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls, settings: Settings = app_settings
    ) -> "PositionBroadcaster":
        """
        Build a broadcaster whose defaults and bounds come from settings.

        Args:
            settings: Application settings to read from.

        Returns:
            A broadcaster with an empty registry.
        """
        return cls(
            initial_state=SharedState(
                position=Position(
                    x=settings.INITIAL_POSITION_X,
                    y=settings.INITIAL_POSITION_Y,
                ),
                screen_index=settings.INITIAL_SCREEN,
            ),
            bounds=MoveBounds(
                position_min=settings.POSITION_MIN,
                position_max=settings.POSITION_MAX,
                max_screen_index=settings.MAX_SCREEN_INDEX,
            ),
            send_timeout=settings.SEND_TIMEOUT_SECONDS,
        )

    def snapshot(self) -> SharedState:
        """Returns a copy of the current shared state."""
        return self._state.model_copy(deep=True)

    async def on_connect(self, websocket: WebSocket) -> int:
        """
        Registers a freshly accepted connection and greets it.

        Sends a single "init" message with the assigned id and the current
        state to the new connection only. The shared state is not changed.

        Args:
            websocket: The accepted WebSocket connection.

        Returns:
            The identifier assigned to the connection.
        """
        async with self._lock:
            connection_id = self.registry.register(websocket)
            entry = self.registry.get_entry(websocket)
            message = InitMessage.from_state(connection_id, self._state)
            # Uncontended for a new entry; holding it keeps every update
            # queued behind the init.
            await entry.send_lock.acquire()

        ws_connections_total.inc()
        ws_connections_active.set(len(self.registry))
        logger.info(
            f"New client connected with id {connection_id}. "
            f"Total clients: {len(self.registry)}"
        )

        try:
            await asyncio.wait_for(
                websocket.send_json(message.to_wire()), self.send_timeout
            )
        finally:
            entry.send_lock.release()
        ws_messages_sent_total.labels(type=MessageType.INIT.value).inc()

        return connection_id

    async def on_message(self, websocket: WebSocket, raw: str | bytes) -> None:
        """
        Handles one incoming frame.

        A valid "move" overwrites the shared position and screen index and
        triggers a broadcast. Any other message type is ignored. Frames that
        cannot be decoded, or moves that fail validation, are dropped and
        logged; the connection stays open and the state is untouched.

        Args:
            websocket: The connection the frame arrived on.
            raw: The raw frame content.
        """
        connection_id = self.registry.get_id(websocket)

        try:
            payload = parse_message(raw)
            if payload["type"] != MessageType.MOVE.value:
                ws_messages_received_total.labels(type="other").inc()
                logger.debug(
                    f"Ignoring message of type {payload['type']!r} "
                    f"from connection {connection_id}"
                )
                return

            ws_messages_received_total.labels(
                type=MessageType.MOVE.value
            ).inc()
            move = self.parse_move(payload)
        except InvalidMessageError as e:
            ws_invalid_messages_total.labels(reason=e.reason).inc()
            logger.warning(
                f"Dropped invalid message from connection {connection_id}: {e}"
            )
            return

        async with self._lock:
            self._state = SharedState(
                position=move.position, screen_index=move.screen
            )
            logger.info(
                f"Ball moved to position {move.position.model_dump()} "
                f"on screen {move.screen}"
            )
            targets, payload = self._snapshot_update()

        await self._fan_out(targets, payload)

    def parse_move(self, payload: dict[str, Any]) -> MoveMessage:
        """
        Validate a decoded "move" payload.

        Args:
            payload: Decoded JSON object with type "move".

        Returns:
            The validated move.

        Raises:
            InvalidMessageError: If types or bounds are violated.
        """
        try:
            move = MoveMessage.model_validate(payload)
        except ValidationError as e:
            raise InvalidMessageError(
                "invalid_move",
                "; ".join(
                    f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ),
            ) from e

        self.bounds.check(move)
        return move

    async def broadcast(self) -> int:
        """
        Sends the current state as an "update" to every registered connection.

        Returns:
            Number of connections the update was delivered to.
        """
        async with self._lock:
            targets, payload = self._snapshot_update()

        return await self._fan_out(targets, payload)

    def _snapshot_update(
        self,
    ) -> tuple[list[ConnectionEntry], dict[str, Any]]:
        return (
            self.registry.entries(),
            UpdateMessage.from_state(self._state).to_wire(),
        )

    async def _fan_out(
        self, targets: list[ConnectionEntry], payload: dict[str, Any]
    ) -> int:
        if not targets:
            return 0

        start_time = time.time()

        # gather() creates the send tasks before yielding, so the
        # per-connection locks are queued for in write order
        results = await asyncio.gather(
            *[self._send(entry, payload) for entry in targets],
            return_exceptions=True,
        )

        delivered = 0
        for entry, result in zip(targets, results):
            if isinstance(result, BroadcastError):
                ws_broadcast_failures_total.inc()
                logger.warning(str(result))
                self.registry.deregister(entry.websocket)
            elif isinstance(result, BaseException):
                raise result
            else:
                delivered += 1
                ws_messages_sent_total.labels(
                    type=MessageType.UPDATE.value
                ).inc()

        ws_connections_active.set(len(self.registry))
        ws_broadcast_duration_seconds.observe(time.time() - start_time)
        return delivered

    async def _send(
        self, entry: ConnectionEntry, payload: dict[str, Any]
    ) -> None:
        try:
            async with entry.send_lock:
                await asyncio.wait_for(
                    entry.websocket.send_json(payload), self.send_timeout
                )
        except Exception as e:
            raise BroadcastError(entry.connection_id, e) from e

    def on_disconnect(self, websocket: WebSocket) -> None:
        """
        Removes a closed connection from the registry.

        Unknown connections (e.g. already dropped after a failed send) are
        ignored.

        Args:
            websocket: The closed WebSocket connection.
        """
        connection_id = self.registry.get_id(websocket)
        if self.registry.deregister(websocket):
            logger.info(
                f"Client {connection_id} disconnected. "
                f"Total clients: {len(self.registry)}"
            )
        ws_connections_active.set(len(self.registry))
