from typing import Any

from starlette import status
from starlette.endpoints import WebSocketEndpoint
from starlette.websockets import WebSocket, WebSocketState

from connected_screens.logging import clear_log_context, logger
from connected_screens.managers.broadcaster import PositionBroadcaster


class RelayWebSocketEndpoint(WebSocketEndpoint):  # type: ignore[misc]
    """
    WebSocket endpoint base class for the relay.

    Drives the per-connection lifecycle Connecting -> Open -> Closed and
    hands raw frames to ``on_receive``. Frames are not decoded here; the
    broadcaster owns parsing so that a bad frame only fails that message.
    """

    encoding = None  # Accept both text and binary frames

    @property
    def broadcaster(self) -> PositionBroadcaster:
        """The broadcaster owned by the running application."""
        return self.scope["app"].state.broadcaster

    async def dispatch(self) -> None:
        """
        Manages the WebSocket connection lifecycle.

        The flow is:
        1. Create the WebSocket from scope, receive and send.
        2. Call on_connect.
        3. Pass every "websocket.receive" message to on_receive.
        4. Stop on "websocket.disconnect", keeping its close code.
        5. If on_connect or a handler raised, close the socket with 1011
           and re-raise.
        6. Always call on_disconnect, so the connection never stays
           registered.
        """
        websocket = WebSocket(self.scope, receive=self.receive, send=self.send)
        close_code = status.WS_1000_NORMAL_CLOSURE

        try:
            await self.on_connect(websocket)

            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.receive":
                    data = await self.decode(websocket, message)
                    await self.on_receive(websocket, data)
                elif message["type"] == "websocket.disconnect":
                    close_code = int(
                        message.get("code") or status.WS_1000_NORMAL_CLOSURE
                    )
                    break
        except Exception as exc:
            close_code = status.WS_1011_INTERNAL_ERROR
            logger.error(f"WebSocket handler failed: {exc!r}")
            await self.close_after_error(websocket)
            raise exc
        finally:
            await self.on_disconnect(websocket, close_code)
            clear_log_context()

    async def close_after_error(self, websocket: WebSocket) -> None:
        """
        Close the socket with 1011 unless either side already closed it.

        A failure while closing is logged; the original error is what the
        caller re-raises.
        """
        if WebSocketState.DISCONNECTED in (
            websocket.application_state,
            websocket.client_state,
        ):
            return

        try:
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        except Exception as close_exc:
            logger.debug(f"Could not close WebSocket after error: {close_exc!r}")

    async def decode(
        self, websocket: WebSocket, message: dict[str, Any]
    ) -> str | bytes:
        """
        Extract the raw frame content.

        Args:
            websocket: WebSocket connection instance
            message: Raw message dict from WebSocket

        Returns:
            The text of a text frame, or the bytes of a binary frame.
        """
        if message.get("text") is not None:
            return message["text"]
        return message.get("bytes") or b""
