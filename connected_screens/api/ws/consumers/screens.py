from fastapi import APIRouter
from starlette.websockets import WebSocket

from connected_screens.api.ws.websocket import RelayWebSocketEndpoint
from connected_screens.logging import logger, set_log_context


class Screens(RelayWebSocketEndpoint):
    """
    WebSocket endpoint shared by all connected screens.

    Every accepted socket is greeted with the current ball state, every
    "move" it sends is relayed to all screens, and closing it removes it
    from the broadcast.
    """

    async def on_connect(self, websocket: WebSocket) -> None:
        await websocket.accept()

        self.connection_id = await self.broadcaster.on_connect(websocket)

        client = websocket.client
        set_log_context(
            connection_id=self.connection_id,
            client=f"{client.host}:{client.port}" if client else None,
        )

    async def on_receive(self, websocket: WebSocket, data: str | bytes) -> None:
        await self.broadcaster.on_message(websocket, data)

    async def on_disconnect(self, websocket: WebSocket, close_code: int) -> None:
        self.broadcaster.on_disconnect(websocket)
        logger.debug(
            f"Connection {getattr(self, 'connection_id', None)} "
            f"closed with code {close_code}"
        )


def create_router(path: str) -> APIRouter:
    """
    Build a router that mounts the screens endpoint at `path`.

    Args:
        path: WebSocket path screens connect to.
    """
    router = APIRouter()
    router.add_websocket_route(path, Screens)
    return router
