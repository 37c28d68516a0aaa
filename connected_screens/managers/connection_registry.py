import asyncio
from dataclasses import dataclass, field
from itertools import count
from typing import Iterator

from fastapi import WebSocket

from connected_screens.logging import logger


@dataclass(frozen=True)
class ConnectionEntry:
    """A registered WebSocket together with the id it got on connect."""

    connection_id: int
    websocket: WebSocket
    # Serialises sends to this socket, in the order the state was written
    send_lock: asyncio.Lock = field(
        default_factory=asyncio.Lock, compare=False, repr=False
    )


class ConnectionRegistry:
    """
    Registry of currently open WebSocket connections.

    Keeps connections in registration order and hands out identifiers from
    a monotonically increasing counter, so two live connections never share
    an id even after earlier clients disconnected.
    """

    def __init__(self, first_id: int = 0) -> None:
        """
        Initializes an empty registry.

        Args:
            first_id: Identifier given to the first registered connection.
        """
        self._entries: list[ConnectionEntry] = []
        self._ids: Iterator[int] = count(first_id)

    def register(self, websocket: WebSocket) -> int:
        """
        Appends a connection and assigns it the next identifier.

        Args:
            websocket: The WebSocket connection to register.

        Returns:
            The identifier assigned to this connection.
        """
        connection_id = next(self._ids)
        self._entries.append(ConnectionEntry(connection_id, websocket))
        logger.debug(
            f"websocket object ({id(websocket)}) registered "
            f"with id {connection_id}"
        )
        return connection_id

    def deregister(self, websocket: WebSocket) -> bool:
        """
        Removes the first entry holding this exact WebSocket object.

        Unknown connections are ignored.

        Args:
            websocket: The WebSocket connection to remove.

        Returns:
            True if an entry was removed, False otherwise.
        """
        for index, entry in enumerate(self._entries):
            if entry.websocket is websocket:
                del self._entries[index]
                logger.debug(
                    f"websocket object ({id(websocket)}) with id "
                    f"{entry.connection_id} removed from registry"
                )
                return True
        return False

    def broadcast_targets(self) -> list[WebSocket]:
        """
        Returns a snapshot of all registered connections.

        The snapshot is a new list, so the registry may change while the
        caller iterates over it.
        """
        return [entry.websocket for entry in self._entries]

    def entries(self) -> list[ConnectionEntry]:
        """
        Returns a snapshot of the registered entries in registration order.

        Unlike `broadcast_targets`, every entry also carries its connection
        id and the lock that serialises sends to that connection.
        """
        return list(self._entries)

    def get_entry(self, websocket: WebSocket) -> ConnectionEntry | None:
        """Returns the entry holding this exact WebSocket object, if any."""
        for entry in self._entries:
            if entry.websocket is websocket:
                return entry
        return None

    def get_id(self, websocket: WebSocket) -> int | None:
        """
        Get the identifier assigned to a registered connection.

        Args:
            websocket: The WebSocket connection to look up.

        Returns:
            The connection id if registered, None otherwise.
        """
        entry = self.get_entry(websocket)
        return entry.connection_id if entry else None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, websocket: object) -> bool:
        return any(entry.websocket is websocket for entry in self._entries)
