"""Channel protocol for talking to the host process."""

from collections.abc import Callable
from typing import Any, Protocol

MessageHandler = Callable[[dict[str, Any]], None]


class HostChannel(Protocol):
    """Interface for message-passing transports to the host.

    Messages are JSON-compatible dicts addressed by a string key. The board
    publishes snapshots under its element ID and card selections under
    ``<elementId>__kanban__card``; the host pushes replacement boards under
    the element ID.
    """

    def send(self, key: str, payload: dict[str, Any]) -> None:
        """Send a message to the host.

        Args:
            key: Destination key (e.g., the board's element ID)
            payload: JSON-compatible message body
        """
        ...

    def subscribe(self, key: str, handler: MessageHandler) -> None:
        """Register a handler for messages pushed by the host under ``key``.

        Args:
            key: Key to listen on
            handler: Called with each inbound message
        """
        ...


class SubscriberRegistry:
    """Inbound handler bookkeeping shared by channel implementations."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[MessageHandler]] = {}

    def subscribe(self, key: str, handler: MessageHandler) -> None:
        """Register a handler for messages pushed under ``key``."""
        self._handlers.setdefault(key, []).append(handler)

    def dispatch(self, key: str, message: dict[str, Any]) -> int:
        """Hand an inbound message to every handler registered for ``key``.

        Returns:
            Number of handlers called.
        """
        handlers = self._handlers.get(key, [])
        for handler in handlers:
            handler(message)
        return len(handlers)
