"""In-process channel that records outbound messages."""

import copy
from dataclasses import dataclass
from typing import Any

from .protocol import SubscriberRegistry


@dataclass
class SentMessage:
    """A message sent to the host."""

    key: str
    payload: dict[str, Any]


class InMemoryChannel(SubscriberRegistry):
    """Channel whose host lives in the same process.

    Outbound messages are stored in ``sent``; ``deliver`` plays the host's
    part by pushing a message to the subscribed handlers.
    """

    def __init__(self) -> None:
        super().__init__()
        self.sent: list[SentMessage] = []

    def send(self, key: str, payload: dict[str, Any]) -> None:
        """Record a message (copied, so later changes don't leak in)."""
        self.sent.append(SentMessage(key, copy.deepcopy(payload)))

    def deliver(self, key: str, message: dict[str, Any]) -> int:
        """Push a message from the host to the subscribed handlers."""
        return self.dispatch(key, message)

    def messages_for(self, key: str) -> list[dict[str, Any]]:
        """All payloads sent under ``key``, oldest first."""
        return [message.payload for message in self.sent if message.key == key]

    def last(self, key: str) -> dict[str, Any] | None:
        """The most recent payload sent under ``key``."""
        messages = self.messages_for(key)
        return messages[-1] if messages else None

    def clear(self) -> None:
        """Forget recorded messages."""
        self.sent.clear()
