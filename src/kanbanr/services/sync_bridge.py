"""Bridge mirroring board state to and from the host.

Outbound, every applied mutation sends the full board plus a ``_timestamp``
marker under the board's element ID, and card clicks go to
``<elementId>__kanban__card``. Inbound, the host pushes ``{"data": board}``
which replaces local state wholesale and is echoed straight back.

There is no sequencing token: if the host pushes while a local snapshot is in
flight, whichever is applied last at each end wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..channels import HostChannel, MessageHandler
from ..models import TIMESTAMP_KEY, Board, Card, CardClick
from ..utils import now_millis
from .positions import normalize_positions

logger = logging.getLogger(__name__)

CARD_CHANNEL_SUFFIX = "__kanban__card"


def resolve_element_id(
    explicit: str | None,
    lookup: Callable[[], str | None] | None = None,
) -> str | None:
    """Resolve the element ID the board is bound to.

    Uses the explicit value when set, otherwise asks ``lookup``. None means
    there is no host and the board runs standalone.
    """
    if explicit and explicit.strip():
        return explicit.strip()
    if lookup is not None:
        found = lookup()
        if found and found.strip():
            return found.strip()
    return None


class SyncBridge:
    """Mediates state exchange with the host process."""

    def __init__(
        self,
        channel: HostChannel | None = None,
        element_id: str | None = None,
        element_lookup: Callable[[], str | None] | None = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        """Initialize the bridge.

        The element ID is resolved once, here.

        Args:
            channel: Transport to the host (None for standalone use)
            element_id: Explicit element ID
            element_lookup: Fallback used when no explicit ID is given
            clock: Millisecond clock for snapshot markers
        """
        self.channel = channel
        self.element_id = resolve_element_id(element_id, element_lookup)
        self._clock = clock
        self._last_marker = 0
        self._click_counts: dict[str, int] = {}

        if self.element_id is None:
            logger.debug("No element ID resolved, running without host")

    @property
    def has_host(self) -> bool:
        """Whether outbound messages can be delivered."""
        return self.channel is not None and self.element_id is not None

    @property
    def card_channel_key(self) -> str | None:
        """Key used for card selection messages."""
        if self.element_id is None:
            return None
        return f"{self.element_id}{CARD_CHANNEL_SUFFIX}"

    def attach(self, handler: MessageHandler) -> bool:
        """Listen for host pushes addressed to this board.

        Returns:
            True if subscribed, False when running without host.
        """
        if not self.has_host:
            return False
        self.channel.subscribe(self.element_id, handler)
        return True

    def next_marker(self) -> int:
        """Get a timestamp marker strictly greater than the previous one."""
        marker = max(self._clock(), self._last_marker + 1)
        self._last_marker = marker
        return marker

    # --- Outbound ---

    def publish(self, board: Board) -> dict[str, Any] | None:
        """Send a full board snapshot to the host.

        Returns:
            The payload sent, or None when running without host.
        """
        if not self.has_host:
            logger.debug("publish skipped: no host")
            return None

        payload = board.to_payload()
        payload[TIMESTAMP_KEY] = self.next_marker()
        self.channel.send(self.element_id, payload)
        logger.debug(
            "Snapshot sent to %s: %d lists (marker=%d)",
            self.element_id,
            len(board.lists),
            payload[TIMESTAMP_KEY],
        )
        return payload

    def publish_card_click(self, list_name: str, card: Card, position: int) -> CardClick:
        """Notify the host that a card was clicked.

        The per-card click count advances even without host.

        Args:
            list_name: Display name of the card's list
            card: The clicked card
            position: 1-based position of the card within its list
        """
        count = self._click_counts.get(card.id, 0) + 1
        self._click_counts[card.id] = count

        click = CardClick(
            list_name=list_name,
            title=card.title,
            id=card.id,
            position=position,
            click_count=count,
        )

        if not self.has_host:
            logger.debug("publish_card_click skipped: no host")
            return click

        key = self.card_channel_key
        self.channel.send(key, click.to_payload())
        logger.debug("Card click sent to %s: %s (count=%d)", key, card.id, count)
        return click

    def click_count(self, card_id: str) -> int:
        """Number of clicks recorded for a card."""
        return self._click_counts.get(card_id, 0)

    # --- Inbound ---

    def receive(self, message: Mapping[str, Any] | None) -> Board | None:
        """Parse a host push of the form ``{"data": board}``.

        Returns:
            The normalized board, or None if the message carries no usable
            data (the caller keeps its current state).
        """
        data = message.get("data") if isinstance(message, Mapping) else None
        if not data or not isinstance(data, Mapping):
            logger.warning("Ignoring host message without board data")
            return None

        try:
            board = Board.from_payload(data)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring malformed board data from host: %s", e)
            return None

        return Board(lists=normalize_positions(board.lists))

    def acknowledge(self, board: Board) -> dict[str, Any] | None:
        """Echo an applied host snapshot back with a fresh marker."""
        return self.publish(board)
