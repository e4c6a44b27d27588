"""Service translating drag-end events into board operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..models import DragEndEvent, DragKind, MutationResult, MutationStatus
from .board_service import BoardService

logger = logging.getLogger(__name__)


class DragService:
    """Interprets drag-end events.

    Lists are dragged within one shared container, so for ``LIST`` drags the
    containers are ignored and the indices refer to display order. Card
    (``TASK``) drags reorder within a list when source and destination
    containers match, and move between lists otherwise.

    Any completed drag, including one dropped back onto its own slot, is
    reported as applied so that it is synced like every other drag.
    """

    def __init__(self, board_service: BoardService) -> None:
        self.board_service = board_service

    def handle(self, event: DragEndEvent | Mapping[str, Any]) -> MutationResult:
        """Apply a drag-end event.

        Args:
            event: The event, or the gesture library's raw drag-end payload

        Returns:
            CANCELLED if there was no destination, otherwise the result of
            the board operation.
        """
        if not isinstance(event, DragEndEvent):
            event = DragEndEvent.from_payload(event)

        if event.cancelled:
            logger.debug("Drag cancelled: %s from %s", event.kind.value, event.source.container)
            return MutationResult(MutationStatus.CANCELLED, self.board_service.board)

        source, destination = event.source, event.destination
        if event.kind is DragKind.LIST:
            return self.board_service.move_list(source.index, destination.index)

        if source.container == destination.container:
            return self.board_service.reorder_card(
                source.container, source.index, destination.index
            )

        return self.board_service.move_card(
            source.container, source.index, destination.container, destination.index
        )
