"""Kanban board engine.

``KanbanBoard`` is what a presentation layer talks to. It owns the board
state, interprets drag-end events and keeps the host in sync: every applied
mutation is followed by a snapshot, rejected or cancelled ones are not.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .channels import HostChannel
from .config import element_id_from_environment
from .models import (
    Board,
    BoardOptions,
    CardClick,
    DragEndEvent,
    MutationResult,
    MutationStatus,
)
from .services import BoardService, DragService, SyncBridge
from .utils import now_millis

logger = logging.getLogger(__name__)

BoardData = Board | Mapping[str, Any]

_CORRECTABLE_STATUSES = frozenset({MutationStatus.DUPLICATE_NAME, MutationStatus.RESERVED_NAME})


@dataclass
class RenameSession:
    """The single in-flight list rename."""

    list_id: str
    draft: str


class KanbanBoard:
    """Interactive board of ordered lists of cards mirrored to a host."""

    def __init__(
        self,
        data: BoardData | None = None,
        element_id: str | None = None,
        channel: HostChannel | None = None,
        element_lookup: Callable[[], str | None] | None = element_id_from_environment,
        options: BoardOptions | Mapping[str, Any] | None = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        """Initialize the board.

        Args:
            data: Initial board snapshot (empty board if omitted)
            element_id: Host element ID; falls back to ``element_lookup``
            channel: Transport to the host (None for standalone use)
            element_lookup: Fallback element ID lookup
            options: Cosmetic options or overrides of the defaults
            clock: Millisecond clock for card IDs and snapshot markers

        Raises:
            TypeError, ValueError: If ``data`` is not a valid board snapshot
        """
        self.board_service = BoardService(_to_board(data), clock=clock)
        self.drag_service = DragService(self.board_service)
        self.sync = SyncBridge(channel, element_id, element_lookup, clock)
        if isinstance(options, BoardOptions):
            self.options = options
        else:
            self.options = BoardOptions.default().merged(options)
        self._rename: RenameSession | None = None

        self.sync.attach(self.handle_host_message)

    @property
    def board(self) -> Board:
        """The current board."""
        return self.board_service.board

    @property
    def rename_session(self) -> RenameSession | None:
        """The list rename in progress, if any."""
        return self._rename

    def snapshot(self) -> dict[str, Any]:
        """The current board in host wire format."""
        return self.board.to_payload()

    # --- Lists ---

    def create_list(self, name: str) -> MutationResult:
        """Create a list at the end of the board."""
        return self._publish(self.board_service.create_list(name))

    def delete_list(
        self,
        list_id: str,
        confirm: Callable[[str], bool] | None = None,
    ) -> MutationResult:
        """Delete a list.

        Args:
            list_id: List to delete
            confirm: Asked with the list's name before the irreversible
                removal; returning False cancels the deletion
        """
        target = self.board.get(list_id)
        if target is not None and confirm is not None and not confirm(target.name):
            logger.debug("delete_list: not confirmed: %s", list_id)
            return MutationResult(MutationStatus.CANCELLED, self.board)

        result = self._publish(self.board_service.delete_list(list_id))
        if result.changed and self._rename and self._rename.list_id == list_id:
            self._rename = None
        return result

    def rename_list(self, old_id: str, new_name: str) -> MutationResult:
        """Rename a list in one step.

        A rename in progress on the same list follows it to its new key.
        """
        result = self._publish(self.board_service.rename_list(old_id, new_name))
        if result.changed and self._rename and self._rename.list_id == old_id:
            self._rename.list_id = new_name.strip()
        return result

    def begin_rename(self, list_id: str) -> RenameSession | None:
        """Start renaming a list, replacing any rename in progress.

        The draft starts as the list's current name.
        """
        target = self.board.get(list_id)
        if target is None:
            return None
        self._rename = RenameSession(list_id=list_id, draft=target.name)
        return self._rename

    def update_rename_draft(self, text: str) -> None:
        """Change the text of the rename in progress."""
        if self._rename is not None:
            self._rename.draft = text

    def cancel_rename(self) -> None:
        """Discard the rename in progress."""
        self._rename = None

    def commit_rename(self) -> MutationResult:
        """Apply the rename in progress.

        The session stays open when the name is taken or reserved so it can
        be corrected; otherwise it ends.
        """
        if self._rename is None:
            return MutationResult(MutationStatus.UNCHANGED, self.board)

        result = self.rename_list(self._rename.list_id, self._rename.draft)
        if result.status not in _CORRECTABLE_STATUSES:
            self._rename = None
        return result

    def move_list(self, from_index: int, to_index: int) -> MutationResult:
        """Move a list between display slots."""
        return self._publish(self.board_service.move_list(from_index, to_index))

    # --- Cards ---

    def add_card(self, list_id: str, title: str) -> MutationResult:
        """Append a card to a list."""
        return self._publish(self.board_service.add_card(list_id, title))

    def delete_card(self, list_id: str, card_id: str) -> MutationResult:
        """Delete a card."""
        return self._publish(self.board_service.delete_card(list_id, card_id))

    def move_card(
        self,
        from_list_id: str,
        from_index: int,
        to_list_id: str,
        to_index: int,
    ) -> MutationResult:
        """Move a card, possibly to another list."""
        return self._publish(
            self.board_service.move_card(from_list_id, from_index, to_list_id, to_index)
        )

    def drag_end(self, event: DragEndEvent | Mapping[str, Any]) -> MutationResult:
        """Apply a completed (or cancelled) drag gesture."""
        return self._publish(self.drag_service.handle(event))

    def click_card(self, list_id: str, card_id: str) -> CardClick | None:
        """Report a (non-drag) click on a card to the host.

        Returns:
            The selection sent, or None if the card does not exist.
        """
        target = self.board.get(list_id)
        if target is None:
            return None
        for index, card in enumerate(target.items):
            if card.id == card_id:
                return self.sync.publish_card_click(target.name, card, index + 1)
        logger.debug("click_card: card not found: %s in %s", card_id, list_id)
        return None

    # --- Host ---

    def set_data(self, data: BoardData | None) -> MutationResult:
        """Replace the board from the data property (no echo).

        The result is APPLIED but nothing is published, since the data came
        from the host. None or malformed data keeps the current board.
        """
        if data is None:
            return MutationResult(MutationStatus.UNCHANGED, self.board)
        try:
            board = _to_board(data)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring malformed board data: %s", e)
            return MutationResult(
                MutationStatus.UNCHANGED, self.board, message=f"Malformed board data: {e}"
            )

        result = self.board_service.replace(board)
        self._drop_stale_rename()
        return result

    def handle_host_message(self, message: Mapping[str, Any]) -> MutationResult:
        """Apply a host push of ``{"data": board}`` and echo it back.

        The pushed board replaces local state wholesale, even if local
        changes were not yet seen by the host. Messages without usable data
        leave the board as it is.
        """
        board = self.sync.receive(message)
        if board is None:
            return MutationResult(
                MutationStatus.UNCHANGED, self.board, message="No board data received"
            )

        result = self.board_service.replace(board)
        self._drop_stale_rename()
        self.sync.acknowledge(result.board)
        return result

    def _publish(self, result: MutationResult) -> MutationResult:
        if result.changed:
            self.sync.publish(result.board)
        return result

    def _drop_stale_rename(self) -> None:
        if self._rename and self._rename.list_id not in self.board.lists:
            self._rename = None


def _to_board(data: BoardData | None) -> Board:
    if data is None:
        return Board()
    if isinstance(data, Board):
        return data
    if not isinstance(data, Mapping):
        raise TypeError(f"Board data must be a mapping, got {type(data).__name__}")
    return Board.from_payload(data)
