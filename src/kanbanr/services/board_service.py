"""Service for board state management."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from ..models import (
    MARKER_PREFIX,
    Board,
    BoardList,
    Card,
    MutationResult,
    MutationStatus,
    is_reserved_name,
)
from ..utils import generate_card_id, insert_at, move_item, now_millis, remove_at
from .positions import normalize_positions

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A list with this name already exists. Please choose a different name."
RESERVED_NAME_MESSAGE = f"List names cannot start with '{MARKER_PREFIX}'."


class BoardService:
    """Service for board state transitions.

    Holds the current Board. Every operation builds a new Board and swaps it
    in only when the transition is applied; boards handed out earlier are
    never mutated. Validation failures return a result with the matching
    status and leave the board untouched.
    """

    def __init__(
        self,
        board: Board | None = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        """Initialize the service.

        Args:
            board: Initial board (empty if omitted)
            clock: Millisecond clock used for card IDs
        """
        self._clock = clock
        self._board = Board(lists=normalize_positions((board or Board()).lists))

    @property
    def board(self) -> Board:
        """The current board (treat as read-only)."""
        return self._board

    def ordered_ids(self) -> list[str]:
        """List IDs in display order."""
        return self._board.ordered_ids()

    # --- Lists ---

    def create_list(self, name: str) -> MutationResult:
        """Create an empty list at the end of the board.

        The trimmed name is both the list's key and its label. Names starting
        with the marker prefix are reserved for protocol keys.
        """
        name = name.strip()
        if not name:
            return self._reject(MutationStatus.EMPTY_INPUT, "List name cannot be empty")
        if is_reserved_name(name):
            logger.debug("create_list: reserved name: %s", name)
            return self._reject(MutationStatus.RESERVED_NAME, RESERVED_NAME_MESSAGE)
        if name in self._board.lists:
            logger.debug("create_list: duplicate name: %s", name)
            return self._reject(MutationStatus.DUPLICATE_NAME, DUPLICATE_NAME_MESSAGE)

        lists = dict(self._board.lists)
        lists[name] = BoardList(name=name, position=len(lists) + 1)

        logger.info("List created: %s", name)
        return self._commit(normalize_positions(lists))

    def delete_list(self, list_id: str) -> MutationResult:
        """Delete a list and its cards.

        The caller must obtain user confirmation first.
        """
        if list_id not in self._board.lists:
            logger.debug("delete_list: list not found: %s", list_id)
            return self._reject(MutationStatus.NOT_FOUND, f"List '{list_id}' not found")

        lists = {key: lst for key, lst in self._board.lists.items() if key != list_id}

        logger.info("List deleted: %s", list_id)
        return self._commit(normalize_positions(lists))

    def rename_list(self, old_id: str, new_name: str) -> MutationResult:
        """
        Rename a list, re-keying it under the new name.

        Items and position are preserved. An empty name or a name equal to
        the current key discards the edit; a name used by another list, or
        one starting with the marker prefix, is rejected.
        """
        new_name = new_name.strip()
        if not new_name:
            return self._reject(MutationStatus.EMPTY_INPUT, "List name cannot be empty")

        current = self._board.get(old_id)
        if current is None:
            logger.debug("rename_list: list not found: %s", old_id)
            return self._reject(MutationStatus.NOT_FOUND, f"List '{old_id}' not found")

        if new_name == old_id:
            return self._reject(MutationStatus.UNCHANGED)

        if is_reserved_name(new_name):
            logger.debug("rename_list: reserved name: %s -> %s", old_id, new_name)
            return self._reject(MutationStatus.RESERVED_NAME, RESERVED_NAME_MESSAGE)

        if new_name in self._board.lists:
            logger.debug("rename_list: duplicate name: %s -> %s", old_id, new_name)
            return self._reject(MutationStatus.DUPLICATE_NAME, DUPLICATE_NAME_MESSAGE)

        # Delete then insert; the normalizer restores display order
        lists = dict(self._board.lists)
        del lists[old_id]
        lists[new_name] = current.model_copy(update={"name": new_name})

        logger.info("List renamed: %s -> %s", old_id, new_name)
        return self._commit(normalize_positions(lists))

    def move_list(self, from_index: int, to_index: int) -> MutationResult:
        """
        Move a list to another display slot.

        Args:
            from_index: 0-based index in display order of the list to move
            to_index: 0-based index it should end up at (clamped)
        """
        order = self.ordered_ids()
        try:
            new_order = move_item(order, from_index, to_index)
        except IndexError:
            logger.debug("move_list: index out of range: %d", from_index)
            return self._reject(MutationStatus.NOT_FOUND, f"No list at index {from_index}")

        logger.info("List moved: %s (index %d -> %d)", order[from_index], from_index, to_index)
        return self._commit(normalize_positions(self._board.lists, new_order))

    # --- Cards ---

    def add_card(self, list_id: str, title: str) -> MutationResult:
        """Append a new card to a list."""
        title = title.strip()
        if not title:
            return self._reject(MutationStatus.EMPTY_INPUT, "Card title cannot be empty")

        target = self._board.get(list_id)
        if target is None:
            logger.debug("add_card: list not found: %s", list_id)
            return self._reject(MutationStatus.NOT_FOUND, f"List '{list_id}' not found")

        card = Card(
            id=generate_card_id(list_id, self._clock(), self._board.card_ids()),
            title=title,
        )
        lists = dict(self._board.lists)
        lists[list_id] = target.model_copy(update={"items": [*target.items, card]})

        logger.info("Card added: %s to %s", card.id, list_id)
        return self._commit(lists, card=card)

    def delete_card(self, list_id: str, card_id: str) -> MutationResult:
        """Delete a card from a list by ID."""
        target = self._board.get(list_id)
        if target is None or not any(card.id == card_id for card in target.items):
            logger.debug("delete_card: card not found: %s in %s", card_id, list_id)
            return self._reject(MutationStatus.NOT_FOUND, f"Card '{card_id}' not found")

        lists = dict(self._board.lists)
        lists[list_id] = target.model_copy(
            update={"items": [card for card in target.items if card.id != card_id]}
        )

        logger.info("Card deleted: %s from %s", card_id, list_id)
        return self._commit(lists)

    def reorder_card(self, list_id: str, from_index: int, to_index: int) -> MutationResult:
        """Move a card to another slot within the same list."""
        target = self._board.get(list_id)
        if target is None:
            logger.debug("reorder_card: list not found: %s", list_id)
            return self._reject(MutationStatus.NOT_FOUND, f"List '{list_id}' not found")

        try:
            items = move_item(target.items, from_index, to_index)
        except IndexError:
            logger.debug("reorder_card: index out of range: %d in %s", from_index, list_id)
            return self._reject(MutationStatus.NOT_FOUND, f"No card at index {from_index}")

        lists = dict(self._board.lists)
        lists[list_id] = target.model_copy(update={"items": items})

        logger.debug("Card reordered in %s (pos %d -> %d)", list_id, from_index, to_index)
        return self._commit(lists)

    def move_card(
        self,
        from_list_id: str,
        from_index: int,
        to_list_id: str,
        to_index: int,
    ) -> MutationResult:
        """
        Move a card, possibly to another list.

        List positions are never affected by card moves.
        """
        if from_list_id == to_list_id:
            return self.reorder_card(from_list_id, from_index, to_index)

        source = self._board.get(from_list_id)
        target = self._board.get(to_list_id)
        if source is None or target is None:
            missing = from_list_id if source is None else to_list_id
            logger.debug("move_card: list not found: %s", missing)
            return self._reject(MutationStatus.NOT_FOUND, f"List '{missing}' not found")

        try:
            remaining, card = remove_at(source.items, from_index)
        except IndexError:
            logger.debug("move_card: index out of range: %d in %s", from_index, from_list_id)
            return self._reject(MutationStatus.NOT_FOUND, f"No card at index {from_index}")

        lists = dict(self._board.lists)
        lists[from_list_id] = source.model_copy(update={"items": remaining})
        lists[to_list_id] = target.model_copy(
            update={"items": insert_at(target.items, to_index, card)}
        )

        logger.info("Card moved: %s (%s -> %s)", card.id, from_list_id, to_list_id)
        return self._commit(lists)

    # --- Whole board ---

    def replace(self, board: Board | Mapping[str, BoardList]) -> MutationResult:
        """Replace the whole board (no merge) and renormalize positions."""
        lists = board.lists if isinstance(board, Board) else board
        logger.info("Board replaced: %d lists", len(lists))
        return self._commit(normalize_positions(lists))

    def _commit(
        self,
        lists: Mapping[str, BoardList],
        card: Card | None = None,
    ) -> MutationResult:
        self._board = Board(lists=dict(lists))
        return MutationResult(MutationStatus.APPLIED, self._board, card=card)

    def _reject(self, status: MutationStatus, message: str | None = None) -> MutationResult:
        return MutationResult(status, self._board, message=message)
