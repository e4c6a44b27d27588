"""Outcome models for board mutations."""

from dataclasses import dataclass
from enum import Enum

from .board import Board, Card


class MutationStatus(str, Enum):
    """Outcome of a board operation."""

    APPLIED = "applied"  # Transition performed; the engine syncs it unless it came from the host
    UNCHANGED = "unchanged"  # Input equals the current value
    EMPTY_INPUT = "empty_input"  # Trimmed name or title was empty
    DUPLICATE_NAME = "duplicate_name"  # Name collides with another list
    RESERVED_NAME = "reserved_name"  # Name starts with the protocol marker prefix
    NOT_FOUND = "not_found"  # List, card or index does not exist
    CANCELLED = "cancelled"  # Drag without destination, or declined confirmation


REJECTED_STATUSES = frozenset(
    {
        MutationStatus.EMPTY_INPUT,
        MutationStatus.DUPLICATE_NAME,
        MutationStatus.RESERVED_NAME,
        MutationStatus.NOT_FOUND,
    }
)


@dataclass
class MutationResult:
    """Result of a board operation."""

    status: MutationStatus
    board: Board  # The new board, or the current one when nothing changed
    message: str | None = None  # Notice the caller may surface to the user
    card: Card | None = None  # Card created by add_card

    @property
    def changed(self) -> bool:
        """Whether the operation was applied."""
        return self.status is MutationStatus.APPLIED

    @property
    def rejected(self) -> bool:
        """Whether the operation failed validation."""
        return self.status in REJECTED_STATUSES
