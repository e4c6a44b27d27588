"""Kanban board state engine mirrored to a host process."""

from .engine import KanbanBoard, RenameSession
from .models import Board, BoardList, BoardOptions, Card, DragEndEvent, DragKind
from .models import MutationResult, MutationStatus

__version__ = "0.1.0"

__all__ = [
    "Board",
    "BoardList",
    "BoardOptions",
    "Card",
    "DragEndEvent",
    "DragKind",
    "KanbanBoard",
    "MutationResult",
    "MutationStatus",
    "RenameSession",
]
