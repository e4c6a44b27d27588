"""Data models."""

from .board import MARKER_PREFIX, TIMESTAMP_KEY, Board, BoardList, Card, is_reserved_name
from .events import CardClick, DragEndEvent, DragKind, DragLocation
from .options import BoardOptions, Captions, DeleteButtonStyle
from .results import MutationResult, MutationStatus

__all__ = [
    "MARKER_PREFIX",
    "TIMESTAMP_KEY",
    "Board",
    "BoardList",
    "BoardOptions",
    "Captions",
    "Card",
    "CardClick",
    "DeleteButtonStyle",
    "DragEndEvent",
    "DragKind",
    "DragLocation",
    "MutationResult",
    "MutationStatus",
    "is_reserved_name",
]
