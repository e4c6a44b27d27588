"""Utility functions."""

from .datetime import now_millis, now_utc
from .ids import generate_card_id
from .sequence import clamp_index, insert_at, move_item, remove_at

__all__ = [
    "clamp_index",
    "generate_card_id",
    "insert_at",
    "move_item",
    "now_millis",
    "now_utc",
    "remove_at",
]
