"""Splice helpers for ordered sequences.

Both list reordering and card moves reduce to remove-at-index followed by
insert-at-index; everything here returns a new list and never mutates input.
"""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def clamp_index(index: int, length: int) -> int:
    """Clamp an insertion index to ``[0, length]``."""
    return max(0, min(index, length))


def remove_at(items: Sequence[T], index: int) -> tuple[list[T], T]:
    """Remove the element at ``index``.

    Returns:
        (remaining items, removed element)

    Raises:
        IndexError: If index is outside ``[0, len(items))``
    """
    if not 0 <= index < len(items):
        raise IndexError(f"Index {index} out of range for {len(items)} items")
    remaining = list(items)
    removed = remaining.pop(index)
    return remaining, removed


def insert_at(items: Sequence[T], index: int, item: T) -> list[T]:
    """Insert ``item`` at ``index`` (clamped to the valid range)."""
    result = list(items)
    result.insert(clamp_index(index, len(result)), item)
    return result


def move_item(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """Move one element within a sequence.

    Example: move_item(["a", "b", "c"], 2, 0) -> ["c", "a", "b"]

    Raises:
        IndexError: If from_index is outside ``[0, len(items))``
    """
    remaining, moved = remove_at(items, from_index)
    return insert_at(remaining, to_index, moved)
