"""List position normalization.

Positions are 1-based, contiguous and unique across a board. Every list-level
mutation finishes by running ``normalize_positions`` over the result.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..models import BoardList


def ordered_ids(lists: Mapping[str, BoardList]) -> list[str]:
    """Get list IDs in display order.

    Lists without a valid position (< 1) sort after positioned ones; ties
    keep the mapping's iteration order.
    """
    def sort_key(item: tuple[int, str]) -> tuple[bool, int, int]:
        index, list_id = item
        position = lists[list_id].position
        return (position < 1, position, index)

    return [list_id for _, list_id in sorted(enumerate(lists), key=sort_key)]


def normalize_positions(
    lists: Mapping[str, BoardList],
    order: Sequence[str] | None = None,
) -> dict[str, BoardList]:
    """
    Reassign positions 1..N.

    Args:
        lists: Mapping of list ID to list
        order: Explicit display order (e.g. after a splice). Defaults to the
            current position order.

    Returns:
        A new mapping, iterated in display order, whose lists are copies with
        ``position == 1 + rank``.

    Raises:
        ValueError: If ``order`` is not a permutation of the mapping's keys
    """
    if order is None:
        order = ordered_ids(lists)
    elif sorted(order) != sorted(lists):
        raise ValueError("Order must contain every list ID exactly once")

    return {
        list_id: lists[list_id].model_copy(update={"position": rank}, deep=True)
        for rank, list_id in enumerate(order, start=1)
    }


def has_contiguous_positions(lists: Mapping[str, BoardList]) -> bool:
    """Check that positions are exactly 1..N."""
    return sorted(lst.position for lst in lists.values()) == list(range(1, len(lists) + 1))
