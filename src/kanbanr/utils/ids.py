"""Utilities for generating card identifiers."""

from collections.abc import Container


def generate_card_id(list_id: str, millis: int, existing: Container[str] = ()) -> str:
    """
    Generate a card ID from its list and creation time.

    Example: ("todo", 1700000000000) -> "todo-1700000000000"

    If the ID is already taken (two cards created within the same
    millisecond), the time component is bumped until the ID is unique.
    """
    card_id = f"{list_id}-{millis}"
    while card_id in existing:
        millis += 1
        card_id = f"{list_id}-{millis}"
    return card_id
