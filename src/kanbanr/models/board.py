"""Board state models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Payload keys with this prefix are protocol markers (e.g. "_timestamp"), never lists
MARKER_PREFIX = "_"
TIMESTAMP_KEY = "_timestamp"


def is_reserved_name(name: str) -> bool:
    """Whether a list key would be read back as a protocol marker."""
    return name.startswith(MARKER_PREFIX)


class Card(BaseModel):
    """A titled unit of work contained in exactly one list."""

    id: str = Field(..., min_length=1)  # e.g., "todo-1700000000000", never changes
    title: str


class BoardList(BaseModel):
    """A named, positioned column holding an ordered sequence of cards.

    The list's identifier is its key in ``Board.lists``; ``name`` is the
    display label and only differs from the key while a rename is in progress.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    items: list[Card] = Field(default_factory=list)
    # 0 means "not yet assigned"; the position normalizer fixes it
    position: int = Field(
        default=0,
        validation_alias=AliasChoices("listPosition", "position"),
        serialization_alias="listPosition",
    )


class Board(BaseModel):
    """The entire mapping of lists and their cards."""

    lists: dict[str, BoardList] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> Board:
        """Create a Board from the host wire format.

        Marker keys are skipped and a missing ``name`` defaults to the key.

        Raises:
            TypeError: If a key is not a string or a list entry is not a mapping
            ValueError: If a list entry fails validation
        """
        if not payload:
            return cls()

        lists: dict[str, BoardList] = {}
        for list_id, raw in payload.items():
            if not isinstance(list_id, str):
                raise TypeError(f"List key must be a string, got {type(list_id).__name__}")
            if is_reserved_name(list_id):
                continue
            if isinstance(raw, BoardList):
                lists[list_id] = raw.model_copy(deep=True)
                continue
            if not isinstance(raw, Mapping):
                raise TypeError(f"List '{list_id}' must be a mapping, got {type(raw).__name__}")
            lists[list_id] = BoardList.model_validate({"name": list_id, **raw})
        return cls(lists=lists)

    def to_payload(self) -> dict[str, Any]:
        """Convert to the host wire format, in display order."""
        return {
            list_id: self.lists[list_id].model_dump(by_alias=True)
            for list_id in self.ordered_ids()
        }

    def get(self, list_id: str) -> BoardList | None:
        """Get a list by its identifier."""
        return self.lists.get(list_id)

    def ordered_ids(self) -> list[str]:
        """List identifiers sorted by position (ties keep mapping order)."""
        return sorted(
            self.lists,
            key=lambda list_id: (self.lists[list_id].position < 1, self.lists[list_id].position),
        )

    def card_ids(self) -> set[str]:
        """All card IDs on the board."""
        return {card.id for lst in self.lists.values() for card in lst.items}

