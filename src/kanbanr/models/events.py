"""Drag-and-drop and card selection event models."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class DragKind(str, Enum):
    """What is being dragged."""

    LIST = "LIST"
    TASK = "TASK"  # A card


class DragLocation(BaseModel):
    """A slot within a drop container."""

    model_config = ConfigDict(populate_by_name=True)

    container: str = Field(..., validation_alias=AliasChoices("droppableId", "container"))
    index: int = Field(..., ge=0)


class DragEndEvent(BaseModel):
    """A completed (or cancelled) drag gesture."""

    model_config = ConfigDict(populate_by_name=True)

    kind: DragKind = Field(..., validation_alias=AliasChoices("type", "kind"))
    source: DragLocation
    destination: DragLocation | None = None  # None when dropped outside any target

    @property
    def cancelled(self) -> bool:
        """Whether the gesture ended without a valid drop target."""
        return self.destination is None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> DragEndEvent:
        """Create from the gesture library's drag-end result.

        Accepts ``{"type", "source": {"droppableId", "index"}, "destination"}``
        as well as the field names of this model.
        """
        return cls.model_validate(dict(payload))


class CardClick(BaseModel):
    """Selection notification sent to the host when a card is clicked."""

    model_config = ConfigDict(populate_by_name=True)

    list_name: str = Field(..., serialization_alias="listName")
    title: str
    id: str
    position: int  # 1-based position of the card within its list
    click_count: int = Field(..., ge=1, serialization_alias="clickCount")

    def to_payload(self) -> dict[str, Any]:
        """Convert to the host wire format."""
        return self.model_dump(by_alias=True)
