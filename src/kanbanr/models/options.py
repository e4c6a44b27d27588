"""Cosmetic board options.

These only affect rendering, never state transitions. Every field has a
default and any subset can be overridden with a single mapping, using either
snake_case or the host's camelCase keys (``backgroundColor``, ``listIcon``).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_DELETE_ICON = "\U0001f5d1\ufe0f"  # wastebasket emoji


def _validate_color(v: str) -> str:
    """Validate color is a valid named color or hex code."""
    if not v:
        raise ValueError("Color cannot be empty")
    if v.startswith("#"):
        hex_part = v[1:]
        if len(hex_part) not in (3, 6):
            raise ValueError("Hex color must be 3 or 6 characters (e.g., #fff or #ffffff)")
        if not all(c in "0123456789abcdefABCDEF" for c in hex_part):
            raise ValueError("Invalid hex color code")
    return v


class _OptionsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeleteButtonStyle(_OptionsModel):
    """Delete affordances for lists and cards."""

    color: str = "white"
    background_color: str = "red"
    list_icon: str = Field(default=DEFAULT_DELETE_ICON, description="Markup for list delete")
    task_icon: str = Field(default=DEFAULT_DELETE_ICON, description="Markup for card delete")

    @field_validator("color", "background_color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Validate color is a valid named color or hex code."""
        return _validate_color(v)


class Captions(_OptionsModel):
    """Button captions."""

    add_list: str = "+ Add List"
    add_card: str = "+ Add a card"
    confirm_add_list: str = "Add"
    confirm_add_card: str = "Add Card"
    save: str = "Save"
    cancel: str = "Cancel"
    list_name_placeholder: str = "Enter List Name"
    card_title_placeholder: str = "Enter card title"


class BoardOptions(_OptionsModel):
    """All cosmetic options of a board."""

    delete_button_style: DeleteButtonStyle = Field(default_factory=DeleteButtonStyle)
    captions: Captions = Field(default_factory=Captions)

    @classmethod
    def default(cls) -> BoardOptions:
        """Create options with every default."""
        return cls()

    def merged(self, overrides: Mapping[str, Any] | None) -> BoardOptions:
        """Return a copy with ``overrides`` applied on top of these options.

        Only the keys present in ``overrides`` are replaced; nested sections
        are merged key by key.

        Raises:
            pydantic.ValidationError: If an override is invalid
        """
        if not overrides:
            return self.model_copy(deep=True)
        patch = type(self).model_validate(dict(overrides)).model_dump(exclude_unset=True)
        return type(self).model_validate(_deep_merge(self.model_dump(), patch))

    def to_payload(self) -> dict[str, Any]:
        """Convert to the host's camelCase format."""
        return self.model_dump(by_alias=True)


def _deep_merge(base: dict[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in patch.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
