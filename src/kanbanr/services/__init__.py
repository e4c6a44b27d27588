"""Service layer for board state and host synchronization."""

from .board_service import DUPLICATE_NAME_MESSAGE, RESERVED_NAME_MESSAGE, BoardService
from .drag_service import DragService
from .options_service import OptionsService
from .positions import has_contiguous_positions, normalize_positions, ordered_ids
from .sync_bridge import CARD_CHANNEL_SUFFIX, SyncBridge, resolve_element_id

__all__ = [
    "CARD_CHANNEL_SUFFIX",
    "DUPLICATE_NAME_MESSAGE",
    "RESERVED_NAME_MESSAGE",
    "BoardService",
    "DragService",
    "OptionsService",
    "SyncBridge",
    "has_contiguous_positions",
    "normalize_positions",
    "ordered_ids",
    "resolve_element_id",
]
