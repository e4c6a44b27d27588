"""Application configuration."""

from .settings import Settings, element_id_from_environment

__all__ = [
    "Settings",
    "element_id_from_environment",
]
