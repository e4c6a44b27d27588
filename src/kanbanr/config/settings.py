"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    element_id: str | None = Field(
        default=None,
        description="Host element ID the board is bound to (no host if unset)",
    )

    host_url: str | None = Field(
        default=None,
        description="Host endpoint for the HTTP channel",
    )

    options_file: Path | None = Field(
        default=None,
        description="Optional YAML file with cosmetic board options",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "KANBANR_",
    }


def element_id_from_environment() -> str | None:
    """Look up the host element ID from the environment."""
    return Settings().element_id
