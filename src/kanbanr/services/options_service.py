"""Options service for loading cosmetic board options."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..models import BoardOptions

logger = logging.getLogger(__name__)


class OptionsService:
    """Service for loading and caching board options.

    Options come from an optional YAML file and may be overridden in code.
    Problems with the file never break the board: defaults are used and the
    error is kept for display.
    """

    def __init__(
        self,
        options_file: Path | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize the options service.

        Args:
            options_file: Path to a YAML options file
            overrides: Options applied on top of the file's
        """
        self.options_file = options_file
        self._overrides = dict(overrides or {})
        self._options: BoardOptions | None = None
        self._options_error: str | None = None

    @property
    def has_options_error(self) -> bool:
        """Check if there was an error loading options."""
        return self._options_error is not None

    @property
    def options_error(self) -> str | None:
        """Get the options error message if any."""
        return self._options_error

    def get_options(self) -> BoardOptions:
        """Get options, loading from file if not cached."""
        if self._options is None:
            self._options = self._apply_overrides(self._load_options())
        return self._options

    def reload(self) -> None:
        """Clear cached options, forcing reload on next access."""
        self._options = None
        self._options_error = None

    def _apply_overrides(self, options: BoardOptions) -> BoardOptions:
        if not self._overrides:
            return options
        try:
            return options.merged(self._overrides)
        except ValidationError as e:
            self._options_error = f"Invalid option overrides: {e}"
            logger.warning(self._options_error)
            return options

    def _load_options(self) -> BoardOptions:
        """Load options from file or return defaults."""
        self._options_error = None

        if self.options_file is None:
            return BoardOptions.default()

        name = self.options_file.name
        if not self.options_file.exists():
            logger.debug("No %s found, using default options", name)
            return BoardOptions.default()

        try:
            with open(self.options_file) as f:
                data = yaml.safe_load(f)

            if data is None:
                self._options_error = f"{name} is empty"
                logger.warning(self._options_error)
                return BoardOptions.default()

            if not isinstance(data, dict):
                self._options_error = f"{name} must contain a mapping"
                logger.warning(self._options_error)
                return BoardOptions.default()

            options = BoardOptions.default().merged(data)
            logger.info("Loaded options from %s", name)
            return options

        except yaml.YAMLError as e:
            self._options_error = f"Invalid YAML in {name}: {e}"
            logger.warning(self._options_error)
            return BoardOptions.default()

        except (OSError, ValidationError) as e:
            self._options_error = f"Error loading {name}: {e}"
            logger.warning(self._options_error)
            return BoardOptions.default()
