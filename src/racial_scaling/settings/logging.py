"""
Logging settings for racial_scaling: console output and the CSV log file.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ..core.constants import DEFAULT_CONSOLE_LEVEL, DEFAULT_LOG_FILE, LOG_LEVELS

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class LoggingSettings:
    """Console and file logging switches stored under the `logging/` group."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _flag(self, key: str, default: bool) -> bool:
        # INI-backed storage hands booleans back as strings
        value = self.settings.value(f"logging/{key}", default)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    def _store(self, key: str, value: object) -> None:
        self.settings.setValue(f"logging/{key}", value)
        self.settings.sync()

    @property
    def console_logging(self) -> bool:
        return self._flag("console_enabled", True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._store("console_enabled", value)

    @property
    def console_log_level(self) -> str:
        """Console level name, as stored."""
        value = self.settings.value("logging/console_level", DEFAULT_CONSOLE_LEVEL)
        return str(value) if value else DEFAULT_CONSOLE_LEVEL

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Store a level name; unknown names leave the current level in place."""
        level = value.upper()
        if level not in LOG_LEVELS:
            logger.warning(f"Invalid console log level: {value}, keeping {self.console_log_level}")
            return
        self._store("console_level", level)

    @property
    def console_use_colors(self) -> bool:
        return self._flag("console_use_colors", True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._store("console_use_colors", value)

    @property
    def file_logging(self) -> bool:
        return self._flag("file_enabled", False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._store("file_enabled", value)

    @property
    def log_file_path(self) -> str:
        """Log file location; relative paths resolve against the working directory."""
        value = self.settings.value("logging/file_path", DEFAULT_LOG_FILE)
        return str(value).strip() if value else DEFAULT_LOG_FILE

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        self._store("file_path", value.strip())

    @property
    def log_file_absolute_path(self) -> Path:
        return Path(self.log_file_path).resolve()
