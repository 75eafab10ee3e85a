"""
Core settings management for racial_scaling.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from ..core.models import GenerationOptions
from .generation import GenerationSettings
from .logging import LoggingSettings
from .sort_order import SortOrderSettings
from .types import ConfigError, ConfigVersion, ValidationResult
from .validation import SettingsValidator

logger = logging.getLogger(__name__)

ORGANIZATION_NAME = "racial_scaling"
APPLICATION_NAME = "racial_scaling"


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(
        self, profile: str = "default", file_path: Optional[Union[str, Path]] = None
    ):
        """Initialize settings for a profile.

        Args:
            profile: Settings profile name (default: "default")
            file_path: Optional INI file to use instead of the native
                       per-user storage
        """
        if file_path:
            self.settings = QSettings(str(file_path), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(ORGANIZATION_NAME, APPLICATION_NAME)
        if self.settings.status() != QSettings.Status.NoError:
            raise ConfigError(
                f"Cannot read settings from {self.settings.fileName()}: {self.settings.status()}"
            )
        self.profile = profile

        # Use profile as a group: racial_scaling/default/...
        self.settings.beginGroup(profile)

        # Initialize subsystems
        self._validator = SettingsValidator(self)
        self._generation = GenerationSettings(self.settings)
        self._sort_order = SortOrderSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        self._ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    def _ensure_version(self) -> None:
        """Record the settings version on first run."""
        if not self._get_str("app/version", ""):
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.setValue("app/first_run", True)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")

    # === SUBSYSTEM ACCESS ===

    @property
    def generation(self) -> GenerationSettings:
        """Access generation settings subsystem."""
        return self._generation

    @property
    def sort_order(self) -> SortOrderSettings:
        """Access sort-order settings subsystem."""
        return self._sort_order

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    # === VERSION AND FIRST RUN ===

    @property
    def is_first_run(self) -> bool:
        """Check if this is the first run of the application."""
        return self._get_bool("app/first_run", True)

    def set_first_run_complete(self) -> None:
        """Mark first run as complete."""
        self.settings.setValue("app/first_run", False)
        self.settings.sync()

    @property
    def version(self) -> str:
        """Get configuration version."""
        return self._get_str("app/version", ConfigVersion.CURRENT.value)

    # === HELPER METHODS ===

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    # === GENERATION SETTINGS (DELEGATED) ===

    @property
    def generation_options(self) -> GenerationOptions:
        """Get last used generation options."""
        return self._generation.options

    @generation_options.setter
    def generation_options(self, value: GenerationOptions) -> None:
        """Store generation options."""
        self._generation.options = value

    # === SORT ORDER SETTINGS (DELEGATED) ===

    @property
    def target_path(self) -> str:
        """Get sort-order target folder."""
        return self._sort_order.target_path

    @target_path.setter
    def target_path(self, value: str) -> None:
        """Set sort-order target folder."""
        self._sort_order.target_path = value

    @property
    def update_existing(self) -> bool:
        """Whether existing height mods are moved to the target folder."""
        return self._sort_order.update_existing

    @update_existing.setter
    def update_existing(self, value: bool) -> None:
        self._sort_order.update_existing = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        """Set console logging enabled state."""
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Set console logging level."""
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        """Set console color usage."""
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        """Set file logging enabled state."""
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get log file path."""
        return self._logging.log_file_path

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        self._logging.log_file_path = value

    @property
    def log_file_absolute_path(self) -> Path:
        """Get absolute path to log file."""
        return self._logging.log_file_absolute_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
