"""
Settings validation system for racial_scaling.
"""

import logging
from typing import List, TYPE_CHECKING

from ..core.constants import LOG_LEVELS
from ..core.validators import validate_generation_options
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # Stored generation options must be usable as-is
        options_validation = validate_generation_options(self.settings.generation_options)
        errors.extend(f"Generation options: {error}" for error in options_validation.errors)

        if self.settings.console_log_level.upper() not in LOG_LEVELS:
            warnings.append(
                f"Unknown console log level '{self.settings.console_log_level}', INFO is used"
            )

        if self.settings.file_logging:
            log_dir = self.settings.log_file_absolute_path.parent
            if log_dir.exists() and not log_dir.is_dir():
                errors.append(f"Log directory is not a directory: {log_dir}")

        for warning in warnings:
            logger.debug(warning)

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
