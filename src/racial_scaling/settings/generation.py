"""
Generation-related settings for racial_scaling.
"""

import logging
from typing import TYPE_CHECKING

from ..core.models import GenerationOptions

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class GenerationSettings:
    """Persists the last used generation options."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_float(self, key: str, default: float) -> float:
        """Type-safe float retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            if value is None:
                return default
            return float(value)  # type: ignore
        except (ValueError, TypeError):
            return default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    @property
    def options(self) -> GenerationOptions:
        """Get last used generation options (defaults on first run)."""
        defaults = GenerationOptions()
        prefix = self.settings.value("generation/prefix", defaults.prefix)
        return GenerationOptions(
            min_multiplier=self._get_float("generation/min_multiplier", defaults.min_multiplier),
            max_multiplier=self._get_float("generation/max_multiplier", defaults.max_multiplier),
            step_increment=self._get_float("generation/step_increment", defaults.step_increment),
            generate_min=self._get_bool("generation/generate_min", defaults.generate_min),
            generate_max=self._get_bool("generation/generate_max", defaults.generate_max),
            prefix=str(prefix) if prefix is not None else "",
        )

    @options.setter
    def options(self, value: GenerationOptions) -> None:
        """Store generation options."""
        self.settings.setValue("generation/min_multiplier", value.min_multiplier)
        self.settings.setValue("generation/max_multiplier", value.max_multiplier)
        self.settings.setValue("generation/step_increment", value.step_increment)
        self.settings.setValue("generation/generate_min", value.generate_min)
        self.settings.setValue("generation/generate_max", value.generate_max)
        self.settings.setValue("generation/prefix", value.prefix)
        self.settings.sync()
        logger.debug(f"Stored generation options: {value}")

    def reset(self) -> None:
        """Forget stored options."""
        self.settings.remove("generation")
        self.settings.sync()
