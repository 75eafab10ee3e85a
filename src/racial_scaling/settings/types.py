"""
Configuration type definitions and exceptions for racial_scaling.
"""

from enum import Enum

from ..core.errors import RacialScalingError
from ..core.models import ValidationResult


class ConfigVersion(Enum):
    """Version of the settings layout and of exported settings files."""
    V1_0 = "1.0.0"
    CURRENT = V1_0


class ConfigError(RacialScalingError):
    """Raised when configuration is invalid or cannot be accessed."""
    pass


__all__ = ["ConfigVersion", "ConfigError", "ValidationResult"]
