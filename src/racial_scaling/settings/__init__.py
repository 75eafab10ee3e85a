"""
Settings package for racial_scaling.

This package provides a modular, type-safe configuration management system
using Qt's QSettings for cross-platform storage, plus export/import of
generation settings as JSON files.

Usage:
    from racial_scaling.settings import AppSettings, ValidationResult

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .envelope import build_envelope, export_settings, import_settings
from .generation import GenerationSettings
from .sort_order import SortOrderSettings
from .types import ConfigVersion, ConfigError, ValidationResult

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "GenerationSettings",
    "SortOrderSettings",
    "build_envelope",
    "export_settings",
    "import_settings",
]
