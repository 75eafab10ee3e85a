"""
Sort-order merge settings for racial_scaling.
"""

from typing import TYPE_CHECKING

from ..core.constants import DEFAULT_TARGET_PATH
from ..core.formatters import sanitize_target_path

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class SortOrderSettings:
    """Manages the sort-order target folder and update toggle."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    @property
    def target_path(self) -> str:
        """Get folder generated mods are placed in."""
        value = self.settings.value("sort_order/target_path", DEFAULT_TARGET_PATH)
        return sanitize_target_path(str(value) if value is not None else "")

    @target_path.setter
    def target_path(self, value: str) -> None:
        """Set target folder (sanitized before storing)."""
        self.settings.setValue("sort_order/target_path", sanitize_target_path(value))
        self.settings.sync()

    @property
    def update_existing(self) -> bool:
        """Whether existing height mods are moved to the target folder too."""
        value = self.settings.value("sort_order/update_existing", False)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    @update_existing.setter
    def update_existing(self, value: bool) -> None:
        self.settings.setValue("sort_order/update_existing", value)
        self.settings.sync()
