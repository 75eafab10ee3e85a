"""
Settings export and import.

An exported settings file wraps the generation options in an envelope:
version, ISO 8601 timestamp, options and a summary of the loaded templates.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.errors import StructuralError
from ..core.loaders import DocumentLoader, DocumentSource, write_document
from ..core.models import GenerationOptions, JsonDocument
from .types import ConfigVersion

logger = logging.getLogger(__name__)


def build_envelope(
    options: GenerationOptions,
    template_info: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> JsonDocument:
    """Create the settings envelope for export."""
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return {
        "version": ConfigVersion.CURRENT.value,
        "timestamp": timestamp,
        "options": options.to_dict(),
        "templateInfo": template_info or {},
    }


def default_export_filename(now: Optional[datetime] = None) -> str:
    """File name like racial-scaling-settings-2024-01-31.json."""
    return f"racial-scaling-settings-{(now or datetime.now()).strftime('%Y-%m-%d')}.json"


def export_settings(
    path: Path,
    options: GenerationOptions,
    template_info: Optional[Dict[str, Any]] = None,
) -> Path:
    """Write a settings file. A directory gets the default file name.

    Returns:
        Path of the written file
    """
    path = Path(path)
    if path.is_dir():
        path = path / default_export_filename()

    envelope = build_envelope(options, template_info)
    write_document(envelope, path)
    logger.info(f"Settings exported to {path}")
    return path


def import_settings(
    source: DocumentSource, loader: Optional[DocumentLoader] = None
) -> GenerationOptions:
    """Read generation options from a settings file.

    A file from another version is accepted with a compatibility warning.

    Raises:
        StructuralError: If the file is not JSON or lacks version/options
    """
    data = (loader or DocumentLoader()).load(source, "settings file")

    missing = [key for key in ("version", "options") if not data.get(key)]
    if missing or not isinstance(data.get("options"), dict):
        raise StructuralError("Invalid settings file format", missing_fields=missing)

    if data["version"] != ConfigVersion.CURRENT.value:
        logger.warning(
            f"Settings file version {data['version']} may not be fully compatible"
        )

    options = GenerationOptions.from_dict(data["options"])
    logger.info(f"Settings imported: {options}")
    return options
