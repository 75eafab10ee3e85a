"""
ZIP archive writer for generated mods.

Each generated variant becomes one folder holding a Penumbra-style
meta.json and default_mod.json.
"""

import io
import logging
import os
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from .constants import META_FILE_NAME, MOD_FILE_NAME
from .errors import ArchiveError
from .formatters import format_file_size
from .models import ArchiveValidation, GeneratedVariant


@dataclass(frozen=True)
class ArchiveEntry:
    """One file in the archive."""

    path: str
    content: str


class ArchiveWriter:
    """Collects generated mods in order and packs them into a ZIP archive."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.entries: List[ArchiveEntry] = []
        self._folders: List[str] = []
        self._data: Optional[bytes] = None

    def add_variant(self, variant: GeneratedVariant) -> None:
        """Queue the two documents of a generated variant."""
        folder = variant.folder_name
        if folder not in self._folders:
            self._folders.append(folder)
        self.entries.append(ArchiveEntry(f"{folder}/{META_FILE_NAME}", variant.meta_json))
        self.entries.append(ArchiveEntry(f"{folder}/{MOD_FILE_NAME}", variant.mod_json))
        self._data = None

    def get_folder_list(self) -> List[str]:
        """Folder names in insertion order."""
        return self._folders.copy()

    def build(self) -> bytes:
        """Build (or return the cached) ZIP archive bytes.

        Raises:
            ArchiveError: If the archive cannot be written
        """
        if self._data is not None:
            return self._data

        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for entry in self.entries:
                    zf.writestr(entry.path, entry.content)
        except (OSError, zipfile.BadZipFile, ValueError) as e:
            raise ArchiveError(f"Failed to build archive: {e}") from e

        self._data = buffer.getvalue()
        self.logger.debug(
            f"Built archive with {len(self.entries)} files ({format_file_size(len(self._data))})"
        )
        return self._data

    def validate(self) -> ArchiveValidation:
        """Check the archive is non-empty and every folder has both documents.

        Returns:
            ArchiveValidation with info: folderCount, fileCount, size, sizeText
        """
        errors: List[str] = []

        if not self.entries:
            return ArchiveValidation(is_valid=False, errors=["Archive is empty"])

        try:
            data = self.build()
            with zipfile.ZipFile(io.BytesIO(data)) as zf:
                names = set(zf.namelist())
                bad_file = zf.testzip()
        except (ArchiveError, zipfile.BadZipFile) as e:
            return ArchiveValidation(is_valid=False, errors=[f"Archive is corrupt: {e}"])

        if bad_file:
            errors.append(f"Corrupt archive member: {bad_file}")

        for folder in self._folders:
            for file_name in (META_FILE_NAME, MOD_FILE_NAME):
                if f"{folder}/{file_name}" not in names:
                    errors.append(f"Missing {file_name} in folder '{folder}'")

        if len(self.entries) != len(names):
            errors.append(
                f"Archive holds {len(names)} files but {len(self.entries)} were added "
                "(duplicate folder names?)"
            )

        info: Dict[str, object] = {
            "folderCount": len(self._folders),
            "fileCount": len(names),
            "size": len(data),
            "sizeText": format_file_size(len(data)),
        }
        return ArchiveValidation(is_valid=not errors, errors=errors, info=info)

    def save(self, path: Path) -> Path:
        """Write the archive to disk.

        The archive is written to a temporary file next to the target and
        moved into place, so a failed write leaves no partial file.

        Raises:
            ArchiveError: If the archive is empty or cannot be written
        """
        if not self.entries:
            raise ArchiveError("No mods generated. Please generate mods first.")

        path = Path(path)
        data = self.build()
        tmp_name: Optional[str] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".racial_scaling_", suffix=".zip", dir=path.parent)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise ArchiveError(f"Failed to save archive to {path}: {e}") from e
        finally:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        self.logger.info(f"Saved archive to {path} ({format_file_size(len(data))})")
        return path

    def clear(self) -> None:
        """Drop all queued entries."""
        self.entries.clear()
        self._folders.clear()
        self._data = None
