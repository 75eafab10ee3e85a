"""
Collection merge engine.

Adds generated mods to a Penumbra collection document. Existing entries are
never removed or overwritten; new ones arrive disabled, with a priority
taken from the number in their folder name.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..core.constants import REQUIRED_COLLECTION_FIELDS
from ..core.errors import MergeError, StructuralError
from ..core.formatters import extract_priority, is_height_mod
from ..core.loaders import DocumentLoader, DocumentSource, write_document
from ..core.models import CollectionDocument, CollectionMergeResult, GeneratedVariant
from ..core.validators import validate_collection_document


class CollectionMerger:
    """Loads collection documents and merges generated mods into them."""

    def __init__(self, loader: Optional[DocumentLoader] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.loader = loader or DocumentLoader()

    def load(self, source: DocumentSource) -> CollectionDocument:
        """Load and validate a collection document.

        Raises:
            StructuralError: If the JSON is invalid or Settings, Name, Id or
                             Version are missing
        """
        data = self.loader.load(source, "collection")
        validation = validate_collection_document(data)
        if not validation.is_valid:
            missing = [] if isinstance(data.get("Settings"), dict) else ["Settings"]
            missing += [f for f in REQUIRED_COLLECTION_FIELDS if not data.get(f)]
            raise StructuralError("; ".join(validation.errors), missing_fields=missing)

        self.logger.info(
            f"Loaded collection '{data.get('Name')}' with {len(data['Settings'])} mods"
        )
        return data

    @staticmethod
    def get_collection_info(document: CollectionDocument) -> Dict[str, Any]:
        """Name, id and mod counts of a collection."""
        settings = document.get("Settings") or {}
        return {
            "name": document.get("Name") or "Unknown Collection",
            "id": document.get("Id") or "Unknown ID",
            "totalMods": len(settings),
            "heightMods": sum(1 for name in settings if is_height_mod(name)),
        }

    @staticmethod
    def preview(variants: Iterable[GeneratedVariant]) -> List[Dict[str, Any]]:
        """What a merge would add: name, variant, multiplier and priority per mod."""
        return [
            {
                "name": v.folder_name,
                "variant": v.variant,
                "multiplier": v.multiplier,
                "priority": extract_priority(v.folder_name),
            }
            for v in variants
        ]

    def merge(
        self, document: CollectionDocument, variants: Iterable[GeneratedVariant]
    ) -> CollectionMergeResult:
        """Add every generated mod missing from the collection.

        Works on a deep copy; `document` is left untouched.

        Args:
            document: Collection document (Settings map of mod name -> state)
            variants: Generated mods in batch order

        Returns:
            CollectionMergeResult with the merged copy and added/skipped counts

        Raises:
            MergeError: If the document cannot be merged
        """
        try:
            updated = copy.deepcopy(document)
            settings = updated.get("Settings")
            if not isinstance(settings, dict):
                raise MergeError("Collection has no Settings object")

            result = CollectionMergeResult(document=updated)
            for variant in variants:
                mod_name = variant.folder_name

                if mod_name in settings:
                    result.skipped += 1
                    self.logger.debug(f"Skipped existing mod: {mod_name}")
                    continue

                settings[mod_name] = {
                    "Settings": {},
                    "Priority": extract_priority(mod_name),
                    "Enabled": False,
                }
                result.added += 1

        except MergeError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to update collection: {e}")
            raise MergeError(f"Failed to update collection: {e}") from e

        self.logger.info(
            f"Collection updated: added {result.added} mods, skipped {result.skipped} existing"
        )
        return result

    def save(self, document: CollectionDocument, path: Path) -> Path:
        """Write a merged collection as indented JSON.

        Raises:
            MergeError: If the file cannot be written
        """
        try:
            return write_document(document, path)
        except OSError as e:
            raise MergeError(f"Failed to save collection to {path}: {e}") from e
