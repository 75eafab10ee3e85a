"""
Sort-order merge engine.

Places generated mods under a target folder of a Penumbra sort-order
document and re-sorts the whole Data map by path.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from ..core.errors import MergeError, StructuralError
from ..core.formatters import is_height_mod, sanitize_target_path
from ..core.loaders import DocumentLoader, DocumentSource, write_document
from ..core.models import GeneratedVariant, SortOrderDocument, SortOrderMergeResult
from ..core.validators import validate_sort_order_document


def sort_data_by_path(data: Dict[str, Any]) -> Dict[str, Any]:
    """Rebuild a Data map in ascending order of its path values.

    Ties keep their previous relative order.
    """
    return dict(sorted(data.items(), key=lambda item: str(item[1])))


class SortOrderMerger:
    """Loads sort-order documents and merges generated mods into them."""

    def __init__(self, loader: Optional[DocumentLoader] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.loader = loader or DocumentLoader()

    def load(self, source: DocumentSource) -> SortOrderDocument:
        """Load and validate a sort-order document.

        Raises:
            StructuralError: If the JSON is invalid, Data is not an object or
                             EmptyFolders is present but not an array
        """
        data = self.loader.load(source, "sort order")
        validation = validate_sort_order_document(data)
        if not validation.is_valid:
            missing = [] if isinstance(data.get("Data"), dict) else ["Data"]
            raise StructuralError("; ".join(validation.errors), missing_fields=missing)

        self.logger.info(f"Loaded sort order with {len(data['Data'])} entries")
        return data

    @staticmethod
    def get_sort_order_info(document: SortOrderDocument) -> Dict[str, int]:
        """Entry, height-mod and empty-folder counts."""
        data = document.get("Data") or {}
        return {
            "totalEntries": len(data),
            "heightMods": sum(1 for name in data if is_height_mod(name)),
            "emptyFolders": len(document.get("EmptyFolders") or []),
        }

    def merge(
        self,
        document: SortOrderDocument,
        variants: Iterable[GeneratedVariant],
        target_path: Optional[str] = None,
        update_existing: bool = False,
    ) -> SortOrderMergeResult:
        """Place generated mods under `target_path` and re-sort by path.

        With `update_existing`, every height mod already in the document is
        moved under the target folder first. A generated mod whose name is
        already present counts as skipped; when `update_existing` is off and
        its path differs, it is moved anyway and also counts as updated.

        Works on a deep copy; `document` is left untouched.

        Args:
            document: Sort-order document with a Data map
            variants: Generated mods in batch order
            target_path: Folder to place mods in (sanitized, default NewHeightMods)
            update_existing: Move existing height mods to the target folder

        Returns:
            SortOrderMergeResult with the merged copy and added/skipped/updated counts

        Raises:
            MergeError: If the document cannot be merged
        """
        folder = sanitize_target_path(target_path)

        try:
            updated = copy.deepcopy(document)
            data = updated.get("Data")
            if not isinstance(data, dict):
                raise MergeError("Sort order has no Data object")

            result = SortOrderMergeResult(document=updated)

            if update_existing:
                for mod_name, current_path in list(data.items()):
                    if not is_height_mod(mod_name):
                        continue
                    new_path = f"{folder}/{mod_name}"
                    if current_path != new_path:
                        data[mod_name] = new_path
                        result.updated += 1

            for variant in variants:
                mod_name = variant.folder_name
                sort_path = f"{folder}/{mod_name}"

                if mod_name in data:
                    result.skipped += 1
                    if data[mod_name] != sort_path and not update_existing:
                        data[mod_name] = sort_path
                        result.updated += 1
                else:
                    data[mod_name] = sort_path
                    result.added += 1

            updated["Data"] = sort_data_by_path(data)

        except MergeError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to update sort order: {e}")
            raise MergeError(f"Failed to update sort order: {e}") from e

        self.logger.info(
            f"Sort order updated: added {result.added}, skipped {result.skipped}, "
            f"updated {result.updated} paths under '{folder}'"
        )
        return result

    def save(self, document: SortOrderDocument, path: Path) -> Path:
        """Write a merged sort order as indented JSON.

        Raises:
            MergeError: If the file cannot be written
        """
        try:
            return write_document(document, path)
        except OSError as e:
            raise MergeError(f"Failed to save sort order to {path}: {e}") from e
