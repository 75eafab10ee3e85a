"""
Merge engines for Penumbra collection and sort-order documents.
"""

from .collection import CollectionMerger
from .sort_order import SortOrderMerger, sort_data_by_path

__all__ = [
    "CollectionMerger",
    "SortOrderMerger",
    "sort_data_by_path",
]
