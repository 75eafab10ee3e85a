"""
racial_scaling: height mod generator for FFXIV racial scaling

Generates batches of Penumbra height mods over a range of multipliers and
merges them into existing collection and sort-order files.
"""

__version__ = "0.1.0"
__author__ = "racial_scaling Contributors"

# Core service imports
from .core import BatchOrchestrator, TemplateStore, VariantGenerator
from .merge import CollectionMerger, SortOrderMerger
from .utils.logging_config import setup_logging

# Main data models
from .core.models import (
    GenerationOptions, GeneratedVariant, ProgressUpdate, ValidationResult
)

__all__ = [
    # Services
    'BatchOrchestrator',
    'TemplateStore',
    'VariantGenerator',
    'CollectionMerger',
    'SortOrderMerger',

    # Logging
    'setup_logging',

    # Data models
    'GenerationOptions',
    'GeneratedVariant',
    'ProgressUpdate',
    'ValidationResult',
]
