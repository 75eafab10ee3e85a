"""
Core generation logic for racial scaling mods.

Provides the formatters and validators, the template store, the variant
generator, the batch orchestrator and the archive writer.
"""

from .archive import ArchiveEntry, ArchiveWriter
from .batch import BatchOrchestrator
from .constants import BASE_VALUES, MAX_ENTRY_VALUE, RACES
from .errors import (
    ArchiveError,
    GenerationError,
    MergeError,
    RacialScalingError,
    StructuralError,
    ValidationError,
)
from .generator import GenerationContext, VariantGenerator
from .loaders import DocumentLoader
from .models import (
    ArchiveValidation,
    BatchResult,
    GeneratedVariant,
    GenerationOptions,
    ProgressUpdate,
    ValidationResult,
)
from .templates import TemplateStore

# Public exports
__all__ = [
    # Services
    "BatchOrchestrator",
    "VariantGenerator",
    "GenerationContext",
    "TemplateStore",
    "ArchiveWriter",
    "ArchiveEntry",
    "DocumentLoader",
    # Models
    "ArchiveValidation",
    "BatchResult",
    "GeneratedVariant",
    "GenerationOptions",
    "ProgressUpdate",
    "ValidationResult",
    # Constants
    "BASE_VALUES",
    "MAX_ENTRY_VALUE",
    "RACES",
    # Errors
    "RacialScalingError",
    "ValidationError",
    "StructuralError",
    "GenerationError",
    "MergeError",
    "ArchiveError",
]
