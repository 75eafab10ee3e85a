"""
Data models for racial scaling generation.

Contains type aliases and lightweight dataclasses shared by the generator,
the batch orchestrator and the merge engines. Documents loaded from disk
stay plain dicts for flexibility; only values produced by this package get
their own types.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, TypeAlias

# Type aliases for clarity
JsonDocument: TypeAlias = Dict[str, Any]
"""A parsed JSON object (template, collection, sort order...)."""

Variant: TypeAlias = Literal["MIN", "MAX"]
"""Height attribute targeted by a generated mod."""

VariantRequest: TypeAlias = Literal["MIN", "MAX", "AUTO"]
"""Variant as requested by a caller; AUTO is resolved from the multiplier."""

CollectionDocument: TypeAlias = JsonDocument
"""Penumbra collection: Name, Id, Version and a Settings map."""

SortOrderDocument: TypeAlias = JsonDocument
"""Penumbra sort order: Data map (mod name -> path) and EmptyFolders."""


@dataclass
class ValidationResult:
    """Result of a validation pass. Validators return this instead of raising."""

    is_valid: bool
    errors: List[str]
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_errors(
        cls, errors: List[str], warnings: Optional[List[str]] = None
    ) -> "ValidationResult":
        """Build a result whose validity is derived from the error list."""
        return cls(is_valid=not errors, errors=errors, warnings=warnings or [])


@dataclass(frozen=True)
class GenerationOptions:
    """Configuration for one generation batch.

    Instances are immutable; a configuration change replaces the whole
    object. Validation is performed by
    :func:`racial_scaling.core.validators.validate_generation_options`.
    """

    min_multiplier: float = 0.5
    max_multiplier: float = 2.0
    step_increment: float = 0.1
    generate_min: bool = True
    generate_max: bool = True
    prefix: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationOptions":
        """Create options from the camelCase mapping used by settings files.

        Missing or non-numeric values fall back to the defaults, a missing
        variant flag counts as enabled.

        Args:
            data: Mapping with minMultiplier, maxMultiplier, stepIncrement,
                  generateMin, generateMax and prefix keys

        Returns:
            GenerationOptions instance
        """
        defaults = cls()
        return cls(
            min_multiplier=_to_float(data.get("minMultiplier"), defaults.min_multiplier),
            max_multiplier=_to_float(data.get("maxMultiplier"), defaults.max_multiplier),
            step_increment=_to_float(data.get("stepIncrement"), defaults.step_increment),
            generate_min=data.get("generateMin") is not False,
            generate_max=data.get("generateMax") is not False,
            prefix=str(data.get("prefix") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase mapping used by settings files."""
        return {
            "minMultiplier": self.min_multiplier,
            "maxMultiplier": self.max_multiplier,
            "stepIncrement": self.step_increment,
            "generateMin": self.generate_min,
            "generateMax": self.generate_max,
            "prefix": self.prefix,
        }

    @property
    def variants(self) -> List[Variant]:
        """Variants to generate for every multiplier, MIN first."""
        variants: List[Variant] = []
        if self.generate_min:
            variants.append("MIN")
        if self.generate_max:
            variants.append("MAX")
        return variants


@dataclass(frozen=True)
class GeneratedVariant:
    """One rendered mod: folder name plus serialized meta and mod documents."""

    folder_name: str
    meta_json: str
    mod_json: str
    variant: Variant
    multiplier: float


@dataclass(frozen=True)
class ProgressUpdate:
    """Progress report emitted by the batch orchestrator."""

    phase: Literal["initializing", "generating", "finalizing", "complete"]
    percentage: int
    message: str
    details: str = ""


@dataclass
class ArchiveValidation:
    """Result of validating a built archive."""

    is_valid: bool
    errors: List[str]
    info: Dict[str, Any] = field(default_factory=dict)


@dataclass
class BatchResult:
    """Outcome of a successful generation batch."""

    generated_count: int
    variants: List[GeneratedVariant]
    archive_info: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CollectionMergeResult:
    """Merged collection document and counters."""

    document: CollectionDocument
    added: int = 0
    skipped: int = 0


@dataclass
class SortOrderMergeResult:
    """Merged sort-order document and counters."""

    document: SortOrderDocument
    added: int = 0
    skipped: int = 0
    updated: int = 0


def _to_float(value: Any, default: float) -> float:
    """Lenient float conversion; invalid, missing or zero values yield default."""
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if result != result or result == 0:  # NaN or zero
        return default
    return result
