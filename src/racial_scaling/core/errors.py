"""
Exception types for racial scaling generation.
"""

from typing import Iterable, List, Optional


class RacialScalingError(Exception):
    """Base class for all errors raised by this package."""
    pass


class ValidationError(RacialScalingError):
    """Raised when options, templates or files fail validation.

    Carries every violated rule, not just the first one.
    """

    def __init__(self, errors: Iterable[str], message: Optional[str] = None):
        self.errors: List[str] = list(errors)
        super().__init__(message or ", ".join(self.errors) or "Validation failed")


class StructuralError(RacialScalingError):
    """Raised when a document is malformed or misses required fields."""

    def __init__(self, message: str, missing_fields: Optional[Iterable[str]] = None):
        self.missing_fields: List[str] = list(missing_fields or [])
        super().__init__(message)


class GenerationError(RacialScalingError):
    """Raised when rendering a variant fails or a batch cannot start."""

    def __init__(self, message: str, multiplier: Optional[float] = None):
        self.multiplier = multiplier
        super().__init__(message)


class MergeError(RacialScalingError):
    """Raised when combining generated mods with an external document fails."""
    pass


class ArchiveError(RacialScalingError, OSError):
    """Raised when the archive cannot be built, validated or written."""
    pass
