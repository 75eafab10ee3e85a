"""
Variant generator.

Renders one mod (metadata + manipulation documents) for a multiplier and a
variant from the two templates.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from . import constants
from .errors import GenerationError
from .formatters import generate_folder_name, sanitize_folder_name
from .loaders import dumps
from .models import GeneratedVariant, JsonDocument, Variant, VariantRequest
from .templates import TemplateStore


@dataclass
class GenerationContext:
    """Everything a generation run reads: templates and race scaling data.

    Passed explicitly to the generator and the batch orchestrator instead of
    living in a process-wide singleton.
    """

    templates: TemplateStore = field(default_factory=TemplateStore)
    base_values: Mapping[str, float] = field(default_factory=lambda: constants.BASE_VALUES)
    max_entry_value: float = float(constants.MAX_ENTRY_VALUE)

    @property
    def max_base_value(self) -> float:
        """Largest race base value (1.0 when the table is empty)."""
        return max(self.base_values.values(), default=constants.DEFAULT_BASE_VALUE)

    def get_base_value(self, race: str) -> float:
        """Base value for a race; unknown races count as 1.0."""
        return self.base_values.get(race, constants.DEFAULT_BASE_VALUE)


def resolve_variant(multiplier: float, variant: VariantRequest) -> Variant:
    """Resolve AUTO to MIN below 1.0 and MAX otherwise."""
    if variant == "AUTO":
        return "MIN" if multiplier < 1.0 else "MAX"
    if variant not in ("MIN", "MAX"):
        raise ValueError(f"Unknown variant: {variant!r}")
    return variant


class VariantGenerator:
    """Produces GeneratedVariant instances from templates."""

    def __init__(self, context: Optional[GenerationContext] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.context = context or GenerationContext()

    def generate(
        self,
        multiplier: float,
        meta_template: JsonDocument,
        mod_template: JsonDocument,
        variant: VariantRequest = "AUTO",
        prefix: str = "",
    ) -> GeneratedVariant:
        """Render one variant.

        The templates are deep-copied first so every variant is independent
        and the shared templates stay untouched.

        Args:
            multiplier: Scale factor applied to every race base value
            meta_template: Metadata template (Name, Author, Version...)
            mod_template: Manipulation template with FileSwaps/Manipulations
            variant: "MIN", "MAX" or "AUTO"
            prefix: Optional folder-name prefix

        Returns:
            GeneratedVariant with sanitized folder name and serialized documents

        Raises:
            GenerationError: If anything fails; carries the multiplier
        """
        try:
            actual_variant = resolve_variant(multiplier, variant)
            folder_name = generate_folder_name(multiplier, actual_variant, prefix)

            meta = copy.deepcopy(meta_template)
            meta["Name"] = folder_name
            meta["ModTags"] = list(constants.MOD_TAGS[actual_variant])

            mod = copy.deepcopy(mod_template)
            for manipulation in mod.get("Manipulations") or []:
                self._apply_manipulation(manipulation, multiplier, actual_variant)

            return GeneratedVariant(
                folder_name=sanitize_folder_name(folder_name),
                meta_json=dumps(meta),
                mod_json=dumps(mod),
                variant=actual_variant,
                multiplier=multiplier,
            )
        except Exception as e:
            self.logger.error(f"Failed to generate mod for multiplier {multiplier}: {e}")
            raise GenerationError(
                f"Failed to generate mod for multiplier {multiplier}: {e}",
                multiplier=multiplier,
            ) from e

    def _apply_manipulation(self, manipulation: Any, multiplier: float, variant: Variant) -> None:
        """Rewrite a height manipulation in place; anything else is left alone."""
        if not isinstance(manipulation, dict) or manipulation.get("Type") != constants.RSP_TYPE:
            return
        payload = manipulation.get("Manipulation")
        if not isinstance(payload, dict) or not payload.get("SubRace"):
            return

        payload["Attribute"] = constants.ATTRIBUTE_TYPES[variant]
        payload["Entry"] = self.calculate_entry(payload["SubRace"], multiplier)

    def calculate_entry(self, race: str, multiplier: float) -> float:
        """Scaled entry for a race, capped at the maximum entry value."""
        entry = self.context.get_base_value(race) * multiplier
        return round(min(entry, self.context.max_entry_value), 3)
