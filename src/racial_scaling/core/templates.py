"""
Template store for metadata and manipulation templates.

Holds the two templates a generation batch renders from. Templates are only
written between batches; the generator reads them and never mutates them.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from . import constants
from .errors import StructuralError
from .loaders import DocumentLoader, DocumentSource
from .models import JsonDocument, ValidationResult
from .validators import validate_json_structure, validate_mod_template


def create_default_manipulations() -> List[JsonDocument]:
    """One placeholder Rsp manipulation per race, overwritten at generation time."""
    return [
        {
            "Type": constants.RSP_TYPE,
            "FileSource": 0,
            "Manipulation": {
                "SubRace": race,
                "Attribute": constants.ATTRIBUTE_TYPES["MAX"],
                "Entry": 1.0,
            },
        }
        for race in constants.RACES
    ]


def create_default_mod_template() -> JsonDocument:
    """Default manipulation template covering every race."""
    return {
        "FileSwaps": {},
        "Manipulations": create_default_manipulations(),
    }


class TemplateStore:
    """Holds the metadata and manipulation templates for generation."""

    def __init__(self, loader: Optional[DocumentLoader] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.loader = loader or DocumentLoader()
        self.meta_template: Optional[JsonDocument] = None
        self.mod_template: Optional[JsonDocument] = None

    def load_meta_template(self, source: Optional[DocumentSource] = None) -> JsonDocument:
        """Install the metadata template.

        Args:
            source: Path, raw JSON or mapping. None installs the built-in default.

        Returns:
            The installed template

        Raises:
            StructuralError: If the document is invalid or misses Name,
                             Author or Version (all missing fields are listed)
        """
        if source is None:
            self.meta_template = copy.deepcopy(constants.DEFAULT_META_TEMPLATE)
            self.logger.info("Using default meta template")
            return self.meta_template

        data = self.loader.load(source, "meta template")
        validation = validate_json_structure(data, constants.REQUIRED_META_FIELDS)
        if not validation.is_valid:
            missing = [f for f in constants.REQUIRED_META_FIELDS if f not in data]
            raise StructuralError(
                f"Failed to load meta template: {', '.join(validation.errors)}",
                missing_fields=missing,
            )

        self.meta_template = data
        self.logger.info(f"Loaded meta template '{data.get('Name')}'")
        return self.meta_template

    def load_mod_template(self, source: Optional[DocumentSource] = None) -> JsonDocument:
        """Install the manipulation template.

        Args:
            source: Path, raw JSON or mapping. None builds the default
                    template with one Rsp entry per race.

        Returns:
            The installed template

        Raises:
            StructuralError: If the document holds no Rsp manipulation with a
                             SubRace and a FemaleMinSize/FemaleMaxSize attribute
        """
        if source is None:
            self.mod_template = create_default_mod_template()
            self.logger.info(
                f"Using default mod template with {len(constants.RACES)} race manipulations"
            )
            return self.mod_template

        data = self.loader.load(source, "mod template")
        validation = validate_mod_template(data)
        if not validation.is_valid:
            raise StructuralError(
                f"Failed to load mod template: {', '.join(validation.errors)}",
                missing_fields=["Manipulations"],
            )

        self.mod_template = data
        self.logger.info(
            f"Loaded mod template with {len(data['Manipulations'])} manipulations"
        )
        return self.mod_template

    def load_templates(
        self,
        meta_source: Optional[DocumentSource] = None,
        mod_source: Optional[DocumentSource] = None,
    ) -> None:
        """Load both templates, defaults for any source not given."""
        self.load_meta_template(meta_source)
        self.load_mod_template(mod_source)

    def validate_templates(self) -> ValidationResult:
        """Check that both templates are loaded."""
        errors: List[str] = []
        if self.meta_template is None:
            errors.append("Meta template not loaded")
        if self.mod_template is None:
            errors.append("Mod template not loaded")
        return ValidationResult.from_errors(errors)

    def get_template_info(self) -> Dict[str, Any]:
        """Summary of the loaded templates, as stored in settings exports."""
        manipulations = (self.mod_template or {}).get("Manipulations") or []
        return {
            "meta": {
                "loaded": self.meta_template is not None,
                "name": (self.meta_template or {}).get("Name") or "Default Template",
            },
            "mod": {
                "loaded": self.mod_template is not None,
                "manipulationCount": len(manipulations),
            },
        }

    def clear(self) -> None:
        """Forget both templates."""
        self.meta_template = None
        self.mod_template = None
