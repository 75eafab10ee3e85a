"""
Document loading and serialization.

Every external JSON document (templates, collections, sort orders,
settings files) is read through DocumentLoader, which uses orjson for
parsing and turns any parse problem into a StructuralError.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Mapping, Union

import orjson

from .constants import INVALID_JSON
from .errors import StructuralError
from .models import JsonDocument

DocumentSource = Union[Path, str, bytes, bytearray, Mapping[str, Any]]
"""A path to a JSON file, raw JSON text/bytes or an already parsed object."""


class DocumentLoader:
    """Reads JSON documents from paths, raw text or parsed mappings."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load(self, source: DocumentSource, description: str = "document") -> JsonDocument:
        """Load a JSON object from any supported source.

        Strings are treated as raw JSON when they start with '{' or '[',
        otherwise as a file path.

        Args:
            source: Path, raw JSON text/bytes or parsed mapping
            description: What is being loaded, used in messages

        Returns:
            Parsed JSON object (a new dict, never the caller's mapping)

        Raises:
            StructuralError: If the file cannot be read, is not valid JSON
                             or its root is not an object
        """
        if isinstance(source, Mapping):
            return copy.deepcopy(dict(source))

        if isinstance(source, (bytes, bytearray)):
            return parse_json(bytes(source), description)

        if isinstance(source, str) and source.lstrip().startswith(("{", "[")):
            return parse_json(source.encode("utf-8"), description)

        path = Path(source)
        if not path.is_file():
            raise StructuralError(f"Failed to load {description}: file not found: {path}")

        self.logger.debug(f"Reading {description} from {path}")
        try:
            raw = path.read_bytes()  # orjson works with bytes
        except OSError as e:
            raise StructuralError(f"Failed to read {description} from {path}: {e}") from e

        return parse_json(raw, description)


def parse_json(raw: bytes, description: str = "document") -> JsonDocument:
    """Parse raw JSON bytes, requiring an object at the root.

    Raises:
        StructuralError: On invalid JSON or a non-object root
    """
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise StructuralError(f"{INVALID_JSON} in {description}: {e}") from e

    if not isinstance(data, dict):
        raise StructuralError(
            f"Invalid {description}: expected a JSON object, got {type(data).__name__}"
        )
    return data


def dumps_bytes(document: Any) -> bytes:
    """Serialize a document as 2-space indented JSON bytes."""
    return orjson.dumps(document, option=orjson.OPT_INDENT_2)


def dumps(document: Any) -> str:
    """Serialize a document as 2-space indented JSON text."""
    return dumps_bytes(document).decode("utf-8")


def write_document(document: Any, path: Path) -> Path:
    """Write a document as indented JSON, creating parent folders.

    Returns:
        The path written to
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_bytes(document))
    logging.getLogger(__name__).debug(f"Wrote JSON document to {path}")
    return path
