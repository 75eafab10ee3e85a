"""
Constants for racial scaling generation.

Race base values, validation limits and the built-in default templates.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping

from .models import JsonDocument

# Unscaled per-race height reference values
BASE_VALUES: Mapping[str, float] = MappingProxyType(
    {
        "Midlander": 1.04,
        "Highlander": 1.144,
        "KeeperOfTheMoon": 1.04,
        "SeekerOfTheSun": 1.04,
        "Seawolf": 1.16,
        "Hellsguard": 1.16,
        "Raen": 1.01,
        "Xaela": 1.01,
        "Rava": 1.189,
        "Veena": 1.189,
    }
)

RACES: List[str] = list(BASE_VALUES.keys())

DEFAULT_BASE_VALUE = 1.0

# Validation limits
MIN_MULTIPLIER = 0.001
MAX_MULTIPLIER = 1000.0
MIN_STEP = 0.01
MAX_STEP = 1000.0
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
MAX_ENTRY_VALUE = 512
MAX_PREFIX_LENGTH = 50
MULTIPLIER_EPSILON = 1e-10

REQUIRED_META_FIELDS: List[str] = ["Name", "Author", "Version"]
REQUIRED_MOD_FIELDS: List[str] = ["FileSwaps", "Manipulations"]
REQUIRED_COLLECTION_FIELDS: List[str] = ["Name", "Id", "Version"]

# Manipulation schema
RSP_TYPE = "Rsp"
ATTRIBUTE_TYPES: Dict[str, str] = {
    "MIN": "FemaleMinSize",
    "MAX": "FemaleMaxSize",
}
HEIGHT_ATTRIBUTES = frozenset(ATTRIBUTE_TYPES.values())
MOD_TAGS: Dict[str, List[str]] = {
    "MIN": ["Size", "SizeMin"],
    "MAX": ["Size", "SizeMax"],
}

# Archive layout (Penumbra mod folder)
META_FILE_NAME = "meta.json"
MOD_FILE_NAME = "default_mod.json"

# Sort order defaults
DEFAULT_TARGET_PATH = "NewHeightMods"

# Logging defaults
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_CONSOLE_LEVEL = "INFO"
DEFAULT_LOG_FILE = "logs/racial_scaling.csv"

# Settings envelope
SETTINGS_VERSION = "1.0.0"

DEFAULT_META_TEMPLATE: JsonDocument = {
    "Name": "[PLACEHOLDER] Height Mod",
    "Author": "Height Mod Generator",
    "Version": "1.0.0",
    "ModTags": ["Character", "Body"],
    "Description": "Generated height modification for FFXIV characters",
    "ModVersion": "1.0",
    "GameVersion": "6.0+",
    "Website": "",
    "BinVersion": 4,
    "TargetApplicationName": "FFXIV_DX11",
    "IsUiMod": False,
    "IsMetaMod": False,
}

# Error messages
INVALID_FILE_TYPE = "Please select a valid JSON file"
FILE_TOO_LARGE = "File size exceeds maximum limit"
INVALID_JSON = "Invalid JSON format"
NO_VARIANTS_SELECTED = "Please select at least one variant type (MIN or MAX)"
