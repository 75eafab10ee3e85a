"""
Input validation rules.

Every validator is a pure function returning a ValidationResult; none of
them raise, whatever the input.
"""

import math
import re
from pathlib import Path
from typing import Any, Iterable, List, Optional

from . import constants
from .models import GenerationOptions, ValidationResult

_PREFIX_PATTERN = re.compile(r"[A-Za-z0-9_-]*")


def _to_number(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def validate_multiplier_range(min_value: Any, max_value: Any, step: Any) -> ValidationResult:
    """Validate a multiplier range and step size.

    Args:
        min_value: Smallest multiplier
        max_value: Largest multiplier
        step: Increment between multipliers

    Returns:
        ValidationResult listing every violated rule
    """
    min_num = _to_number(min_value)
    max_num = _to_number(max_value)
    step_num = _to_number(step)

    if min_num is None or max_num is None or step_num is None:
        return ValidationResult.from_errors(["All multiplier values must be valid numbers"])

    errors: List[str] = []

    if min_num < constants.MIN_MULTIPLIER:
        errors.append(f"Minimum multiplier must be at least {constants.MIN_MULTIPLIER}")

    if max_num > constants.MAX_MULTIPLIER:
        errors.append(f"Maximum multiplier must not exceed {constants.MAX_MULTIPLIER}")

    if min_num >= max_num:
        errors.append("Minimum multiplier must be less than maximum multiplier")

    if step_num < constants.MIN_STEP:
        errors.append(f"Step increment must be at least {constants.MIN_STEP}")

    if step_num > constants.MAX_STEP:
        errors.append(f"Step increment must not exceed {constants.MAX_STEP}")

    if step_num > (max_num - min_num):
        errors.append("Step increment is larger than the multiplier range")

    return ValidationResult.from_errors(errors)


def validate_prefix(prefix: Optional[str]) -> ValidationResult:
    """Validate a folder-name prefix: letters, digits, '_' and '-', max 50 chars."""
    if not prefix:
        return ValidationResult.from_errors([])

    if not isinstance(prefix, str):
        return ValidationResult.from_errors(["Prefix must be a string"])

    errors: List[str] = []
    if not _PREFIX_PATTERN.fullmatch(prefix):
        errors.append("Prefix can only contain letters, numbers, underscores, and hyphens")

    if len(prefix) > constants.MAX_PREFIX_LENGTH:
        errors.append(f"Prefix must be {constants.MAX_PREFIX_LENGTH} characters or less")

    return ValidationResult.from_errors(errors)


def validate_file_upload(file_path: Optional[Path | str]) -> ValidationResult:
    """Validate a JSON file chosen by the user before it is read.

    Checks existence, the .json extension and the 10MB size limit.
    """
    if not file_path:
        return ValidationResult.from_errors(["No file selected"])

    try:
        path = Path(file_path)
    except TypeError:
        return ValidationResult.from_errors(["Invalid file path"])

    errors: List[str] = []

    if path.suffix.lower() != ".json":
        errors.append(constants.INVALID_FILE_TYPE)

    try:
        if not path.is_file():
            errors.append(f"File not found: {path}")
        elif path.stat().st_size > constants.MAX_FILE_SIZE:
            errors.append(constants.FILE_TOO_LARGE)
    except OSError as e:
        errors.append(f"Cannot access file {path}: {e}")

    return ValidationResult.from_errors(errors)


def validate_generation_options(options: GenerationOptions) -> ValidationResult:
    """Validate complete generation options (variant flags, range, prefix)."""
    errors: List[str] = []

    if not options.generate_min and not options.generate_max:
        errors.append(constants.NO_VARIANTS_SELECTED)

    range_validation = validate_multiplier_range(
        options.min_multiplier, options.max_multiplier, options.step_increment
    )
    errors.extend(range_validation.errors)

    prefix_validation = validate_prefix(options.prefix)
    errors.extend(prefix_validation.errors)

    return ValidationResult.from_errors(errors)


def validate_json_structure(data: Any, required_fields: Iterable[str]) -> ValidationResult:
    """Check that `data` is an object holding every required field."""
    if not isinstance(data, dict):
        return ValidationResult.from_errors(["Invalid JSON structure"])

    errors = [
        f"Missing required field: {field}" for field in required_fields if field not in data
    ]
    return ValidationResult.from_errors(errors)


def validate_mod_template(data: Any) -> ValidationResult:
    """Check that a mod template holds at least one usable height manipulation."""
    if not isinstance(data, dict) or not isinstance(data.get("Manipulations"), list):
        return ValidationResult.from_errors(["Mod template must contain a Manipulations array"])

    for manipulation in data["Manipulations"]:
        if not isinstance(manipulation, dict) or manipulation.get("Type") != constants.RSP_TYPE:
            continue
        payload = manipulation.get("Manipulation")
        if (
            isinstance(payload, dict)
            and payload.get("SubRace")
            and payload.get("Attribute") in constants.HEIGHT_ATTRIBUTES
        ):
            return ValidationResult.from_errors([])

    return ValidationResult.from_errors(["Mod template must contain valid height manipulations"])


def validate_collection_document(data: Any) -> ValidationResult:
    """Check the fields a Penumbra collection file must have."""
    if not isinstance(data, dict):
        return ValidationResult.from_errors(["Invalid collection file - root must be an object"])

    errors: List[str] = []
    if not isinstance(data.get("Settings"), dict):
        errors.append("Invalid collection file - missing Settings object")
    for field in constants.REQUIRED_COLLECTION_FIELDS:
        if not data.get(field):
            errors.append(f"Invalid collection file - missing {field} field")

    return ValidationResult.from_errors(errors)


def validate_sort_order_document(data: Any) -> ValidationResult:
    """Check the fields a Penumbra sort order file must have."""
    if not isinstance(data, dict):
        return ValidationResult.from_errors(["Invalid sort order file - root must be an object"])

    errors: List[str] = []
    if not isinstance(data.get("Data"), dict):
        errors.append("Invalid sort order file - missing or invalid Data object")

    # EmptyFolders is optional
    empty_folders = data.get("EmptyFolders")
    if empty_folders is not None and not isinstance(empty_folders, list):
        errors.append("Invalid sort order file - EmptyFolders must be an array")

    return ValidationResult.from_errors(errors)
