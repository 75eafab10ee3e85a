"""
String formatting and number processing helpers.

All functions are pure: no shared state, safe to call from anywhere.
"""

import math
import re
from typing import Any, Dict, List, Optional

from .constants import DEFAULT_TARGET_PATH, MULTIPLIER_EPSILON

_UNSAFE_FOLDER_CHARS = re.compile(r'[<>:"/\\|?*]')
_UNSAFE_PATH_CHARS = re.compile(r'[<>:"|?*]')
_PRIORITY_PATTERN = re.compile(r"\[(\d+)\]")


def format_multiplier(value: Any, decimals: int = 3) -> str:
    """Round to `decimals` places and strip trailing zeros.

    Non-numeric input yields "0.000" instead of raising.

    >>> format_multiplier(2.0)
    '2'
    >>> format_multiplier(0.333333)
    '0.333'
    """
    try:
        num = float(value)
    except (TypeError, ValueError):
        return "0.000"
    if math.isnan(num) or math.isinf(num):
        return "0.000"

    formatted = f"{num:.{decimals}f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted


def multiplier_digits(multiplier: float) -> str:
    """Digit string embedded in folder names, e.g. 1.5 -> "1500".

    The multiplier is written with three decimals (the precision every
    multiplier is rounded to), the decimal point is dropped and the result
    is left-padded to four digits. The number doubles as collection priority,
    so smaller multipliers get smaller numbers.
    """
    digits = f"{round(float(multiplier), 3):.3f}".replace(".", "").lstrip("-")
    return pad_number(digits, 4)


def generate_folder_name(multiplier: float, variant: str, prefix: str = "") -> str:
    """Build the display/folder name for one variant.

    >>> generate_folder_name(1.5, "MAX", "")
    '[1500] Height MAX - 1.5x'
    """
    base_name = (
        f"[{multiplier_digits(multiplier)}] Height {variant} - "
        f"{format_multiplier(multiplier)}x"
    )
    return f"{prefix}{base_name}" if prefix else base_name


def sanitize_folder_name(name: str) -> str:
    """Replace characters that are illegal in file system paths with '_'."""
    return _UNSAFE_FOLDER_CHARS.sub("_", name)


def sanitize_target_path(path: Optional[str]) -> str:
    """Clean a sort-order target folder path.

    Strips characters not allowed in folder paths (slashes are kept, they
    separate sort-order folders) and falls back to the default folder when
    nothing is left.
    """
    cleaned = _UNSAFE_PATH_CHARS.sub("", (path or "").strip()).strip()
    return cleaned or DEFAULT_TARGET_PATH


def extract_priority(mod_name: str) -> int:
    """Return the number inside the first [...] of a mod name, or 0."""
    match = _PRIORITY_PATTERN.search(mod_name or "")
    if not match:
        return 0
    try:
        return int(match.group(1), 10)
    except ValueError:
        return 0


def is_height_mod(mod_name: str) -> bool:
    """Whether a mod name looks like a generated height mod."""
    return "Height" in mod_name and ("MIN" in mod_name or "MAX" in mod_name)


def generate_multiplier_array(min_value: Any, max_value: Any, step: Any) -> List[float]:
    """Expand a multiplier range into an ascending list.

    Values are anchored at `min_value`, spaced by `step` and rounded to three
    decimals so float drift never accumulates. `max_value` is included when
    it is reachable within a 1e-10 tolerance.

    Args:
        min_value: First multiplier
        max_value: Upper bound (inclusive)
        step: Increment between multipliers

    Returns:
        List of multipliers; empty when step <= 0, min > max or an input
        is not numeric
    """
    try:
        min_num = float(min_value)
        max_num = float(max_value)
        step_num = float(step)
    except (TypeError, ValueError):
        return []

    if not all(math.isfinite(v) for v in (min_num, max_num, step_num)):
        return []
    if step_num <= 0 or min_num > max_num:
        return []

    count = int(math.floor((max_num - min_num) / step_num + MULTIPLIER_EPSILON)) + 1
    multipliers: List[float] = []
    for index in range(count):
        value = round(min_num + index * step_num, 3)
        if value > max_num + MULTIPLIER_EPSILON:
            break
        # Steps below the rounding precision would repeat values
        if multipliers and value <= multipliers[-1]:
            continue
        multipliers.append(value)

    return multipliers


def pad_number(number: Any, length: int = 4) -> str:
    """Left-pad a number with zeros."""
    return str(number).rjust(length, "0")


def format_file_size(size_bytes: int) -> str:
    """Human readable size, e.g. 1536 -> '1.5 KB'."""
    if size_bytes <= 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB"]
    index = min(int(math.floor(math.log(size_bytes, 1024))), len(units) - 1)
    value = round(size_bytes / (1024 ** index), 2)
    return f"{value:g} {units[index]}"


def format_duration(milliseconds: float) -> str:
    """Format a duration as '1h 2m 3s', '2m 3s' or '3s'."""
    seconds = int(milliseconds // 1000)
    minutes = seconds // 60
    hours = minutes // 60

    if hours > 0:
        return f"{hours}h {minutes % 60}m {seconds % 60}s"
    if minutes > 0:
        return f"{minutes}m {seconds % 60}s"
    return f"{seconds}s"


def format_progress(current: int, total: int) -> Dict[str, Any]:
    """Progress as percentage, 'x of y' text and fraction."""
    fraction = current / total if total else 0.0
    return {
        "percentage": round(fraction * 100),
        "text": f"{current} of {total}",
        "decimal": fraction,
    }


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    if count == 1:
        return f"{count} {singular}"
    return f"{count} {plural or singular + 's'}"


def truncate_text(text: str, max_length: int = 50) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."
