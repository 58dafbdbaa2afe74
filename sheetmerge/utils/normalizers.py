"""
Cell value normalization utilities.
Single responsibility: turn cell values into comparable strings.
"""

import math
from typing import Any


def to_cell_string(val: Any) -> str:
    """
    Render a cell value as its canonical string.

    Args:
        val: Cell value (str, int, float, bool or None)

    Returns:
        Canonical string form

    Examples:
        >>> to_cell_string(True)
        'true'
        >>> to_cell_string(3.0)
        '3'
        >>> to_cell_string(2.5)
        '2.5'
    """
    if val is None:
        return ""

    if isinstance(val, str):
        return val

    # bool is an int subclass, check it first
    if isinstance(val, bool):
        return "true" if val else "false"

    if isinstance(val, int):
        return str(val)

    if isinstance(val, float):
        if math.isnan(val):
            return ""
        if math.isinf(val):
            return "Infinity" if val > 0 else "-Infinity"
        if val.is_integer():
            return str(int(val))
        return repr(val)

    return str(val)


def normalize_value(val: Any, ignore_case: bool) -> str:
    """
    Normalize a cell value for equality comparison.

    Args:
        val: Cell value
        ignore_case: Fold to lower case when True

    Returns:
        Trimmed (and optionally lower-cased) string

    Examples:
        >>> normalize_value(" 42 ", False) == normalize_value(42, False)
        True
        >>> normalize_value("ABC", True)
        'abc'
    """
    text = to_cell_string(val).strip()
    return text.lower() if ignore_case else text


def is_blank_key(val: Any) -> bool:
    """
    Check whether a primary-key value is missing.

    Args:
        val: Raw key value

    Returns:
        True for None, NaN and the empty string
    """
    if val is None:
        return True
    if isinstance(val, float) and math.isnan(val):
        return True
    return val == ""
