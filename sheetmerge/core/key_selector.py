"""
Primary key discovery.
Single responsibility: find columns shared by both datasets and suggest a key.
"""

from typing import List, Optional

from .models import Dataset
from ..utils.logger import get_logger


logger = get_logger()


class KeySelectionError(Exception):
    """Exception raised when no primary key can be chosen."""
    pass


def common_columns(base: Dataset, live: Dataset) -> List[str]:
    """
    Columns declared by both datasets, in live column order.

    Args:
        base: Base dataset
        live: Live dataset

    Returns:
        Shared column names
    """
    base_set = set(base.columns)
    return list(dict.fromkeys(col for col in live.columns if col in base_set))


def _looks_like_key(column: str) -> bool:
    name = column.lower()
    return name == "id" or "code" in name or "key" in name


def suggest_primary_key(base: Dataset, live: Dataset,
                        preferred: Optional[str] = None) -> str:
    """
    Pick a primary key candidate.

    A ``preferred`` column wins when both datasets declare it. Otherwise the
    first shared column named ``id`` or containing ``code`` or ``key``
    (case-insensitive) is used, falling back to the first shared column.

    Args:
        base: Base dataset
        live: Live dataset
        preferred: Column requested by the caller

    Returns:
        Suggested key column

    Raises:
        KeySelectionError: If the datasets share no column
    """
    candidates = common_columns(base, live)

    if not candidates:
        raise KeySelectionError(
            f"[KEY SELECTION ERROR] No common columns found between "
            f"'{base.name}' and '{live.name}'. "
            f"Suggestion: Verify both files use the same header names."
        )

    if preferred and preferred in candidates:
        selected = preferred
    else:
        selected = next((c for c in candidates if _looks_like_key(c)), candidates[0])

    logger.info("key_selector.suggested",
               key=selected,
               candidates=len(candidates))

    return selected
