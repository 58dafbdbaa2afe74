"""Utility functions and helpers."""

from .logger import get_logger, configure_logger, StructuredLogger
from .normalizers import to_cell_string, normalize_value, is_blank_key

__all__ = [
    "get_logger",
    "configure_logger",
    "StructuredLogger",
    "to_cell_string",
    "normalize_value",
    "is_blank_key",
]
