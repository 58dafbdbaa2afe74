"""Comparison engine and key handling."""

from .models import ChangeType, Dataset, ProcessedRow, ComparisonStats, ComparisonResult
from .comparator import DatasetComparator, compare_datasets, index_rows, union_columns

__all__ = [
    "ChangeType",
    "Dataset",
    "ProcessedRow",
    "ComparisonStats",
    "ComparisonResult",
    "DatasetComparator",
    "compare_datasets",
    "index_rows",
    "union_columns",
]
