"""
Comparison data model.
Single responsibility: define datasets, processed rows and comparison results.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


META_CHANGE_TYPE = "_meta_change_type"
META_CHANGED_COLUMNS = "_meta_changed_columns"
META_ROW_ID = "_meta_row_id"


class MalformedDatasetError(ValueError):
    """Raised when a dataset is not made of named columns and mapping rows."""
    pass


class ChangeType(str, Enum):
    """Classification of a row after comparison."""

    UNCHANGED = "UNCHANGED"
    UPDATED = "UPDATED"
    NEW = "NEW"
    REMOVED = "REMOVED"


@dataclass(frozen=True)
class Dataset:
    """
    Rectangular dataset: declared column names plus rows.

    Rows map column names to scalar values. A column absent from a row is
    treated the same as a None value.
    """

    name: str
    columns: Sequence[str]
    rows: Sequence[Mapping]

    def __post_init__(self):
        """Validate shape and freeze columns and rows into tuples."""
        columns, rows = self.columns, self.rows

        if isinstance(columns, (str, bytes)) or not isinstance(columns, Sequence):
            raise MalformedDatasetError(
                f"Dataset '{self.name}': columns must be a sequence of names"
            )
        for col in columns:
            if not isinstance(col, str):
                raise MalformedDatasetError(
                    f"Dataset '{self.name}': column name {col!r} is not a string"
                )
        if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
            raise MalformedDatasetError(
                f"Dataset '{self.name}': rows must be a sequence of mappings"
            )
        for position, row in enumerate(rows):
            if not isinstance(row, Mapping):
                raise MalformedDatasetError(
                    f"Dataset '{self.name}': row {position} is "
                    f"{type(row).__name__}, expected a mapping"
                )

        object.__setattr__(self, "columns", tuple(columns))
        object.__setattr__(self, "rows", tuple(rows))

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class ProcessedRow:
    """A row of the merged output with its change metadata."""

    data: Dict[str, Any]
    change_type: ChangeType
    row_id: str
    changed_columns: Tuple[str, ...] = ()

    def __post_init__(self):
        if bool(self.changed_columns) != (self.change_type is ChangeType.UPDATED):
            raise ValueError(
                f"Row {self.row_id!r}: changed columns must be listed "
                f"exactly when the row is UPDATED"
            )

    def get(self, column: str, default: Any = None) -> Any:
        return self.data.get(column, default)

    def to_record(self) -> Dict[str, Any]:
        """Flatten data and metadata into one mapping."""
        record = dict(self.data)
        record[META_CHANGE_TYPE] = self.change_type.value
        record[META_CHANGED_COLUMNS] = list(self.changed_columns)
        record[META_ROW_ID] = self.row_id
        return record


@dataclass(frozen=True)
class ComparisonStats:
    """Row counts per classification."""

    total: int = 0
    new: int = 0
    updated: int = 0
    removed: int = 0
    unchanged: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "new": self.new,
            "updated": self.updated,
            "removed": self.removed,
            "unchanged": self.unchanged,
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Results from a base/live comparison."""

    rows: Tuple[ProcessedRow, ...]
    all_columns: Tuple[str, ...]
    stats: ComparisonStats
    primary_key: str

    def filter_rows(self, change_type: Optional[ChangeType] = None) -> List[ProcessedRow]:
        """
        Select rows by classification.

        Args:
            change_type: Classification to keep; None keeps every row

        Returns:
            Matching rows in result order
        """
        if change_type is None:
            return list(self.rows)
        change_type = ChangeType(change_type)
        return [row for row in self.rows if row.change_type is change_type]

    def changed_rows(self) -> List[ProcessedRow]:
        """Rows that are not UNCHANGED."""
        return [row for row in self.rows
                if row.change_type is not ChangeType.UNCHANGED]

    def to_records(self) -> List[Dict[str, Any]]:
        return [row.to_record() for row in self.rows]
