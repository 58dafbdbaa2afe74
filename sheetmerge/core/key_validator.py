"""
Primary key profiling using DuckDB.
Single responsibility: report blank and duplicate primary-key values in a dataset.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import duckdb
import pandas as pd

from .models import Dataset
from ..utils.logger import get_logger
from ..utils.normalizers import is_blank_key, to_cell_string


logger = get_logger()


KEYS_VIEW = "sheetmerge_keys"


class KeyValidationError(Exception):
    """Exception raised when key profiling cannot run."""
    pass


@dataclass
class KeyValidationResult:
    """Results from primary key profiling."""

    dataset: str
    key_column: str
    total_rows: int
    keyed_rows: int
    unique_values: int
    duplicate_keys: List[str] = field(default_factory=list)

    @property
    def blank_rows(self) -> int:
        """Rows excluded from comparison for lack of a key."""
        return self.total_rows - self.keyed_rows

    @property
    def shadowed_rows(self) -> int:
        """Rows overwritten by a later row with the same key."""
        return self.keyed_rows - self.unique_values

    @property
    def is_unique(self) -> bool:
        return self.shadowed_rows == 0


class KeyValidator:
    """
    Profiles primary key values with DuckDB aggregate queries.

    Keys are stringified the same way the comparator does before they are
    counted, so duplicates reported here are exactly the rows the comparator
    will shadow.
    """

    def __init__(self, con: Optional[duckdb.DuckDBPyConnection] = None,
                 sample_size: int = 10):
        """
        Initialize key validator.

        Args:
            con: DuckDB connection (an in-memory one is opened when omitted)
            sample_size: Maximum duplicate keys listed in a result
        """
        self.con = con or duckdb.connect(":memory:")
        self.sample_size = sample_size

    def validate_key(self, dataset: Dataset, key_column: str) -> KeyValidationResult:
        """
        Count keyed, blank and duplicate rows for a key column.

        Args:
            dataset: Dataset to profile
            key_column: Primary key column

        Returns:
            KeyValidationResult with counts and sample duplicates

        Raises:
            KeyValidationError: If the key column is empty or the query fails
        """
        if not key_column:
            raise KeyValidationError(
                "[KEY VALIDATION ERROR] key_column cannot be empty. "
                "Suggestion: Select a primary key column."
            )

        logger.debug("key_validator.validate_start",
                    dataset=dataset.name,
                    key=key_column,
                    rows=len(dataset))

        frame = pd.DataFrame({
            "position": pd.Series(range(len(dataset)), dtype="int64"),
            "key_value": pd.Series(
                [None if is_blank_key(row.get(key_column))
                 else to_cell_string(row.get(key_column))
                 for row in dataset.rows],
                dtype="object",
            ),
        })

        self.con.register(KEYS_VIEW, frame)
        try:
            total_rows, keyed_rows, unique_values = self.con.execute(f"""
                SELECT COUNT(*) AS total_rows,
                       COUNT(CAST(key_value AS VARCHAR)) AS keyed_rows,
                       COUNT(DISTINCT CAST(key_value AS VARCHAR)) AS unique_values
                FROM {KEYS_VIEW}
            """).fetchone()

            duplicates = self.con.execute(f"""
                SELECT CAST(key_value AS VARCHAR) AS key_value
                FROM {KEYS_VIEW}
                WHERE key_value IS NOT NULL
                GROUP BY CAST(key_value AS VARCHAR)
                HAVING COUNT(*) > 1
                ORDER BY MIN(position)
                LIMIT {int(self.sample_size)}
            """).fetchall()
        except duckdb.Error as e:
            logger.error("key_validator.validate_failed",
                        dataset=dataset.name,
                        error=str(e))
            raise KeyValidationError(
                f"[KEY VALIDATION ERROR] Failed to profile key '{key_column}' "
                f"in '{dataset.name}': {e}"
            ) from e
        finally:
            self.con.unregister(KEYS_VIEW)

        result = KeyValidationResult(
            dataset=dataset.name,
            key_column=key_column,
            total_rows=int(total_rows),
            keyed_rows=int(keyed_rows),
            unique_values=int(unique_values),
            duplicate_keys=[row[0] for row in duplicates],
        )

        logger.info("key_validator.validate_complete",
                   dataset=dataset.name,
                   key=key_column,
                   blank_rows=result.blank_rows,
                   shadowed_rows=result.shadowed_rows)

        return result
