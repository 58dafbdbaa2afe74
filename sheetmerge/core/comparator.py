"""
Core data comparison logic.
Single responsibility: compare a base and a live dataset row by row.
"""

from collections import Counter
from typing import Dict, List, Mapping, Sequence, Tuple

from ..config.manager import ComparisonConfig
from ..utils.logger import get_logger
from ..utils.normalizers import is_blank_key, normalize_value, to_cell_string
from .models import (
    ChangeType,
    ComparisonResult,
    ComparisonStats,
    Dataset,
    ProcessedRow,
)


logger = get_logger()


def index_rows(dataset: Dataset, primary_key: str) -> Dict[str, Mapping]:
    """
    Index rows by the string form of their primary-key value.

    Rows with a blank key are skipped. When a key repeats, the last row
    wins and earlier rows with that key are dropped from the comparison.

    Args:
        dataset: Dataset to index
        primary_key: Key column name

    Returns:
        Mapping of key string to row, in first-seen key order
    """
    index: Dict[str, Mapping] = {}
    skipped = 0
    shadowed = 0

    for row in dataset.rows:
        key_value = row.get(primary_key)
        if is_blank_key(key_value):
            skipped += 1
            continue

        key = to_cell_string(key_value)
        if key in index:
            shadowed += 1
        index[key] = row

    logger.debug("comparator.index.built",
                dataset=dataset.name,
                indexed=len(index),
                skipped_blank_keys=skipped,
                shadowed_duplicates=shadowed)

    if shadowed:
        logger.warning("comparator.index.duplicate_keys",
                      dataset=dataset.name,
                      key=primary_key,
                      shadowed_rows=shadowed)

    return index


def union_columns(base_columns: Sequence[str],
                  live_columns: Sequence[str]) -> List[str]:
    """
    Union of declared column names, base columns first.

    Args:
        base_columns: Base dataset columns
        live_columns: Live dataset columns

    Returns:
        Distinct column names in first-seen order
    """
    # dict preserves insertion order
    return list(dict.fromkeys([*base_columns, *live_columns]))


def diff_columns(base_row: Mapping, live_row: Mapping,
                 columns: Sequence[str], primary_key: str,
                 ignore_case: bool) -> List[str]:
    """
    List the columns whose normalized values differ between two rows.

    The primary key column is never compared.
    """
    changed = []
    for col in columns:
        if col == primary_key:
            continue
        if (normalize_value(base_row.get(col), ignore_case)
                != normalize_value(live_row.get(col), ignore_case)):
            changed.append(col)
    return changed


def merge_rows(base_row: Mapping, live_row: Mapping,
               columns: Sequence[str]) -> Dict[str, object]:
    """
    Merge a matched pair over the column union.

    Live values win for every column the live row carries. Otherwise the
    base value is kept. Columns present in neither row are left out.
    """
    merged = {}
    for col in columns:
        if col in live_row:
            merged[col] = live_row[col]
        elif col in base_row:
            merged[col] = base_row[col]
    return merged


class DatasetComparator:
    """
    Compare a base dataset against a live dataset.

    The comparator assumes a valid primary key. A key column missing from
    every row of one dataset is not reported; all rows of that dataset
    simply stay unmatched.
    """

    def __init__(self, config: ComparisonConfig):
        """
        Initialize comparator.

        Args:
            config: Comparison configuration
        """
        self.config = config

    def compare(self, base: Dataset, live: Dataset) -> ComparisonResult:
        """
        Classify every keyed row as NEW, UPDATED, REMOVED or UNCHANGED.

        Args:
            base: Authoritative dataset
            live: Updated dataset

        Returns:
            Comparison results
        """
        primary_key = self.config.primary_key
        ignore_case = self.config.ignore_case

        logger.info("comparator.starting",
                   base=base.name,
                   live=live.name,
                   primary_key=primary_key,
                   ignore_case=ignore_case)

        base_index = index_rows(base, primary_key)
        live_index = index_rows(live, primary_key)
        all_columns = union_columns(base.columns, live.columns)

        rows, counts = self._classify(base_index, live_index, all_columns)

        stats = ComparisonStats(
            total=len(rows),
            new=counts[ChangeType.NEW],
            updated=counts[ChangeType.UPDATED],
            removed=counts[ChangeType.REMOVED],
            unchanged=counts[ChangeType.UNCHANGED],
        )

        logger.info("comparator.completed", **stats.as_dict())

        return ComparisonResult(
            rows=tuple(rows),
            all_columns=tuple(all_columns),
            stats=stats,
            primary_key=primary_key,
        )

    def _classify(self, base_index: Dict[str, Mapping],
                  live_index: Dict[str, Mapping],
                  all_columns: List[str]) -> Tuple[List[ProcessedRow], Counter]:
        """
        Walk the base index, then the live-only keys.

        Returns:
            Processed rows and per-classification counts
        """
        rows: List[ProcessedRow] = []
        counts: Counter = Counter()

        for key, base_row in base_index.items():
            live_row = live_index.get(key)

            if live_row is None:
                processed = ProcessedRow(
                    data=dict(base_row),
                    change_type=ChangeType.REMOVED,
                    row_id=key,
                )
            else:
                changed = diff_columns(base_row, live_row, all_columns,
                                       self.config.primary_key,
                                       self.config.ignore_case)
                if changed:
                    processed = ProcessedRow(
                        data=merge_rows(base_row, live_row, all_columns),
                        change_type=ChangeType.UPDATED,
                        row_id=key,
                        changed_columns=tuple(changed),
                    )
                    logger.debug("comparator.row.updated",
                                key=key,
                                columns=changed)
                else:
                    processed = ProcessedRow(
                        data=dict(base_row),
                        change_type=ChangeType.UNCHANGED,
                        row_id=key,
                    )

            rows.append(processed)
            counts[processed.change_type] += 1

        for key, live_row in live_index.items():
            if key in base_index:
                continue
            rows.append(ProcessedRow(
                data=dict(live_row),
                change_type=ChangeType.NEW,
                row_id=key,
            ))
            counts[ChangeType.NEW] += 1

        return rows, counts


def compare_datasets(base: Dataset, live: Dataset,
                     config: ComparisonConfig) -> ComparisonResult:
    """
    Compare two datasets with the given configuration.

    Args:
        base: Authoritative dataset
        live: Updated dataset
        config: Primary key and case handling

    Returns:
        Comparison results
    """
    return DatasetComparator(config).compare(base, live)
