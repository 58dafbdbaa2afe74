"""
Unit tests for the comparison data model.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from sheetmerge.config.manager import ComparisonConfig
from sheetmerge.core.comparator import compare_datasets
from sheetmerge.core.models import (
    ChangeType,
    ComparisonStats,
    Dataset,
    MalformedDatasetError,
    ProcessedRow,
    META_CHANGE_TYPE,
    META_CHANGED_COLUMNS,
    META_ROW_ID,
)


class TestDataset:
    """Dataset shape checks."""

    def test_columns_and_rows_become_tuples(self):
        dataset = Dataset("base", ["id"], [{"id": "1"}])

        assert dataset.columns == ("id",)
        assert isinstance(dataset.rows, tuple)
        assert len(dataset) == 1

    def test_rejects_non_mapping_rows(self):
        with pytest.raises(MalformedDatasetError, match="row 1"):
            Dataset("base", ["id"], [{"id": "1"}, ["1"]])

    def test_rejects_string_columns(self):
        with pytest.raises(MalformedDatasetError):
            Dataset("base", "id", [])

    def test_rejects_non_string_column_names(self):
        with pytest.raises(MalformedDatasetError):
            Dataset("base", ["id", 3], [])

    def test_rejects_rows_that_are_not_a_sequence(self):
        with pytest.raises(MalformedDatasetError):
            Dataset("base", ["id"], {"id": "1"})

    def test_malformed_is_a_value_error(self):
        assert issubclass(MalformedDatasetError, ValueError)


class TestProcessedRow:
    """Metadata invariants."""

    def test_updated_requires_changed_columns(self):
        with pytest.raises(ValueError):
            ProcessedRow(data={"id": "1"}, change_type=ChangeType.UPDATED, row_id="1")

    @pytest.mark.parametrize("change_type", [
        ChangeType.NEW, ChangeType.REMOVED, ChangeType.UNCHANGED
    ])
    def test_other_types_reject_changed_columns(self, change_type):
        with pytest.raises(ValueError):
            ProcessedRow(data={}, change_type=change_type, row_id="1", changed_columns=("a",))

    def test_to_record_flattens_metadata(self):
        row = ProcessedRow(data={"id": "1", "v": "y"}, change_type=ChangeType.UPDATED,
                           row_id="1", changed_columns=("v",))

        assert row.to_record() == {
            "id": "1",
            "v": "y",
            META_CHANGE_TYPE: "UPDATED",
            META_CHANGED_COLUMNS: ["v"],
            META_ROW_ID: "1",
        }

    def test_is_frozen(self):
        row = ProcessedRow(data={}, change_type=ChangeType.NEW, row_id="1")

        with pytest.raises(Exception):
            row.row_id = "2"


class TestComparisonResult:
    """Result helpers."""

    def setup_method(self):
        base = Dataset("base", ["id", "v"], [
            {"id": "1", "v": "a"},
            {"id": "2", "v": "b"},
            {"id": "3", "v": "c"},
        ])
        live = Dataset("live", ["id", "v"], [
            {"id": "1", "v": "a"},
            {"id": "2", "v": "B2"},
            {"id": "4", "v": "d"},
        ])
        self.result = compare_datasets(base, live, ComparisonConfig(primary_key="id"))

    def test_filter_rows_by_type(self):
        assert [r.row_id for r in self.result.filter_rows(ChangeType.UPDATED)] == ["2"]
        assert [r.row_id for r in self.result.filter_rows("NEW")] == ["4"]

    def test_filter_rows_without_type_returns_all(self):
        assert len(self.result.filter_rows()) == self.result.stats.total

    def test_changed_rows_skip_unchanged(self):
        assert [r.row_id for r in self.result.changed_rows()] == ["2", "3", "4"]

    def test_to_records(self):
        records = self.result.to_records()

        assert records[1][META_CHANGE_TYPE] == "UPDATED"
        assert records[1]["v"] == "B2"


class TestComparisonStats:
    def test_defaults_are_zero(self):
        assert ComparisonStats().as_dict() == {
            "total": 0, "new": 0, "updated": 0, "removed": 0, "unchanged": 0
        }
