"""
Unit tests for the merged dataset serializer.

The CHANGE_TYPE / CHANGED_COLUMNS layout is consumed downstream and must
stay exactly as written here.
"""

import pytest
import pandas as pd
from pathlib import Path
import sys

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from sheetmerge.adapters.exporter import ResultExporter, SHEET_NAME
from sheetmerge.config.manager import ComparisonConfig
from sheetmerge.core.comparator import compare_datasets
from sheetmerge.core.models import Dataset


class TestResultExporter:
    """Export layout and file formats."""

    def setup_method(self):
        base = Dataset("base", ["name", "id", "qty"], [
            {"name": "Alpha", "id": "1", "qty": "1"},
            {"name": "Beta", "id": "2", "qty": "2"},
            {"name": "Gamma", "id": "3", "qty": "3"},
        ])
        live = Dataset("live", ["id", "name", "qty", "note"], [
            {"id": "1", "name": "Alpha", "qty": "1", "note": ""},
            {"id": "2", "name": "Bravo", "qty": "20", "note": "fixed"},
            {"id": "4", "name": "Delta", "qty": "4", "note": "new"},
        ])
        self.result = compare_datasets(base, live, ComparisonConfig(primary_key="id"))
        self.exporter = ResultExporter()

    def test_frame_layout(self):
        df = self.exporter.to_frame(self.result)

        assert list(df.columns) == ["CHANGE_TYPE", "CHANGED_COLUMNS", "name", "id", "qty", "note"]
        assert list(df["CHANGE_TYPE"]) == ["UNCHANGED", "UPDATED", "REMOVED", "NEW"]
        assert list(df["CHANGED_COLUMNS"]) == ["", "name, qty, note", "", ""]

    def test_frame_values(self):
        df = self.exporter.to_frame(self.result)

        updated = df.iloc[1]
        assert updated["name"] == "Bravo"
        assert updated["note"] == "fixed"
        # base row data has no note column
        assert df.iloc[0]["note"] == ""
        assert df.iloc[3]["name"] == "Delta"

    def test_write_excel(self, tmp_path):
        path = self.exporter.write_excel(self.result, tmp_path / "out" / "merged_output.xlsx")

        assert path.exists()
        df = pd.read_excel(path, sheet_name=SHEET_NAME, dtype=str)
        assert list(df.columns[:2]) == ["CHANGE_TYPE", "CHANGED_COLUMNS"]
        assert df.loc[1, "CHANGED_COLUMNS"] == "name, qty, note"
        assert df.loc[1, "qty"] == "20"

    def test_write_csv(self, tmp_path):
        path = self.exporter.write_csv(self.result, tmp_path / "merged.csv")

        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        assert len(df) == self.result.stats.total
        assert list(df["CHANGE_TYPE"]) == ["UNCHANGED", "UPDATED", "REMOVED", "NEW"]

    def test_export_dispatches_on_suffix(self, tmp_path):
        assert self.exporter.export(self.result, tmp_path / "a.csv").suffix == ".csv"
        assert self.exporter.export(self.result, tmp_path / "a.xlsx").suffix == ".xlsx"

    def test_export_rejects_unknown_suffix(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported output type"):
            self.exporter.export(self.result, tmp_path / "a.json")

    def test_data_column_named_like_label_is_rejected(self):
        base = Dataset("base", ["id", "CHANGE_TYPE"], [{"id": "1", "CHANGE_TYPE": "manual"}])
        live = Dataset("live", ["id", "CHANGE_TYPE"], [{"id": "1", "CHANGE_TYPE": "manual"}])
        result = compare_datasets(base, live, ComparisonConfig(primary_key="id"))

        with pytest.raises(ValueError, match="CHANGE_TYPE"):
            self.exporter.to_frame(result)
