"""
Unit tests for configuration loading and saving.
"""

import pytest
import yaml
from pathlib import Path
import sys

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from sheetmerge.config.manager import (
    ComparisonConfig,
    ConfigManager,
    DatasetConfig,
    OutputConfig,
    create_sample_config,
)


class TestDataclasses:

    def test_comparison_config_defaults_to_ignore_case(self):
        assert ComparisonConfig(primary_key="id").ignore_case is True

    @pytest.mark.parametrize("key", ["", None])
    def test_comparison_config_requires_key(self, key):
        with pytest.raises(ValueError):
            ComparisonConfig(primary_key=key)

    def test_dataset_config_requires_path(self):
        with pytest.raises(ValueError):
            DatasetConfig(name="base", path="")

    def test_output_config_rejects_unknown_suffix(self):
        with pytest.raises(ValueError, match="Unsupported output type"):
            OutputConfig(path="merged.json")

    def test_output_config_rejects_negative_limit(self):
        with pytest.raises(ValueError):
            OutputConfig(preview_limit=-1)

    def test_output_config_normalizes_show(self):
        assert OutputConfig(show="new").show == "NEW"

    def test_output_config_rejects_unknown_show(self):
        with pytest.raises(ValueError, match="Unknown change type"):
            OutputConfig(show="bogus")

    def test_comparison_config_rejects_non_bool_ignore_case(self):
        with pytest.raises(ValueError, match="ignore_case"):
            ComparisonConfig(primary_key="id", ignore_case="false")


class TestConfigManager:

    def _write(self, tmp_path, content):
        path = tmp_path / "sheetmerge.yaml"
        path.write_text(yaml.safe_dump(content))
        return path

    def test_load_full_config(self, tmp_path):
        path = self._write(tmp_path, {
            "datasets": {
                "base": {"path": "dict.xlsx", "sheet": "Sheet2"},
                "live": "live.csv",
            },
            "comparison": {"primary_key": "code", "ignore_case": False},
            "output": {"path": "out.csv", "show": "UPDATED", "preview_limit": 5},
            "logging": {"level": "DEBUG"},
        })

        manager = ConfigManager(path)
        manager.load()

        assert manager.get_dataset("base") == DatasetConfig(name="base", path="dict.xlsx", sheet="Sheet2")
        assert manager.get_dataset("live").path == "live.csv"
        assert manager.get_dataset("live").sheet == 0
        assert manager.comparison == ComparisonConfig(primary_key="code", ignore_case=False)
        assert manager.output == OutputConfig(path="out.csv", show="UPDATED", preview_limit=5)
        assert manager.logging.level == "DEBUG"

    def test_defaults_when_sections_missing(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        manager = ConfigManager(path)
        manager.load()

        assert manager.datasets == {}
        assert manager.comparison is None
        assert manager.output == OutputConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "nope.yaml").load()

    def test_empty_primary_key_rejected(self, tmp_path):
        path = self._write(tmp_path, {"comparison": {"primary_key": ""}})

        with pytest.raises(ValueError):
            ConfigManager(path).load()

    def test_quoted_ignore_case_rejected(self, tmp_path):
        path = self._write(tmp_path, {"comparison": {"primary_key": "id", "ignore_case": "false"}})

        with pytest.raises(ValueError):
            ConfigManager(path).load()

    def test_unknown_show_rejected_at_load(self, tmp_path):
        path = self._write(tmp_path, {"output": {"show": "bogus"}})

        with pytest.raises(ValueError, match="Unknown change type"):
            ConfigManager(path).load()

    def test_unknown_dataset_ignored(self, tmp_path):
        path = self._write(tmp_path, {"datasets": {"other": {"path": "x.csv"}}})

        manager = ConfigManager(path)
        manager.load()

        with pytest.raises(KeyError):
            manager.get_dataset("other")

    def test_save_round_trip(self, tmp_path):
        path = self._write(tmp_path, {
            "datasets": {"base": {"path": "a.xlsx"}, "live": {"path": "b.xlsx"}},
            "comparison": {"primary_key": "id", "ignore_case": True},
        })
        manager = ConfigManager(path)
        manager.load()

        saved = tmp_path / "saved.yaml"
        manager.save(saved)

        reloaded = ConfigManager(saved)
        reloaded.load()
        assert reloaded.datasets == manager.datasets
        assert reloaded.comparison == manager.comparison
        assert reloaded.output == manager.output

    def test_sample_config_loads(self, tmp_path):
        path = create_sample_config(tmp_path / "sample.yaml")

        manager = ConfigManager(path)
        manager.load()

        assert manager.comparison.primary_key == "id"
        assert manager.output.path == "merged_output.xlsx"
        assert set(manager.datasets) == {"base", "live"}
