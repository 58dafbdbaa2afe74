"""
Configuration management.
Single responsibility: load, validate, and manage configuration.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from ..core.models import ChangeType
from ..utils.logger import get_logger


logger = get_logger()


SUPPORTED_OUTPUTS = (".xlsx", ".csv")


@dataclass
class DatasetConfig:
    """Configuration for a single input dataset."""

    name: str
    path: str
    sheet: Any = 0

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.path:
            raise ValueError(f"Dataset path is required for '{self.name}'")
        if not self.name:
            raise ValueError("Dataset name is required")


@dataclass
class ComparisonConfig:
    """Configuration for a base/live comparison."""

    primary_key: str
    ignore_case: bool = True

    def __post_init__(self):
        """Reject a missing primary key before any comparison runs."""
        if not isinstance(self.primary_key, str) or not self.primary_key:
            raise ValueError("A primary key column must be selected")
        if not isinstance(self.ignore_case, bool):
            raise ValueError(
                f"ignore_case must be true or false, got {self.ignore_case!r}"
            )


@dataclass
class OutputConfig:
    """Where and how results are written and previewed."""

    path: str = "merged_output.xlsx"
    show: Optional[str] = None
    preview_limit: int = 20

    def __post_init__(self):
        if Path(self.path).suffix.lower() not in SUPPORTED_OUTPUTS:
            raise ValueError(
                f"Unsupported output type: {self.path} "
                f"(expected one of {', '.join(SUPPORTED_OUTPUTS)})"
            )
        if self.preview_limit < 0:
            raise ValueError("preview_limit must be zero or positive")
        if self.show is not None:
            choices = [c.value for c in ChangeType]
            if str(self.show).upper() not in choices:
                raise ValueError(
                    f"Unknown change type to show: {self.show} "
                    f"(expected one of {', '.join(choices)})"
                )
            self.show = str(self.show).upper()


@dataclass
class LoggingConfig:
    """Logger settings."""

    level: str = "INFO"
    file: Optional[str] = None


class ConfigManager:
    """
    Manage application configuration.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = Path(config_path or "sheetmerge.yaml")
        self.config: Dict[str, Any] = {}
        self.datasets: Dict[str, DatasetConfig] = {}
        self.comparison: Optional[ComparisonConfig] = None
        self.output = OutputConfig()
        self.logging = LoggingConfig()

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If config is invalid YAML
            ValueError: If a section holds invalid values
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config not found: {self.config_path}")

        logger.info("config.loading", file=str(self.config_path))

        with open(self.config_path, encoding="utf-8") as f:
            self.config = yaml.safe_load(f) or {}

        self._parse_datasets()
        self._parse_comparison()
        self._parse_output()
        self._parse_logging()

        logger.info("config.loaded",
                   datasets=len(self.datasets),
                   primary_key=self.comparison.primary_key if self.comparison else None)

        return self.config

    def _parse_datasets(self):
        """Parse base/live dataset sections."""
        for name, cfg in (self.config.get("datasets") or {}).items():
            if name not in ("base", "live"):
                logger.warning("config.dataset.ignored", dataset=name)
                continue
            if isinstance(cfg, str):
                cfg = {"path": cfg}
            try:
                self.datasets[name] = DatasetConfig(
                    name=name,
                    path=cfg.get("path", ""),
                    sheet=cfg.get("sheet", 0)
                )
            except Exception as e:
                logger.error("config.dataset.invalid",
                           dataset=name,
                           error=str(e))
                raise

    def _parse_comparison(self):
        """Parse the comparison section."""
        cmp = self.config.get("comparison")
        if not cmp:
            return

        try:
            self.comparison = ComparisonConfig(
                primary_key=cmp.get("primary_key", ""),
                ignore_case=cmp.get("ignore_case", True)
            )
        except Exception as e:
            logger.error("config.comparison.invalid",
                       comparison=cmp,
                       error=str(e))
            raise

    def _parse_output(self):
        """Parse the output section."""
        out = self.config.get("output") or {}
        try:
            self.output = OutputConfig(
                path=out.get("path", "merged_output.xlsx"),
                show=out.get("show"),
                preview_limit=int(out.get("preview_limit", 20))
            )
        except Exception as e:
            logger.error("config.output.invalid", output=out, error=str(e))
            raise

    def _parse_logging(self):
        """Parse the logging section."""
        log_cfg = self.config.get("logging") or {}
        self.logging = LoggingConfig(
            level=log_cfg.get("level", "INFO"),
            file=log_cfg.get("file")
        )

    def get_dataset(self, name: str) -> DatasetConfig:
        """
        Get dataset configuration by name.

        Args:
            name: "base" or "live"

        Returns:
            Dataset configuration

        Raises:
            KeyError: If dataset not found
        """
        if name not in self.datasets:
            raise KeyError(f"Dataset not found: {name}")
        return self.datasets[name]

    def save(self, path: Optional[Path] = None):
        """
        Save configuration to file.

        Args:
            path: Output path (uses original path if not specified)
        """
        output_path = Path(path or self.config_path)

        logger.info("config.saving", file=str(output_path))

        config_dict: Dict[str, Any] = {"datasets": {}}

        for name, dataset in self.datasets.items():
            config_dict["datasets"][name] = {
                "path": dataset.path,
                "sheet": dataset.sheet
            }

        if self.comparison:
            config_dict["comparison"] = {
                "primary_key": self.comparison.primary_key,
                "ignore_case": self.comparison.ignore_case
            }

        config_dict["output"] = {
            "path": self.output.path,
            "show": self.output.show,
            "preview_limit": self.output.preview_limit
        }
        config_dict["logging"] = {
            "level": self.logging.level,
            "file": self.logging.file
        }

        with open(output_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)

        logger.info("config.saved", file=str(output_path))


SAMPLE_CONFIG = """# sheetmerge configuration
# ========================

datasets:
  # Authoritative data dictionary
  base:
    path: "data/dictionary.xlsx"
    sheet: 0
  # Updated client file
  live:
    path: "data/live.xlsx"
    sheet: 0

comparison:
  primary_key: "id"
  ignore_case: true

output:
  path: "merged_output.xlsx"
  show: null          # NEW, UPDATED, REMOVED, UNCHANGED or null for all
  preview_limit: 20

logging:
  level: "INFO"
  file: null
"""


def create_sample_config(output_path: Path) -> Path:
    """
    Write a sample configuration file.

    Args:
        output_path: Where to save the config

    Returns:
        The written path
    """
    output_path = Path(output_path)
    output_path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    logger.info("config.sample_created", file=str(output_path))
    return output_path
