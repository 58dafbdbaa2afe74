"""Configuration management."""

from .manager import ConfigManager, DatasetConfig, ComparisonConfig, OutputConfig, LoggingConfig

__all__ = ["ConfigManager", "DatasetConfig", "ComparisonConfig", "OutputConfig", "LoggingConfig"]
