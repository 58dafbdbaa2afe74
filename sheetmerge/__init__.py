"""
sheetmerge - Compare a base and a live spreadsheet and merge the changes.
"""

__version__ = "1.0.0"

from .core.models import (
    ChangeType,
    Dataset,
    ProcessedRow,
    ComparisonStats,
    ComparisonResult,
    MalformedDatasetError,
)
from .core.comparator import DatasetComparator, compare_datasets
from .core.key_selector import KeySelectionError, common_columns, suggest_primary_key
from .config.manager import ConfigManager, DatasetConfig, ComparisonConfig, OutputConfig
from .pipeline.validators import ValidationPipeline, ValidationReport, DatasetValidationError
from .adapters.file_reader import DatasetReader, from_records
from .adapters.exporter import ResultExporter
from .utils.logger import get_logger, configure_logger

__all__ = [
    "ChangeType",
    "Dataset",
    "ProcessedRow",
    "ComparisonStats",
    "ComparisonResult",
    "MalformedDatasetError",
    "DatasetComparator",
    "compare_datasets",
    "KeySelectionError",
    "common_columns",
    "suggest_primary_key",
    "ConfigManager",
    "DatasetConfig",
    "ComparisonConfig",
    "OutputConfig",
    "ValidationPipeline",
    "ValidationReport",
    "DatasetValidationError",
    "DatasetReader",
    "from_records",
    "ResultExporter",
    "get_logger",
    "configure_logger",
]
