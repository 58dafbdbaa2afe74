"""Pre-comparison validation."""

from .validators import (
    ValidationPipeline,
    ValidationReport,
    ValidationIssue,
    Validator,
    SchemaValidator,
    PrimaryKeyValidator,
    DatasetValidationError
)

__all__ = [
    "ValidationPipeline",
    "ValidationReport",
    "ValidationIssue",
    "Validator",
    "SchemaValidator",
    "PrimaryKeyValidator",
    "DatasetValidationError",
]
