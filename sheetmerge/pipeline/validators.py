"""
Pre-comparison validation.
Single responsibility: check that a base/live pair can be compared on a key.
"""

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from ..core.key_validator import KeyValidator
from ..core.models import Dataset
from ..utils.logger import get_logger


logger = get_logger()


class DatasetValidationError(Exception):
    """Raised when a comparison is rejected before it runs."""

    def __init__(self, report: "ValidationReport"):
        self.report = report
        messages = "; ".join(issue.message for issue in report.get_errors())
        super().__init__(f"Comparison rejected: {messages}")


@dataclass
class ValidationIssue:
    """Single validation issue."""

    severity: str  # ERROR, WARNING, INFO
    category: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ValidationReport:
    """Complete validation report."""

    is_valid: bool = True
    issues: List[ValidationIssue] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def add_issue(self, severity: str, category: str,
                  message: str, **details):
        """Add an issue to the report."""
        self.issues.append(ValidationIssue(severity, category, message, details))

        if severity == "ERROR":
            self.is_valid = False

    def get_errors(self) -> List[ValidationIssue]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == "ERROR"]

    def get_warnings(self) -> List[ValidationIssue]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == "WARNING"]

    def raise_for_errors(self):
        """Raise DatasetValidationError when any error was recorded."""
        if not self.is_valid:
            raise DatasetValidationError(self)


class Validator(ABC):
    """Base validator class."""

    @abstractmethod
    def validate(self, base: Dataset, live: Dataset,
                 primary_key: Optional[str]) -> ValidationReport:
        """
        Validate a dataset pair.

        Args:
            base: Base dataset
            live: Live dataset
            primary_key: Selected key column

        Returns:
            Validation report
        """
        pass


class SchemaValidator(Validator):
    """Report empty datasets and repeated column names."""

    def validate(self, base: Dataset, live: Dataset,
                 primary_key: Optional[str]) -> ValidationReport:
        report = ValidationReport()

        for dataset in (base, live):
            if not dataset.rows:
                report.add_issue(
                    "WARNING", "schema", f"Dataset '{dataset.name}' has no rows",
                    dataset=dataset.name
                )

            repeated = [col for col, n in Counter(dataset.columns).items() if n > 1]
            if repeated:
                report.add_issue(
                    "WARNING", "schema",
                    f"Repeated column names in '{dataset.name}'",
                    dataset=dataset.name,
                    columns=repeated
                )

            report.stats[dataset.name] = {
                "row_count": len(dataset),
                "column_count": len(dataset.columns)
            }

        return report


class PrimaryKeyValidator(Validator):
    """
    Check the key column exists on both sides and disclose rows that the
    comparison will skip (blank keys) or shadow (repeated keys).
    """

    def __init__(self, key_validator: Optional[KeyValidator] = None):
        self.key_validator = key_validator

    def validate(self, base: Dataset, live: Dataset,
                 primary_key: Optional[str]) -> ValidationReport:
        report = ValidationReport()

        if not primary_key:
            report.add_issue("ERROR", "keys", "No primary key selected")
            return report

        missing_in = [d.name for d in (base, live) if primary_key not in d.columns]
        if missing_in:
            report.add_issue(
                "ERROR", "keys",
                f"Primary key '{primary_key}' not found in {', '.join(missing_in)}",
                key=primary_key,
                missing_in=missing_in
            )
            return report

        if self.key_validator is None:
            self.key_validator = KeyValidator()

        for dataset in (base, live):
            result = self.key_validator.validate_key(dataset, primary_key)

            if result.blank_rows:
                report.add_issue(
                    "WARNING", "keys",
                    f"{result.blank_rows} row(s) in '{dataset.name}' have no "
                    f"'{primary_key}' value and will be skipped",
                    dataset=dataset.name,
                    blank_rows=result.blank_rows
                )

            if not result.is_unique:
                report.add_issue(
                    "WARNING", "keys",
                    f"{result.shadowed_rows} row(s) in '{dataset.name}' repeat an "
                    f"earlier '{primary_key}' value; only the last row per key is compared",
                    dataset=dataset.name,
                    shadowed_rows=result.shadowed_rows,
                    examples=result.duplicate_keys
                )

            report.stats[dataset.name] = {
                "keyed_rows": result.keyed_rows,
                "unique_keys": result.unique_values
            }

        return report


class ValidationPipeline:
    """
    Run validation checks in sequence.
    """

    def __init__(self, validators: Optional[List[Validator]] = None,
                 fail_fast: bool = False):
        """
        Initialize validation pipeline.

        Args:
            validators: List of validators to run
            fail_fast: Stop at the first validator reporting an error
        """
        if validators is None:
            self.validators = [
                SchemaValidator(),
                PrimaryKeyValidator()
            ]
        else:
            self.validators = validators
        self.fail_fast = fail_fast

    def validate(self, base: Dataset, live: Dataset,
                 primary_key: Optional[str]) -> ValidationReport:
        """
        Run all validators.

        Args:
            base: Base dataset
            live: Live dataset
            primary_key: Selected key column

        Returns:
            Combined validation report
        """
        logger.info("validation.pipeline.starting",
                   validators=len(self.validators))

        combined_report = ValidationReport()

        for validator in self.validators:
            validator_name = validator.__class__.__name__

            logger.debug("validation.pipeline.running",
                        validator=validator_name)

            report = validator.validate(base, live, primary_key)

            combined_report.issues.extend(report.issues)
            combined_report.stats[validator_name] = report.stats

            if not report.is_valid:
                combined_report.is_valid = False

                if self.fail_fast:
                    logger.warning("validation.pipeline.failed_fast",
                                 validator=validator_name)
                    break

        for issue in combined_report.get_warnings():
            logger.warning("validation.issue",
                         category=issue.category,
                         issue=issue.message)

        logger.info("validation.pipeline.completed",
                   is_valid=combined_report.is_valid,
                   errors=len(combined_report.get_errors()),
                   warnings=len(combined_report.get_warnings()))

        return combined_report
