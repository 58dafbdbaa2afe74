#!/usr/bin/env python3
"""
sheetmerge - Main Entry Point
Compare a base spreadsheet with a live spreadsheet and write the merged result.
"""

import argparse
import sys
import traceback
from pathlib import Path
from typing import Optional

from sheetmerge import (
    __version__,
    ChangeType,
    ComparisonConfig,
    ConfigManager,
    DatasetReader,
    ResultExporter,
    ValidationPipeline,
    compare_datasets,
    configure_logger,
    get_logger,
    suggest_primary_key,
)
from sheetmerge.config.manager import DatasetConfig, OutputConfig, create_sample_config
from sheetmerge.core.models import ComparisonResult
from sheetmerge.ui.summary import ResultPresenter


logger = get_logger()


class MergeDiffPipeline:
    """
    Main pipeline orchestrator: load, validate, compare, report, export.
    """

    def __init__(self, base: DatasetConfig, live: DatasetConfig,
                 primary_key: Optional[str] = None,
                 ignore_case: bool = True,
                 output: Optional[OutputConfig] = None,
                 presenter: Optional[ResultPresenter] = None):
        """
        Initialize pipeline.

        Args:
            base: Base dataset location
            live: Live dataset location
            primary_key: Key column (suggested from shared columns when None)
            ignore_case: Case-insensitive cell comparison
            output: Output settings
            presenter: Terminal renderer
        """
        self.base_config = base
        self.live_config = live
        self.primary_key = primary_key
        self.ignore_case = ignore_case
        self.output = output or OutputConfig()
        self.presenter = presenter or ResultPresenter()

        self.reader = DatasetReader()
        self.validator = ValidationPipeline()
        self.exporter = ResultExporter()

        self.result: Optional[ComparisonResult] = None

    def run(self) -> bool:
        """
        Run the complete pipeline.

        Returns:
            True if successful, False otherwise
        """
        try:
            logger.info("pipeline.starting",
                       base=self.base_config.path,
                       live=self.live_config.path)

            base = self.reader.read(Path(self.base_config.path), name="base",
                                    sheet_name=self.base_config.sheet)
            live = self.reader.read(Path(self.live_config.path), name="live",
                                    sheet_name=self.live_config.sheet)

            primary_key = self.primary_key or suggest_primary_key(base, live)

            report = self.validator.validate(base, live, primary_key)
            self.presenter.show_validation(report)
            report.raise_for_errors()

            config = ComparisonConfig(primary_key=primary_key,
                                      ignore_case=self.ignore_case)
            self.result = compare_datasets(base, live, config)

            self.presenter.show_summary(self.result)
            if self.output.preview_limit:
                show = ChangeType(self.output.show) if self.output.show else None
                self.presenter.show_rows(self.result, show, self.output.preview_limit)

            written = self.exporter.export(self.result, Path(self.output.path))
            self.presenter.console.print(f"✓ Merged data written to {written}", style="green")

            logger.info("pipeline.completed", output=str(written))
            return True

        except Exception as e:
            logger.error("pipeline.failed",
                        error=str(e),
                        traceback=traceback.format_exc())
            self.presenter.console.print(f"✗ Pipeline failed: {e}", style="bold red")
            return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare a base (dictionary) file with a live file and merge the changes"
    )

    parser.add_argument("base", nargs="?", help="Base (authoritative) file")
    parser.add_argument("live", nargs="?", help="Live (updated) file")

    parser.add_argument(
        "--config", "-c",
        help="YAML configuration file; command-line values override it"
    )
    parser.add_argument(
        "--key", "-k",
        help="Primary key column (default: suggested from shared columns)"
    )
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        default=None,
        help="Treat values differing only in case as changed"
    )
    parser.add_argument(
        "--output", "-o",
        help="Output file, .xlsx or .csv (default: merged_output.xlsx)"
    )
    parser.add_argument(
        "--show",
        choices=[c.value for c in ChangeType],
        help="Only preview rows with this change type"
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Maximum rows in the preview (0 disables it)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--create-sample",
        action="store_true",
        help="Create sample configuration file"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"sheetmerge v{__version__}"
    )
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.create_sample:
        path = create_sample_config(Path("sheetmerge_sample.yaml"))
        print(f"Sample configuration created: {path}")
        return 0

    manager = ConfigManager(Path(args.config)) if args.config else ConfigManager()
    if args.config:
        try:
            manager.load()
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}")
            return 1

    configure_logger(level="DEBUG" if args.verbose else manager.logging.level,
                     log_file=manager.logging.file)

    base_path = args.base or (manager.datasets["base"].path if "base" in manager.datasets else None)
    live_path = args.live or (manager.datasets["live"].path if "live" in manager.datasets else None)
    if not base_path or not live_path:
        parser.error("a base and a live file are required (arguments or --config)")

    base_sheet = manager.datasets["base"].sheet if "base" in manager.datasets else 0
    live_sheet = manager.datasets["live"].sheet if "live" in manager.datasets else 0

    primary_key = args.key or (manager.comparison.primary_key if manager.comparison else None)
    if args.case_sensitive:
        ignore_case = False
    else:
        ignore_case = manager.comparison.ignore_case if manager.comparison else True

    try:
        output = OutputConfig(
            path=args.output or manager.output.path,
            show=args.show or manager.output.show,
            preview_limit=manager.output.preview_limit if args.limit is None else args.limit
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    pipeline = MergeDiffPipeline(
        DatasetConfig(name="base", path=base_path, sheet=base_sheet),
        DatasetConfig(name="live", path=live_path, sheet=live_sheet),
        primary_key=primary_key,
        ignore_case=ignore_case,
        output=output
    )

    success = pipeline.run()
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
