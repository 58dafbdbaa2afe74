"""
Terminal presentation of comparison results.
Single responsibility: render statistics and a filtered row preview with Rich.
"""

from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich import box

from ..core.models import ChangeType, ComparisonResult, ProcessedRow
from ..pipeline.validators import ValidationReport
from ..utils.normalizers import to_cell_string


CHANGE_STYLES = {
    ChangeType.NEW: "green",
    ChangeType.UPDATED: "yellow",
    ChangeType.REMOVED: "red",
    ChangeType.UNCHANGED: "dim",
}


def display_columns(result: ComparisonResult) -> List[str]:
    """Union columns with the primary key moved to the front."""
    others = [col for col in result.all_columns if col != result.primary_key]
    return [result.primary_key, *others]


class ResultPresenter:
    """
    Renders comparison summaries to a Rich console.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_summary(self, result: ComparisonResult):
        """
        Display row counts per classification.

        Args:
            result: Comparison results
        """
        stats = result.stats
        table = Table(title="Comparison Summary", box=box.ROUNDED)

        table.add_column("Change", style="cyan", no_wrap=True)
        table.add_column("Rows", justify="right", style="magenta")
        table.add_column("Percentage", justify="right", style="green")

        for label, value, style in (
            ("New", stats.new, CHANGE_STYLES[ChangeType.NEW]),
            ("Updated", stats.updated, CHANGE_STYLES[ChangeType.UPDATED]),
            ("Removed", stats.removed, CHANGE_STYLES[ChangeType.REMOVED]),
            ("Unchanged", stats.unchanged, CHANGE_STYLES[ChangeType.UNCHANGED]),
        ):
            percentage = (100 * value / stats.total) if stats.total else 0
            table.add_row(Text(label, style=style), f"{value:,}", f"{percentage:.1f}%")

        table.add_row(Text("Total", style="bold"), f"{stats.total:,}", "")

        self.console.print()
        self.console.print(table)

    def show_rows(self, result: ComparisonResult,
                  change_type: Optional[ChangeType] = None,
                  limit: int = 20):
        """
        Display a preview of rows, optionally filtered by classification.

        Changed cells of UPDATED rows are highlighted.

        Args:
            result: Comparison results
            change_type: Classification to show; None shows all rows
            limit: Maximum rows printed
        """
        change_type = ChangeType(change_type) if change_type else None
        rows = result.filter_rows(change_type)
        columns = display_columns(result)
        title = f"{change_type.value if change_type else 'All'} rows"

        table = Table(title=title, box=box.SIMPLE)
        table.add_column("Status", no_wrap=True)
        for col in columns:
            header = f"{col} (PK)" if col == result.primary_key else col
            table.add_column(Text(header), no_wrap=True)

        for row in rows[:limit]:
            table.add_row(*self._cells(row, columns))

        self.console.print(table)

        if not rows:
            self.console.print("No rows found for this filter.", style="dim")
        elif len(rows) > limit:
            self.console.print(f"Showing {limit:,} of {len(rows):,} rows", style="dim")

    def show_validation(self, report: ValidationReport):
        """Print validation warnings and errors."""
        for issue in report.get_errors():
            self.console.print(f"✗ {issue.message}", style="bold red")
        for issue in report.get_warnings():
            self.console.print(f"⚠ {issue.message}", style="yellow")

    def _cells(self, row: ProcessedRow, columns: List[str]) -> List[Text]:
        style = CHANGE_STYLES[row.change_type]
        cells = [Text(row.change_type.value, style=style)]
        for col in columns:
            if col not in row.data or row.data[col] is None:
                cells.append(Text("null", style="dim italic"))
                continue
            cell_style = "bold green" if col in row.changed_columns else ""
            cells.append(Text(to_cell_string(row.data[col]), style=cell_style))
        return cells
