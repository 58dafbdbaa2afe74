"""
Merged dataset serializer.
Single responsibility: write comparison results to spreadsheet or CSV files.
"""

from pathlib import Path
from typing import List
import pandas as pd

from ..core.models import ComparisonResult
from ..utils.logger import get_logger


logger = get_logger()


CHANGE_TYPE_COLUMN = "CHANGE_TYPE"
CHANGED_COLUMNS_COLUMN = "CHANGED_COLUMNS"
SHEET_NAME = "Merged Data"
DEFAULT_OUTPUT = "merged_output.xlsx"


class ResultExporter:
    """
    Writes merged rows with their change labels.

    Output layout: CHANGE_TYPE, CHANGED_COLUMNS, then every column of the
    union in union order.
    """

    def output_columns(self, result: ComparisonResult) -> List[str]:
        meta = [CHANGE_TYPE_COLUMN, CHANGED_COLUMNS_COLUMN]
        clashes = [col for col in result.all_columns if col in meta]
        if clashes:
            logger.error("exporter.column_clash", columns=clashes)
            raise ValueError(
                f"[EXPORT ERROR] Data column(s) {', '.join(clashes)} collide with "
                "the change label columns. "
                "Suggestion: Rename the column(s) in the input files."
            )
        return meta + list(result.all_columns)

    def to_frame(self, result: ComparisonResult) -> pd.DataFrame:
        """
        Build the export frame.

        Args:
            result: Comparison results

        Returns:
            DataFrame with one row per processed row
        """
        columns = self.output_columns(result)
        records = []
        for row in result.rows:
            record = {col: row.data.get(col, "") for col in result.all_columns}
            record[CHANGE_TYPE_COLUMN] = row.change_type.value
            record[CHANGED_COLUMNS_COLUMN] = ", ".join(row.changed_columns)
            records.append(record)

        return pd.DataFrame.from_records(records, columns=columns)

    def write_excel(self, result: ComparisonResult,
                    output_path: Path = Path(DEFAULT_OUTPUT)) -> Path:
        """
        Write results to a workbook with a single "Merged Data" sheet.

        Args:
            result: Comparison results
            output_path: Destination .xlsx path

        Returns:
            The written path
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        df = self.to_frame(result)
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=SHEET_NAME, index=False)

        logger.info("exporter.excel.written",
                   file=str(output_path),
                   rows=len(df),
                   columns=len(df.columns))

        return output_path

    def write_csv(self, result: ComparisonResult, output_path: Path) -> Path:
        """
        Write results to a UTF-8 CSV file.

        Args:
            result: Comparison results
            output_path: Destination .csv path

        Returns:
            The written path
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        df = self.to_frame(result)
        df.to_csv(output_path, index=False, encoding="utf-8")

        logger.info("exporter.csv.written",
                   file=str(output_path),
                   rows=len(df),
                   columns=len(df.columns))

        return output_path

    def export(self, result: ComparisonResult, output_path: Path) -> Path:
        """
        Write results, choosing the format from the file suffix.

        Raises:
            ValueError: If the suffix is neither .xlsx nor .csv
        """
        suffix = Path(output_path).suffix.lower()
        if suffix == ".xlsx":
            return self.write_excel(result, output_path)
        if suffix == ".csv":
            return self.write_csv(result, output_path)
        raise ValueError(f"Unsupported output type: {suffix}")
