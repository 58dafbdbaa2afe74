"""
Dataset loader.
Single responsibility: read spreadsheet, CSV or Parquet files into datasets.
"""

from pathlib import Path
from typing import Any, Iterable, Mapping, Optional
import duckdb
import pandas as pd

from ..core.models import Dataset
from ..utils.logger import get_logger


logger = get_logger()


CSV_ENCODINGS = ['utf-8', 'utf-8-sig', 'latin-1', 'cp1252']


def _qpath(path: Path) -> str:
    """Quote a file path for use inside a DuckDB string literal."""
    path_str = str(path).replace('\\', '/').replace("'", "''")
    return f"'{path_str}'"


def frame_to_dataset(name: str, df: pd.DataFrame) -> Dataset:
    """
    Convert a DataFrame into a dataset.

    Missing cells (NaN, NaT, None) become empty strings and header labels
    are turned into strings.

    Args:
        name: Dataset name
        df: Source frame

    Returns:
        Dataset with the frame's column order
    """
    df = df.copy()
    df.columns = [str(col) for col in df.columns]
    df = df.astype(object)
    df = df.where(pd.notna(df), "")
    return Dataset(name=name, columns=list(df.columns), rows=df.to_dict("records"))


def from_records(name: str, rows: Iterable[Mapping[str, Any]]) -> Dataset:
    """
    Build a dataset from in-memory rows.

    Columns are the row keys in first-seen order.

    Args:
        name: Dataset name
        rows: Row mappings

    Returns:
        Dataset
    """
    rows = list(rows)
    columns: dict = {}
    for row in rows:
        if isinstance(row, Mapping):
            columns.update(dict.fromkeys(row))
    return Dataset(name=name, columns=list(columns), rows=rows)


class DatasetReader:
    """
    Reads tabular files into datasets.
    """

    def __init__(self, con: Optional[duckdb.DuckDBPyConnection] = None):
        """
        Initialize reader.

        Args:
            con: DuckDB connection used for Parquet files
        """
        self.con = con

    def read_excel(self, file_path: Path, sheet_name: Any = 0) -> pd.DataFrame:
        """
        Read one sheet of an Excel workbook.

        Args:
            file_path: Path to Excel file
            sheet_name: Sheet index or name (first sheet by default)

        Returns:
            DataFrame
        """
        logger.info("file_reader.excel.reading",
                   file=str(file_path),
                   sheet=sheet_name)

        df = pd.read_excel(file_path, sheet_name=sheet_name)

        logger.info("file_reader.excel.loaded",
                   rows=len(df),
                   columns=len(df.columns))

        return df

    def read_csv(self, file_path: Path) -> pd.DataFrame:
        """
        Read a CSV file as text with encoding fallback.

        Args:
            file_path: Path to CSV file

        Returns:
            DataFrame of strings, empty cells as ""
        """
        logger.info("file_reader.csv.reading", file=str(file_path))

        df = None
        successful_encoding = None

        for encoding in CSV_ENCODINGS:
            try:
                df = pd.read_csv(file_path, encoding=encoding, dtype=str,
                                 keep_default_na=False)
                successful_encoding = encoding
                break
            except (UnicodeDecodeError, UnicodeError):
                continue

        if df is None:
            logger.warning("file_reader.csv.encoding_fallback", file=str(file_path))
            df = pd.read_csv(file_path, encoding='utf-8', encoding_errors='replace',
                             dtype=str, keep_default_na=False)
            successful_encoding = 'utf-8 (with replacements)'

        logger.info("file_reader.csv.loaded",
                   rows=len(df),
                   columns=len(df.columns),
                   encoding=successful_encoding)

        return df

    def read_parquet(self, file_path: Path) -> pd.DataFrame:
        """
        Read a Parquet file through DuckDB.

        Args:
            file_path: Path to Parquet file

        Returns:
            DataFrame
        """
        logger.info("file_reader.parquet.reading", file=str(file_path))

        con = self.con or duckdb.connect(":memory:")
        try:
            df = con.execute(f"SELECT * FROM read_parquet({_qpath(file_path)})").df()
        finally:
            if self.con is None:
                con.close()

        logger.info("file_reader.parquet.loaded",
                   rows=len(df),
                   columns=len(df.columns))

        return df

    def read(self, file_path: Path, name: Optional[str] = None,
             sheet_name: Any = 0) -> Dataset:
        """
        Read any supported file type into a dataset.

        Args:
            file_path: Path to file
            name: Dataset name (file name by default)
            sheet_name: Sheet for Excel workbooks

        Returns:
            Dataset

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If file type is not supported
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        suffix = file_path.suffix.lower()

        if suffix in ['.xlsx', '.xls']:
            df = self.read_excel(file_path, sheet_name=sheet_name)
        elif suffix == '.csv':
            df = self.read_csv(file_path)
        elif suffix == '.parquet':
            df = self.read_parquet(file_path)
        else:
            raise ValueError(f"Unsupported file type: {suffix}")

        return frame_to_dataset(name or file_path.name, df)
