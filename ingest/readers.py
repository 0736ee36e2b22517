"""Read CSV and Excel sources into a plain header + rows table."""

import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from ingest.config import SchemaVariant
from ingest.errors import SourceNotFoundError, UnreadableSourceError
from ingest.logging_config import get_logger

__all__ = ["SourceTable", "read_csv_table", "read_excel_table", "read_source_table"]

logger = get_logger("readers")


@dataclass
class SourceTable:
    """A spreadsheet as the normalizer sees it.

    ``header`` is the ordered list of columns actually present; each row maps
    a column name to its raw cell value (str, number or None).
    """

    header: List[str]
    rows: List[Dict[str, Any]] = field(default_factory=list)
    path: Optional[str] = None

    def __len__(self) -> int:
        return len(self.rows)


def _clean_cell(value: Any) -> Any:
    """Convert pandas NA values to empty strings and trim text."""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        return value
    if isinstance(value, str):
        return value.strip()
    return value


def _frame_to_table(df: pd.DataFrame, path: str) -> SourceTable:
    # Columns with a blank header carry no mappable data
    keep = [col for col in df.columns if str(col).strip() and not str(col).startswith("Unnamed:")]
    df = df[keep].copy()
    df.columns = [str(col).strip() for col in df.columns]
    header = list(df.columns)

    rows: List[Dict[str, Any]] = []
    for record in df.to_dict(orient="records"):
        row = {col: _clean_cell(record.get(col)) for col in header}
        # Skip rows where every cell is empty
        if any(v != "" for v in row.values()):
            rows.append(row)
    return SourceTable(header=header, rows=rows, path=path)


def _ensure_exists(path: Union[str, Path]) -> Path:
    source = Path(path)
    if not source.exists():
        raise SourceNotFoundError(str(source))
    return source


def read_csv_table(path: Union[str, Path]) -> SourceTable:
    """Read a delimited text file. Every cell is read as text."""
    source = _ensure_exists(path)
    sep = "\t" if source.suffix.lower() == ".tsv" else ","
    try:
        df = pd.read_csv(
            source,
            sep=sep,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        return SourceTable(header=[], rows=[], path=str(source))
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise UnreadableSourceError(str(source), str(e)) from e
    logger.debug("Read %d raw rows from %s", len(df), source.name)
    return _frame_to_table(df, str(source))


def read_excel_table(path: Union[str, Path], sheet: Union[int, str] = 0) -> SourceTable:
    """Read one worksheet (the first by default). Empty cells become ''."""
    source = _ensure_exists(path)
    try:
        df = pd.read_excel(source, sheet_name=sheet, dtype=object)
    except (ValueError, KeyError, OSError, zipfile.BadZipFile) as e:
        # Not a workbook, or no such sheet
        raise UnreadableSourceError(str(source), str(e)) from e
    logger.debug("Read %d raw rows from %s (sheet %s)", len(df), source.name, sheet)
    return _frame_to_table(df, str(source))


def read_source_table(
    path: Union[str, Path],
    variant: SchemaVariant,
    sheet: Union[int, str] = 0,
) -> SourceTable:
    """Read ``path`` with the reader that matches ``variant``."""
    if variant.source_format == "spreadsheet":
        return read_excel_table(path, sheet=sheet)
    return read_csv_table(path)
