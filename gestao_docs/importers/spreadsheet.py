"""Raw worksheet access via openpyxl."""

from pathlib import Path
from typing import Any
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from gestao_docs.exceptions import SpreadsheetImportError
from gestao_docs.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = (".xlsx", ".xlsm")

Row = tuple[Any, ...]


def read_sheet_rows(path: str | Path, header_row: int = 0) -> list[Row]:
    """Read the first worksheet of a workbook as value tuples.

    Parameters
    ----------
    path : str | Path
        Workbook path.
    header_row : int
        Number of leading rows to skip; the next row is the header.

    Returns
    -------
    list[Row]
        The header row followed by the data rows. Blank rows are kept.

    Raises
    ------
    SpreadsheetImportError
        If the file is missing, has an unsupported extension or cannot be
        parsed.
    """
    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise SpreadsheetImportError(
            f"File must be Excel format ({', '.join(SUPPORTED_EXTENSIONS)}): {path.name}"
        )
    if not path.exists():
        raise SpreadsheetImportError(f"File not found: {path}")

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, OSError, KeyError, ValueError) as e:
        raise SpreadsheetImportError(f"Error reading Excel file {path.name}: {e}") from e

    try:
        worksheet = workbook.worksheets[0]
        rows = [tuple(row) for row in worksheet.iter_rows(min_row=header_row + 1, values_only=True)]
    finally:
        workbook.close()

    logger.debug("Read %d rows from %s (header row %d)", len(rows), path.name, header_row + 1)
    return rows


def is_blank(value: Any) -> bool:
    """Return True for empty cells."""
    return value is None or str(value).strip() == ""


def is_blank_row(row: Row) -> bool:
    """Return True when every cell of the row is empty."""
    return all(is_blank(cell) for cell in row)
