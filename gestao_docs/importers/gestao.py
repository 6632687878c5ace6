"""Import of the management spreadsheet (document presence matrix)."""

from pathlib import Path

from gestao_docs.exceptions import SpreadsheetImportError
from gestao_docs.importers.spreadsheet import Row, is_blank, is_blank_row, read_sheet_rows
from gestao_docs.logging import get_logger
from gestao_docs.matrix import build_row, cell_text
from gestao_docs.models import GestaoRow

logger = get_logger(__name__)


def parse_gestao_rows(rows: list[Row]) -> list[GestaoRow]:
    """Parse the management sheet into matrix rows.

    The first row is the header. Blank and ``Unnamed*`` headers are
    dropped; the first remaining column holds the property code and every
    other header is normalized to a canonical document name, merging
    columns that collide. Rows without a code are skipped.

    Raises
    ------
    SpreadsheetImportError
        If there are no rows or no usable columns.
    """
    if not rows:
        raise SpreadsheetImportError("Excel file is empty or has invalid format")

    header, data_rows = rows[0], rows[1:]
    columns = [
        (index, cell_text(name))
        for index, name in enumerate(header)
        if not is_blank(name) and not cell_text(name).startswith("Unnamed")
    ]
    if not columns:
        raise SpreadsheetImportError("No valid columns found in file")

    codigo_index = columns[0][0]
    document_columns = columns[1:]

    parsed: list[GestaoRow] = []
    for row in data_rows:
        if not row or is_blank_row(row):
            continue
        codigo = cell_text(row[codigo_index]) if codigo_index < len(row) else ""
        if not codigo:
            continue
        pairs = [(name, row[index] if index < len(row) else None) for index, name in document_columns]
        parsed.append(build_row(codigo, pairs))

    logger.info("Parsed %d management rows with %d raw document columns", len(parsed), len(document_columns))
    return parsed


def import_gestao(path: str | Path, store=None, header_row: int = 14) -> list[GestaoRow]:
    """Read, parse and (when a store is given) save a management spreadsheet."""
    rows = parse_gestao_rows(read_sheet_rows(path, header_row))
    if store is not None:
        store.save_gestao(rows)
    return rows
