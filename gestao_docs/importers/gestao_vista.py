"""Import of the dated "gestão à vista" document export."""

from pathlib import Path

from gestao_docs.exceptions import SpreadsheetImportError
from gestao_docs.gestao_vista import find_documento_by_codigo, merge_vista_data, parse_excel_date
from gestao_docs.importers.spreadsheet import Row, read_sheet_rows
from gestao_docs.logging import get_logger
from gestao_docs.matrix import cell_text
from gestao_docs.models import DocumentoDetalhado, GestaoVistaData

logger = get_logger(__name__)

# Column positions (0-based) in the export
CASA_COLUMN = 3
DOCUMENTO_COLUMN = 7
EMISSAO_COLUMN = 13
VALIDADE_COLUMN = 15

# Records start two rows below the header and are separated by a spacer row.
FIRST_RECORD = 2
RECORD_STEP = 2


def _cell(row: Row, index: int):
    return row[index] if index < len(row) else None


def parse_gestao_vista_rows(rows: list[Row]) -> list[GestaoVistaData]:
    """Parse the export into per-property document lists.

    Property cells read "CODE - NAME"; document cells read
    "<document code> <document name>". Incomplete records are skipped.

    Raises
    ------
    SpreadsheetImportError
        If the sheet is empty or no record could be parsed.
    """
    if not rows:
        raise SpreadsheetImportError("Excel file is empty or invalid")

    casas: dict[str, GestaoVistaData] = {}
    for i in range(FIRST_RECORD, len(rows), RECORD_STEP):
        row = rows[i]
        if not row:
            continue

        casa_text = cell_text(_cell(row, CASA_COLUMN))
        codigo = casa_text.split(" - ")[0].strip()
        if not codigo:
            logger.debug("Row %d: no property code, skipping", i + 1)
            continue

        documento_text = cell_text(_cell(row, DOCUMENTO_COLUMN))
        codigo_documento, _, nome_documento = documento_text.partition(" ")
        nome_documento = nome_documento.strip()
        if not codigo_documento or not nome_documento:
            logger.debug("Row %d: could not parse document %r, skipping", i + 1, documento_text)
            continue

        casa = casas.setdefault(codigo, GestaoVistaData(codigo=codigo))
        casa.documentos.append(
            DocumentoDetalhado(
                codigo=codigo,
                codigo_documento=find_documento_by_codigo(codigo_documento, nome_documento),
                nome_documento=nome_documento,
                data_emissao=parse_excel_date(_cell(row, EMISSAO_COLUMN)),
                data_validade=parse_excel_date(_cell(row, VALIDADE_COLUMN)),
                presente=True,
            )
        )

    if not casas:
        raise SpreadsheetImportError("No valid gestao vista data found in file")

    logger.info("Parsed documents for %d casas", len(casas))
    return list(casas.values())


def import_gestao_vista(path: str | Path, store=None, header_row: int = 10) -> list[GestaoVistaData]:
    """Read and parse the export; with a store, merge into the stored records."""
    parsed = parse_gestao_vista_rows(read_sheet_rows(path, header_row))
    if store is None:
        return parsed
    merged = merge_vista_data(store.load_gestao_vista(), parsed)
    store.save_gestao_vista(merged)
    return merged
