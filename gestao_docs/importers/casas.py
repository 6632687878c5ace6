"""Import of the property registry spreadsheet."""

import re
from pathlib import Path

from gestao_docs.documents.normalizer import fold
from gestao_docs.exceptions import SpreadsheetImportError
from gestao_docs.importers.spreadsheet import Row, is_blank, is_blank_row, read_sheet_rows
from gestao_docs.logging import get_logger
from gestao_docs.matrix import cell_text
from gestao_docs.models import CasaOracao

logger = get_logger(__name__)

# Column holding "CODE - NAME"
CASA_ORACAO_COLUMN = "casa de oracao"

ADDRESS_MARKERS = ("RUA", "AVENIDA", "ESTRADA", "ALAMEDA", "PRAÇA", "TRAVESSA")
STATUS_MARKERS = ("ativo", "inativo", "pendente", "ativa", "inativa")
_HAS_DIGIT = re.compile(r"\d")


def _field_for_header(header: str) -> str | None:
    """Map a header to a property field name."""
    name = fold(header)
    if "codigo" in name or "administra" in name or name == "cod":
        return "codigo"
    if "nome" in name or "titulo" in name or "denominacao" in name or "casa" in name:
        return "nome"
    if "tipo" in name and "imov" in name:
        return "tipo_imovel"
    if "endereco" in name or "local" in name or "rua" in name:
        return "endereco"
    if "status" in name or "situacao" in name or "estado" in name:
        return "status"
    if "observa" in name or "obs" in name or "comentar" in name or "notas" in name:
        return "observacoes"
    return None


def map_columns(headers: list[str]) -> dict[str, int]:
    """Map property fields to column indexes; the first matching header wins."""
    mapping: dict[str, int] = {}
    for index, header in enumerate(headers):
        field = _field_for_header(header)
        if field is not None:
            mapping.setdefault(field, index)
    return mapping


def split_casa_oracao(value: str) -> tuple[str, str]:
    """Split ``"BR 21-0001 - JARDIM"`` into code and name.

    Without a separator the whole text is the name and the code is empty.
    """
    if " - " not in value:
        return "", value.strip()
    codigo, _, nome = value.partition(" - ")
    return codigo.strip(), nome.strip()


def _looks_like_address(value: str) -> bool:
    return any(marker in value for marker in ADDRESS_MARKERS) or (
        bool(_HAS_DIGIT.search(value)) and "," in value
    )


def _looks_like_status(value: str) -> bool:
    lowered = value.lower()
    return any(marker in lowered for marker in STATUS_MARKERS)


def parse_casas_rows(rows: list[Row]) -> list[CasaOracao]:
    """Parse the property registry sheet.

    Blank rows are dropped and the first remaining row is the header.
    Columns are identified by flexible header matching; a "Casa de Oração"
    column holding "CODE - NAME" provides both code and name. Rows missing
    a code or a name are skipped.

    Raises
    ------
    SpreadsheetImportError
        If there is no data, no identifiable code/name column or no valid
        property.
    """
    non_empty = [row for row in rows if row and not is_blank_row(row)]
    if not non_empty:
        raise SpreadsheetImportError("No data found after removing empty rows")

    header, data_rows = non_empty[0], non_empty[1:]
    names = [cell_text(cell) or f"Column_{i}" for i, cell in enumerate(header)]

    keep = [
        i
        for i, name in enumerate(names)
        if not name.startswith("Column_")
        or any(i < len(row) and not is_blank(row[i]) for row in data_rows)
    ]
    headers = [names[i] for i in keep]
    table = [[row[i] if i < len(row) else None for i in keep] for row in data_rows]
    table = [row for row in table if not is_blank_row(tuple(row))]

    mapping = map_columns(headers)
    split_index = next((i for i, h in enumerate(headers) if fold(h) == CASA_ORACAO_COLUMN), None)

    if "codigo" not in mapping and "nome" not in mapping and split_index is None:
        if len(headers) >= 1:
            mapping["codigo"] = 0
            logger.info("Using first column %r as codigo", headers[0])
        if len(headers) >= 2:
            mapping["nome"] = 1
            logger.info("Using second column %r as nome", headers[1])

    if "codigo" not in mapping and "nome" not in mapping and split_index is None:
        raise SpreadsheetImportError(
            f"Could not identify codigo or nome columns. Available columns: {', '.join(headers)}"
        )

    casas: list[CasaOracao] = []
    for number, row in enumerate(table, start=1):
        values = {field: cell_text(row[index]) for field, index in mapping.items()}

        if split_index is not None and not is_blank(row[split_index]):
            values["codigo"], values["nome"] = split_casa_oracao(cell_text(row[split_index]))

        if not values.get("endereco") or not values.get("status"):
            for cell in row:
                text = cell_text(cell)
                if not text:
                    continue
                if not values.get("endereco") and _looks_like_address(text):
                    values["endereco"] = text
                if not values.get("status") and _looks_like_status(text):
                    values["status"] = text

        codigo, nome = values.get("codigo", ""), values.get("nome", "")
        if not codigo or not nome:
            logger.debug("Row %d ignored: empty code or name (%r, %r)", number, codigo, nome)
            continue

        casas.append(
            CasaOracao(
                codigo=codigo,
                nome=nome,
                tipo_imovel=values.get("tipo_imovel") or None,
                endereco=values.get("endereco") or None,
                observacoes=values.get("observacoes") or None,
                status=values.get("status") or None,
            )
        )

    if not casas:
        raise SpreadsheetImportError("No valid houses of prayer found in file")

    logger.info("Parsed %d houses of prayer", len(casas))
    return casas


def import_casas(path: str | Path, store=None, header_row: int = 15) -> list[CasaOracao]:
    """Read, parse and (when a store is given) save the property registry."""
    casas = parse_casas_rows(read_sheet_rows(path, header_row))
    if store is not None:
        store.save_casas(casas)
    return casas
