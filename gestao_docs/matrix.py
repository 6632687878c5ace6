"""Document presence matrix construction.

A management spreadsheet has one row per property and one column per
document. Several raw columns can normalize to the same canonical document;
their markers are merged so that any "X" wins.
"""

from typing import Any, Iterable, Mapping

from gestao_docs.documents.normalizer import normalize
from gestao_docs.models.casa import CasaOracao
from gestao_docs.models.enums import Presence
from gestao_docs.models.gestao import GestaoRow

CODIGO = "codigo"


def cell_text(value: Any) -> str:
    """Convert a raw cell value to trimmed text ("" for empty cells)."""
    if value is None:
        return ""
    return str(value).strip()


def merge_marker(existing: str, new: str) -> str:
    """Merge two markers for the same canonical document.

    The result is ``"X"`` if either value is ``"X"``; otherwise the first
    non-empty value is kept.
    """
    if (
        Presence.from_marker(existing) is Presence.PRESENT
        or Presence.from_marker(new) is Presence.PRESENT
    ):
        return "X"
    if not existing and new:
        return new
    return existing


def build_row(codigo: str, raw_values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> GestaoRow:
    """Build a matrix row from raw column names and cell values.

    Parameters
    ----------
    codigo : str
        Property code.
    raw_values : Mapping[str, Any] | Iterable[tuple[str, Any]]
        Raw column name -> cell value. Pairs are accepted so that duplicate
        raw headers survive until they are merged.

    Returns
    -------
    GestaoRow
        Row keyed by canonical document name.
    """
    items = raw_values.items() if isinstance(raw_values, Mapping) else raw_values
    valores: dict[str, str] = {}
    for raw_name, value in items:
        if raw_name == CODIGO:
            continue
        key = normalize(raw_name)
        text = cell_text(value)
        if key in valores:
            valores[key] = merge_marker(valores[key], text)
        else:
            valores[key] = text
    return GestaoRow(codigo=cell_text(codigo), valores=valores)


def document_keys(rows: Iterable[GestaoRow]) -> list[str]:
    """Return every document key across rows, in first-seen order."""
    keys: dict[str, None] = {}
    for row in rows:
        for key in row.valores:
            if key != CODIGO:
                keys.setdefault(key, None)
    return list(keys)


def unregistered_codes(rows: Iterable[GestaoRow], casas: Iterable[CasaOracao]) -> list[str]:
    """Return codes with management data but no registered property."""
    registered = {casa.codigo for casa in casas}
    missing: dict[str, None] = {}
    for row in rows:
        if row.codigo not in registered:
            missing.setdefault(row.codigo, None)
    return list(missing)
