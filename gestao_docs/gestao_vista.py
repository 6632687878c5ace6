"""Dated document records ("gestão à vista") and their matrix projection.

The gestão à vista export lists one line per document instance with
emission and validity dates. A property counts as having a document type
when it holds at least one instance that is still valid.
"""

from datetime import date, datetime
from typing import Any

from openpyxl.utils.datetime import from_excel

from gestao_docs.documents.normalizer import normalize
from gestao_docs.logging import get_logger
from gestao_docs.models import DocumentoDetalhado, GestaoRow, GestaoVistaData

logger = get_logger(__name__)

# Reference document codes used by the export
DOCUMENTOS_GESTAO_VISTA: tuple[tuple[str, str], ...] = (
    ("1.1", "ESCRITURA DEFINITIVA - COMPRA E VENDA / PERMUTA"),
    ("1_HABITE", "HABITE-SE"),
    ("3_ALVARA", "ALVARÁ/LICENÇA DE FUNCIONAMENTO"),
    ("5", "CLCB - CERTIFICADO DE LICENÇA CORPO DE BOMBEIROS"),
    ("4", "AVCB - AUTO DE VISTORIA DO CORPO DE BOMBEIROS"),
    ("1_PROJETO", "PROJETO APROVADO PELA PREFEITURA"),
    ("2_CERTIFICADO", "CERTIFICADO DE REGULARIZAÇÃO"),
    ("2_AVERBACAO", "AVERBAÇÃO DA CONSTRUÇÃO NA MATRICULA"),
    ("4.1", "SENTENÇA DE USUCAPIÃO"),
    ("2.3", "INSTRUMENTO PARTICULAR - CESSÃO DE DIREITOS HEREDITÁRIOS"),
    ("5.1", "CONTRATO DE ALUGUEL"),
    ("3_SCPO", "SCPO - SISTEMA DE COMUNICAÇÃO PRÉVIA DE OBRAS (MINISTÉRIO DO TRABALHO)"),
    ("2.2", "INSTRUMENTO PARTICULAR - CESSÃO DE POSSE"),
)

MIN_YEAR = 1900
MAX_YEAR = 2100


def find_documento_by_codigo(codigo: str, descricao: str) -> str:
    """Resolve the reference code of a document.

    Exact code match first, then case-insensitive description containment
    in either direction, else ``"<codigo>_CUSTOM"``.
    """
    for ref_codigo, _ in DOCUMENTOS_GESTAO_VISTA:
        if ref_codigo == codigo:
            return ref_codigo

    needle = descricao.lower()
    if needle:
        for ref_codigo, nome in DOCUMENTOS_GESTAO_VISTA:
            ref = nome.lower()
            if needle in ref or ref in needle:
                return ref_codigo

    return f"{codigo}_CUSTOM"


def _in_range(value: date) -> bool:
    return MIN_YEAR < value.year < MAX_YEAR


def parse_excel_date(value: Any) -> date | None:
    """Parse a spreadsheet date cell.

    Accepts ``datetime``/``date`` objects, Excel serial numbers, ISO
    strings and ``dd/mm/yyyy`` strings. Dates outside 1900-2100 and
    unparseable values yield None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date() if _in_range(value) else None
    if isinstance(value, date):
        return value if _in_range(value) else None

    text = str(value).strip()
    if not text or text == "undefined":
        return None

    try:
        serial = float(text)
    except ValueError:
        serial = None
    if serial is not None and serial > 0:
        try:
            parsed = from_excel(serial)
        except (ValueError, OverflowError):
            parsed = None
        if isinstance(parsed, datetime) and _in_range(parsed):
            return parsed.date()

    try:
        parsed_iso = date.fromisoformat(text[:10])
    except ValueError:
        parsed_iso = None
    if parsed_iso is not None and _in_range(parsed_iso):
        return parsed_iso

    parts = text.split("/")
    if len(parts) == 3:
        try:
            parsed_br = date(int(parts[2]), int(parts[1]), int(parts[0]))
        except ValueError:
            parsed_br = None
        if parsed_br is not None:
            return parsed_br

    logger.warning("Could not parse date: %r", text)
    return None


def is_document_valid(doc: DocumentoDetalhado, today: date | None = None) -> bool:
    """A document without validity date, or valid until today or later, is valid."""
    if doc.data_validade is None:
        return True
    return doc.data_validade >= (today or date.today())


def most_current_valid_document(
    docs: list[DocumentoDetalhado],
    today: date | None = None,
) -> DocumentoDetalhado | None:
    """Pick the most current valid document of a type.

    Valid documents are ordered by latest validity date (documents with a
    validity date before those without), then by latest emission date.
    Returns None when no document is valid.
    """
    valid = [doc for doc in docs if is_document_valid(doc, today)]
    if not valid:
        return None

    def sort_key(doc: DocumentoDetalhado) -> tuple:
        validade = doc.data_validade.toordinal() if doc.data_validade else 0
        emissao = doc.data_emissao.toordinal() if doc.data_emissao else 0
        return (doc.data_validade is not None, validade, doc.data_emissao is not None, emissao)

    return max(valid, key=sort_key)


def generate_gestao_from_vista(
    vista: list[GestaoVistaData],
    today: date | None = None,
) -> list[GestaoRow]:
    """Project dated records onto the presence matrix.

    Every property gets one key per normalized document type seen in the
    whole dataset: ``"X"`` when it holds a current valid instance, ``""``
    otherwise.
    """
    all_documents: dict[str, None] = {}
    for casa in vista:
        for doc in casa.documentos:
            all_documents.setdefault(normalize(doc.nome_documento), None)

    rows = []
    for casa in vista:
        by_type: dict[str, list[DocumentoDetalhado]] = {}
        for doc in casa.documentos:
            if doc.presente:
                by_type.setdefault(normalize(doc.nome_documento), []).append(doc)

        present = {
            doc_type
            for doc_type, docs in by_type.items()
            if most_current_valid_document(docs, today) is not None
        }
        valores = {doc_type: ("X" if doc_type in present else "") for doc_type in all_documents}
        rows.append(GestaoRow(codigo=casa.codigo, valores=valores))

    return rows


def _instance_key(doc: DocumentoDetalhado) -> tuple:
    return (normalize(doc.nome_documento), doc.data_emissao, doc.data_validade)


def merge_vista_data(
    existing: list[GestaoVistaData],
    incoming: list[GestaoVistaData],
) -> list[GestaoVistaData]:
    """Merge two imports, keeping every distinct document instance.

    Instances with the same normalized type and the same dates are
    duplicates; the first one seen is kept.
    """
    merged: dict[str, GestaoVistaData] = {}
    for casa in [*existing, *incoming]:
        target = merged.get(casa.codigo)
        if target is None:
            target = GestaoVistaData(codigo=casa.codigo, documentos=[])
            merged[casa.codigo] = target
        seen = {_instance_key(doc) for doc in target.documentos}
        for doc in casa.documentos:
            key = _instance_key(doc)
            if key not in seen:
                seen.add(key)
                target.documentos.append(doc)
    return list(merged.values())
