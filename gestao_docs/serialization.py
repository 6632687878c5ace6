"""Shared serialization utilities for stores and backups."""

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from gestao_docs.models import (
    CasaOracao,
    DocumentoDetalhado,
    DocumentoFaltante,
    GestaoRow,
    GestaoVistaData,
)


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if isinstance(obj, GestaoRow):
        return gestao_row_to_dict(obj)
    elif is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def gestao_row_to_dict(row: GestaoRow) -> dict[str, str]:
    """Flatten a matrix row into the stored ``{"codigo": ..., <doc>: marker}`` shape."""
    record = {"codigo": row.codigo}
    for key, value in row.valores.items():
        if key != "codigo":
            record[key] = value
    return record


def gestao_row_from_dict(record: dict[str, Any]) -> GestaoRow:
    """Read a stored matrix row. Keys are kept as stored."""
    valores = {
        key: "" if value is None else str(value)
        for key, value in record.items()
        if key != "codigo"
    }
    return GestaoRow(codigo=str(record.get("codigo", "")), valores=valores)


def casa_from_dict(record: dict[str, Any]) -> CasaOracao:
    """Read a stored property record."""
    return CasaOracao(
        codigo=str(record["codigo"]),
        nome=str(record.get("nome") or ""),
        tipo_imovel=record.get("tipo_imovel") or None,
        endereco=record.get("endereco") or None,
        observacoes=record.get("observacoes") or None,
        status=record.get("status") or None,
    )


def parse_bool(value: Any) -> bool:
    """Read booleans stored as JSON booleans or as ``"true"``/``"false"`` text."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def override_from_dict(record: dict[str, Any]) -> DocumentoFaltante:
    """Read a stored override; camelCase keys from older exports are accepted."""
    return DocumentoFaltante(
        codigo=str(record["codigo"]),
        documento=str(record["documento"]),
        observacao=record.get("observacao") or None,
        desconsiderar=parse_bool(record.get("desconsiderar")),
        data_observacao=record.get("data_observacao") or record.get("dataObservacao"),
        responsavel=record.get("responsavel") or None,
    )


def _parse_date(value: Any) -> date | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Older exports store full timestamps ("2024-05-01T03:00:00.000Z")
    return date.fromisoformat(str(value)[:10])


def vista_from_dict(record: dict[str, Any]) -> GestaoVistaData:
    """Read a stored gestão à vista record, parsing ISO dates."""
    documentos = [
        DocumentoDetalhado(
            codigo=str(doc.get("codigo", record["codigo"])),
            codigo_documento=str(doc.get("codigo_documento") or doc.get("codigoDocumento") or ""),
            nome_documento=str(doc.get("nome_documento") or doc.get("nomeDocumento") or ""),
            data_emissao=_parse_date(doc.get("data_emissao") or doc.get("dataEmissao")),
            data_validade=_parse_date(doc.get("data_validade") or doc.get("dataValidade")),
            presente=parse_bool(doc.get("presente", True)),
        )
        for doc in record.get("documentos", [])
    ]
    return GestaoVistaData(codigo=str(record["codigo"]), documentos=documentos)
