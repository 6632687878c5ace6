"""Dated document models from the "gestão à vista" export."""

from dataclasses import dataclass, field
from datetime import date


@dataclass
class DocumentoDetalhado:
    """A single document instance with its emission and validity dates."""

    codigo: str  # Property code
    codigo_documento: str  # e.g. "1.1", "1_HABITE", "7_CUSTOM"
    nome_documento: str
    data_emissao: date | None = None
    data_validade: date | None = None
    presente: bool = True


@dataclass
class GestaoVistaData:
    """All dated documents recorded for a property."""

    codigo: str
    documentos: list[DocumentoDetalhado] = field(default_factory=list)
