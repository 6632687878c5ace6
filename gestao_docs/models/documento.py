"""Override and compliance analysis models."""

from dataclasses import dataclass, field


@dataclass
class DocumentoFaltante:
    """Observation or disregard flag for a missing document of a property.

    Keyed by ``(codigo, documento)``, where ``documento`` is the canonical
    document name.
    """

    codigo: str
    documento: str
    observacao: str | None = None
    desconsiderar: bool = False  # Count as present for compliance purposes
    data_observacao: str | None = None  # ISO-8601 timestamp
    responsavel: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.codigo, self.documento)


@dataclass
class CasaFaltante:
    """A property lacking a given document, with its override state."""

    codigo: str
    nome: str
    observacao: str | None = None
    desconsiderar: bool = False


@dataclass
class AnaliseDocumento:
    """Compliance statistics for one canonical document name."""

    nome_documento: str
    is_obrigatorio: bool
    total_casas: int
    casas_com_documento: int
    casas_sem_documento: int
    casas_desconsideradas: int
    percentual_original: float  # Present only
    percentual_real: float  # Present plus disregarded
    casas_faltantes: list[CasaFaltante] = field(default_factory=list)

    @property
    def casas_realmente_sem_documento(self) -> int:
        """Missing properties that are not disregarded."""
        return self.casas_sem_documento - self.casas_desconsideradas


@dataclass
class ChartEntry:
    """Chart-ready count for one document."""

    name: str
    value: int  # original_value + exemptions
    original_value: int
    exemptions: int
    is_obrigatorio: bool = False
    percentage: float = 0.0


@dataclass
class DocumentoStatus:
    """State of one document for a single property."""

    nome: str
    presente: bool
    obrigatorio: bool
    desconsiderar: bool = False
    observacao: str | None = None
    aplicavel: bool = True  # False when an exception rule waives it


@dataclass
class CasaCompliance:
    """Per-property compliance split into mandatory and optional documents."""

    codigo: str
    nome: str
    documentos_obrigatorios: list[DocumentoStatus] = field(default_factory=list)
    documentos_opcionais: list[DocumentoStatus] = field(default_factory=list)
    percentual_obrigatorios: float = 0.0
    percentual_opcionais: float = 0.0
