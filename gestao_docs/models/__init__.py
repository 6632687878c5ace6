"""Domain models for prayer-house document management."""

from gestao_docs.models.casa import CasaOracao
from gestao_docs.models.documento import (
    AnaliseDocumento,
    CasaCompliance,
    CasaFaltante,
    ChartEntry,
    DocumentoFaltante,
    DocumentoStatus,
)
from gestao_docs.models.enums import Presence, TipoImovel
from gestao_docs.models.gestao import GestaoRow
from gestao_docs.models.gestao_vista import DocumentoDetalhado, GestaoVistaData

__all__ = [
    "AnaliseDocumento",
    "CasaCompliance",
    "CasaFaltante",
    "CasaOracao",
    "ChartEntry",
    "DocumentoDetalhado",
    "DocumentoFaltante",
    "DocumentoStatus",
    "GestaoRow",
    "GestaoVistaData",
    "Presence",
    "TipoImovel",
]
