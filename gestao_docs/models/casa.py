"""Property registry model."""

from dataclasses import dataclass

from gestao_docs.models.enums import TipoImovel


@dataclass
class CasaOracao:
    """Prayer house (casa de oração) identified by a stable code."""

    codigo: str
    nome: str
    tipo_imovel: str | None = None  # Free text, e.g. "IP - Imóvel Próprio"
    endereco: str | None = None
    observacoes: str | None = None
    status: str | None = None

    @property
    def tipo(self) -> TipoImovel | None:
        """Parsed property tenure, or None when unknown."""
        return TipoImovel.from_text(self.tipo_imovel)
