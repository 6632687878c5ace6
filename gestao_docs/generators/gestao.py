"""Management spreadsheet generator.

Produces raw sheet rows (header first) in the shape read by
:func:`gestao_docs.importers.parse_gestao_rows`, with the document columns
spelled the way real exports spell them.
"""

from __future__ import annotations

from typing import Iterable

from gestao_docs.generators.base import BaseGenerator
from gestao_docs.importers.spreadsheet import Row
from gestao_docs.models import CasaOracao, TipoImovel

# Raw column headers as found in exports. AVCB and CLCB both map to "Bombeiros".
DEFAULT_COLUMNS = (
    "ESCRITURA DEFINITIVA - COMPRA E VENDA/PERMUTA",
    "HABITE-SE",
    "PROJETO APROVADO PELA PREFEITURA",
    "ALVARÁ DE FUNCIONAMENTO",
    "AVCB - AUTO DE VISTORIA DO CORPO DE BOMBEIROS",
    "CLCB - CERTIFICADO DE LICENÇA CORPO DE BOMBEIROS",
    "AVERBAÇÃO DA CONSTRUÇÃO NA MATRICULA",
    "CONTRATO DE ALUGUEL",
)


class GestaoSheetGenerator(BaseGenerator):
    """Generate a document presence sheet for a set of properties.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    columns : Iterable[str] | None
        Raw document headers (default :data:`DEFAULT_COLUMNS`).
    presence_rate : float
        Probability that a property holds a given document.
    """

    CODIGO_HEADER = "Código"

    def __init__(
        self,
        seed: int | None = None,
        columns: Iterable[str] | None = None,
        presence_rate: float = 0.7,
    ) -> None:
        super().__init__(seed)
        self.columns = list(columns) if columns is not None else list(DEFAULT_COLUMNS)
        self.presence_rate = presence_rate

    def header(self) -> Row:
        return (self.CODIGO_HEADER, *self.columns)

    def generate(self, casa: CasaOracao) -> Row:
        """Generate the sheet row of one property."""
        cells = []
        for column in self.columns:
            rate = self.presence_rate
            # Only rented properties hold a lease; other non-owned ones rarely hold a deed
            if "ALUGUEL" in column.upper() and casa.tipo is not TipoImovel.ALUGADO:
                rate = 0.0
            elif "ESCRITURA" in column.upper() and casa.tipo is not TipoImovel.PROPRIO:
                rate = min(rate, 0.1)
            cells.append("X" if self.random.random() < rate else None)
        return (casa.codigo, *cells)

    def generate_sheet(self, casas: Iterable[CasaOracao]) -> list[Row]:
        """Header followed by one row per property."""
        return [self.header(), *(self.generate(casa) for casa in casas)]
