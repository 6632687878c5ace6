"""Property registry generator."""

from __future__ import annotations

from typing import Iterator

from gestao_docs.generators.base import BaseGenerator
from gestao_docs.models import CasaOracao


class CasaGenerator(BaseGenerator):
    """Generate synthetic prayer houses."""

    TIPOS_IMOVEL = [
        "IP - Imóvel Próprio",
        "AL - Imóvel Alugado",
        "CD - Imóvel Cedido",
        "ND - Não Definido",
    ]
    TIPO_WEIGHTS = [0.65, 0.20, 0.10, 0.05]

    def __init__(self, seed: int | None = None, prefix: str = "BR 21") -> None:
        super().__init__(seed)
        self.prefix = prefix
        self._sequence = 0

    def generate(self) -> CasaOracao:
        """Generate a single prayer house.

        Returns
        -------
        CasaOracao
            Generated property with a sequential code.
        """
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[CasaOracao]:
        """Generate multiple prayer houses.

        Parameters
        ----------
        count : int
            Number of properties to generate.

        Yields
        ------
        CasaOracao
            Generated properties.
        """
        for _ in range(count):
            yield self._generate_one()

    def _generate_one(self) -> CasaOracao:
        self._sequence += 1
        tipo = self.random.choices(self.TIPOS_IMOVEL, weights=self.TIPO_WEIGHTS, k=1)[0]
        return CasaOracao(
            codigo=f"{self.prefix}-{self._sequence:04d}",
            nome=self.fake.bairro().upper(),
            tipo_imovel=tipo,
            endereco=f"{self.fake.street_address()}, {self.fake.city()}",
            status="Ativo",
        )
