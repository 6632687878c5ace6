"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from gestao_docs.models import CasaOracao, GestaoRow
from gestao_docs.store import GestaoDataStore, MemoryBackend

ESCRITURA = "Escritura de Compra e Venda"


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def now() -> datetime:
    """Fixed timestamp for override stamps."""
    return datetime(2024, 5, 1, 10, 30)


@pytest.fixture
def store() -> GestaoDataStore:
    """Create a fresh in-memory store for each test."""
    return GestaoDataStore(MemoryBackend())


@pytest.fixture
def casa_propria() -> CasaOracao:
    """Owned property."""
    return CasaOracao(codigo="BR 21-0001", nome="JARDIM AMÉRICA", tipo_imovel="IP - Imóvel Próprio")


@pytest.fixture
def casa_alugada() -> CasaOracao:
    """Rented property."""
    return CasaOracao(codigo="BR 21-0002", nome="VILA NOVA", tipo_imovel="AL - Imóvel Alugado")


@pytest.fixture
def casa_cedida() -> CasaOracao:
    """Lent property."""
    return CasaOracao(codigo="BR 21-0003", nome="CENTRO", tipo_imovel="CD - Imóvel Cedido")


@pytest.fixture
def casas(casa_propria: CasaOracao, casa_alugada: CasaOracao, casa_cedida: CasaOracao) -> list[CasaOracao]:
    """One property of each common tenure."""
    return [casa_propria, casa_alugada, casa_cedida]


@pytest.fixture
def rows() -> list[GestaoRow]:
    """Management matrix matching the ``casas`` fixture."""
    return [
        GestaoRow(
            codigo="BR 21-0001",
            valores={ESCRITURA: "X", "Habite-se": "X", "Contrato de Aluguel": "", "Bombeiros": ""},
        ),
        GestaoRow(
            codigo="BR 21-0002",
            valores={ESCRITURA: "", "Habite-se": "", "Contrato de Aluguel": "X", "Bombeiros": "X"},
        ),
        GestaoRow(
            codigo="BR 21-0003",
            valores={ESCRITURA: "", "Habite-se": "X", "Contrato de Aluguel": "", "Bombeiros": ""},
        ),
    ]
