"""Mandatory-document classification and property-type exception rules.

:func:`is_mandatory` answers whether a document type is ever required.
Whether it is required for a *specific* property depends on the property
tenure; :data:`EXCEPTION_RULES` encodes those waivers and is consulted by
the compliance analyzer.
"""

from dataclasses import dataclass
from typing import Callable

from gestao_docs.documents.normalizer import fold, normalize
from gestao_docs.models.casa import CasaOracao
from gestao_docs.models.enums import TipoImovel

DOCUMENTOS_OBRIGATORIOS: frozenset[str] = frozenset(
    {
        "Alvará de Funcionamento",
        "Bombeiros",
        "Projeto Aprovado",
        "Habite-se",
        # Legacy personal documents
        "certidao_nascimento",
        "rg",
        "cpf",
        "titulo_eleitor",
        "comprovante_residencia",
    }
)


def is_mandatory(nome: str) -> bool:
    """Return True when the (raw or canonical) document name is mandatory."""
    return normalize(nome) in DOCUMENTOS_OBRIGATORIOS


@dataclass(frozen=True)
class ExceptionRule:
    """Waiver of a document for properties of a given tenure.

    Attributes
    ----------
    name : str
        Stable rule identifier.
    matches : Callable[[str], bool]
        Predicate over the folded document name.
    waives : Callable[[TipoImovel | None], bool]
        Predicate over the property tenure; True when the document may be
        disregarded for that property.
    observacao : str
        Observation stored with the automatic disregard.
    """

    name: str
    matches: Callable[[str], bool]
    waives: Callable[[TipoImovel | None], bool]
    observacao: str

    def applies(self, documento: str, casa: CasaOracao | None) -> bool:
        """Return True when this rule waives ``documento`` for ``casa``."""
        if casa is None or not (casa.tipo_imovel or "").strip():
            return False
        return self.matches(fold(documento)) and self.waives(casa.tipo)


def _is_deed(folded: str) -> bool:
    return (
        "averbacao" in folded
        or "escritura" in folded
        or ("compra" in folded and "venda" in folded)
    )


def _is_build_approval(folded: str) -> bool:
    return ("projeto" in folded and "aprovado" in folded) or "habite" in folded


def _is_rental_contract(folded: str) -> bool:
    # "contratos" contains "contrato"
    return "contrato" in folded and "aluguel" in folded


# Evaluated in order; the first rule that applies wins.
EXCEPTION_RULES: tuple[ExceptionRule, ...] = (
    ExceptionRule(
        name="somente_proprio",
        matches=_is_deed,
        waives=lambda tipo: tipo is not TipoImovel.PROPRIO,
        observacao="Não é imóvel próprio, logo não precisa",
    ),
    ExceptionRule(
        name="locado_dispensavel",
        matches=_is_build_approval,
        waives=lambda tipo: tipo is TipoImovel.ALUGADO,
        observacao="Imóvel locado, documento pode ser desconsiderado",
    ),
    ExceptionRule(
        name="somente_locado",
        matches=_is_rental_contract,
        waives=lambda tipo: tipo is not TipoImovel.ALUGADO,
        observacao="Contrato de aluguel é obrigatório apenas para imóveis alugados",
    ),
)


def matching_rule(
    documento: str,
    casa: CasaOracao | None,
    rules: tuple[ExceptionRule, ...] = EXCEPTION_RULES,
) -> ExceptionRule | None:
    """Return the first exception rule that waives ``documento`` for ``casa``."""
    for rule in rules:
        if rule.applies(documento, casa):
            return rule
    return None


def is_applicable(documento: str, casa: CasaOracao | None) -> bool:
    """Return False when an exception rule waives the document for the property."""
    return matching_rule(documento, casa) is None
