"""Document name normalization and classification."""

from gestao_docs.documents.classifier import (
    DOCUMENTOS_OBRIGATORIOS,
    EXCEPTION_RULES,
    ExceptionRule,
    is_applicable,
    is_mandatory,
    matching_rule,
)
from gestao_docs.documents.normalizer import CANONICAL_NAMES, DOCUMENTOS, fold, normalize

__all__ = [
    "CANONICAL_NAMES",
    "DOCUMENTOS",
    "DOCUMENTOS_OBRIGATORIOS",
    "EXCEPTION_RULES",
    "ExceptionRule",
    "fold",
    "is_applicable",
    "is_mandatory",
    "matching_rule",
    "normalize",
]
