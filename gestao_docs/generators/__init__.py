"""Sample data generators."""

from gestao_docs.generators.base import BaseGenerator
from gestao_docs.generators.casa import CasaGenerator
from gestao_docs.generators.gestao import DEFAULT_COLUMNS, GestaoSheetGenerator

__all__ = ["BaseGenerator", "CasaGenerator", "DEFAULT_COLUMNS", "GestaoSheetGenerator"]
