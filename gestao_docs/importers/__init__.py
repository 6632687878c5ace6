"""Spreadsheet importers for the registry, the management matrix and dated documents."""

from gestao_docs.importers.casas import import_casas, parse_casas_rows
from gestao_docs.importers.gestao import import_gestao, parse_gestao_rows
from gestao_docs.importers.gestao_vista import import_gestao_vista, parse_gestao_vista_rows
from gestao_docs.importers.spreadsheet import read_sheet_rows

__all__ = [
    "import_casas",
    "import_gestao",
    "import_gestao_vista",
    "parse_casas_rows",
    "parse_gestao_rows",
    "parse_gestao_vista_rows",
    "read_sheet_rows",
]
