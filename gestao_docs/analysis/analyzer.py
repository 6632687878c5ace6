"""Store-backed compliance analyzer."""

from datetime import datetime

from gestao_docs.analysis.compliance import (
    analyze,
    casa_document_status,
    chart_data,
    compliance_table,
    sort_analyses,
)
from gestao_docs.exceptions import EntityNotFoundError
from gestao_docs.models import AnaliseDocumento, CasaCompliance, ChartEntry, DocumentoStatus
from gestao_docs.store.gestao import GestaoDataStore


class ComplianceAnalyzer:
    """Run compliance analyses against a :class:`GestaoDataStore`.

    Nothing is cached: each call reloads the store, so results always
    reflect the latest imports and override edits.
    """

    def __init__(self, store: GestaoDataStore) -> None:
        self.store = store

    def analyze(self, sort: bool = False, now: datetime | None = None) -> list[AnaliseDocumento]:
        """Analyze every document, persisting automatic disregards."""
        analyses = analyze(self.store.load_gestao(), self.store.load_casas(), self.store, now=now)
        return sort_analyses(analyses) if sort else analyses

    def chart_data(self) -> list[ChartEntry]:
        """Chart entries with disregarded documents counted as present."""
        return chart_data(self.analyze())

    def compliance_table(self, use_exemptions: bool = True) -> list[CasaCompliance]:
        """Per-property compliance table."""
        self.analyze()
        return compliance_table(
            self.store.load_gestao(),
            self.store.load_casas(),
            self.store.load_overrides(),
            use_exemptions=use_exemptions,
        )

    def casa_status(self, codigo: str) -> list[DocumentoStatus]:
        """Document status list for one property.

        Raises
        ------
        EntityNotFoundError
            If the property has no management record.
        """
        row = next((r for r in self.store.load_gestao() if r.codigo == codigo), None)
        if row is None:
            raise EntityNotFoundError(f"No management record for casa {codigo}")
        return casa_document_status(row, self.store.get_casa(codigo), self.store.load_overrides())
