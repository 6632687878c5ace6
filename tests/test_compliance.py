"""Tests for compliance statistics."""

from datetime import datetime

import pytest

from gestao_docs.analysis import (
    analyze,
    casa_document_status,
    chart_data,
    commit_overrides,
    compliance_table,
    compute_analyses,
    propose_overrides,
    resolve_missing,
    sort_analyses,
)
from gestao_docs.models import CasaOracao, DocumentoFaltante, GestaoRow
from gestao_docs.store import GestaoDataStore

ESCRITURA = "Escritura de Compra e Venda"


def by_name(analyses):
    return {a.nome_documento: a for a in analyses}


class TestResolveMissing:
    """Tests for resolve_missing."""

    def test_override_wins_over_rule(self, casa_alugada: CasaOracao) -> None:
        """Test a stored override is used even when a rule would waive."""
        override = DocumentoFaltante(
            codigo=casa_alugada.codigo, documento=ESCRITURA, observacao="Em andamento", desconsiderar=False
        )

        resolution = resolve_missing(ESCRITURA, casa_alugada, override)

        assert resolution.desconsiderar is False
        assert resolution.observacao == "Em andamento"
        assert resolution.rule is None

    def test_rule_disregards(self, casa_alugada: CasaOracao) -> None:
        """Test an applicable rule produces an automatic disregard."""
        resolution = resolve_missing(ESCRITURA, casa_alugada, None)

        assert resolution.desconsiderar is True
        assert resolution.rule.name == "somente_proprio"

    def test_plain_missing(self, casa_propria: CasaOracao) -> None:
        """Test a missing document with no rule and no override."""
        resolution = resolve_missing(ESCRITURA, casa_propria, None)

        assert resolution.desconsiderar is False
        assert resolution.observacao is None


class TestComputeAnalyses:
    """Tests for compute_analyses."""

    def test_empty_matrix(self, casas: list[CasaOracao]) -> None:
        """Test an empty matrix yields no analyses."""
        assert compute_analyses([], casas) == []

    def test_owned_and_rented_deed(self) -> None:
        """Test 50% original and 100% real when the rented property lacks the deed."""
        rows = [
            GestaoRow(codigo="A", valores={ESCRITURA: "X"}),
            GestaoRow(codigo="B", valores={ESCRITURA: ""}),
        ]
        casas = [
            CasaOracao(codigo="A", nome="CASA A", tipo_imovel="IP - Imóvel Próprio"),
            CasaOracao(codigo="B", nome="CASA B", tipo_imovel="AL - Imóvel Alugado"),
        ]

        [analise] = compute_analyses(rows, casas)

        assert analise.percentual_original == 50.0
        assert analise.percentual_real == 100.0
        assert analise.casas_desconsideradas == 1
        assert analise.casas_realmente_sem_documento == 0
        [faltante] = analise.casas_faltantes
        assert faltante.codigo == "B"
        assert faltante.desconsiderar is True
        assert faltante.observacao == "Não é imóvel próprio, logo não precisa"

    def test_statistics(self, rows: list[GestaoRow], casas: list[CasaOracao]) -> None:
        """Test counts and percentages for every document."""
        analyses = by_name(compute_analyses(rows, casas))

        escritura = analyses[ESCRITURA]
        assert escritura.total_casas == 3
        assert escritura.casas_com_documento == 1
        assert escritura.casas_sem_documento == 2
        assert escritura.casas_desconsideradas == 2
        assert escritura.percentual_real == 100.0
        assert escritura.is_obrigatorio is False

        bombeiros = analyses["Bombeiros"]
        assert bombeiros.is_obrigatorio is True
        assert bombeiros.casas_desconsideradas == 0
        assert bombeiros.percentual_original == pytest.approx(100 / 3)
        assert bombeiros.percentual_real == bombeiros.percentual_original

    def test_real_never_below_original(self, rows: list[GestaoRow], casas: list[CasaOracao]) -> None:
        """Test disregards can only raise the percentage."""
        for analise in compute_analyses(rows, casas):
            assert analise.percentual_real >= analise.percentual_original
            assert analise.casas_com_documento + analise.casas_sem_documento == analise.total_casas

    def test_denominator_is_matrix_rows(self, rows: list[GestaoRow], casas: list[CasaOracao]) -> None:
        """Test registered properties without a management record do not count."""
        extra = CasaOracao(codigo="BR 21-0099", nome="SEM GESTÃO", tipo_imovel="IP - Imóvel Próprio")

        analyses = compute_analyses(rows, [*casas, extra])

        assert all(a.total_casas == 3 for a in analyses)

    def test_unregistered_property_uses_code(self) -> None:
        """Test a matrix row without a registry entry is listed by code."""
        rows = [GestaoRow(codigo="X-1", valores={ESCRITURA: ""})]

        [analise] = compute_analyses(rows, [])

        assert analise.casas_faltantes[0].nome == "X-1"
        assert analise.casas_faltantes[0].desconsiderar is False

    def test_stored_override_respected(self, rows: list[GestaoRow], casas: list[CasaOracao]) -> None:
        """Test an override that keeps the document missing beats the rule."""
        overrides = [
            DocumentoFaltante(codigo="BR 21-0002", documento=ESCRITURA, observacao="Em andamento")
        ]

        escritura = by_name(compute_analyses(rows, casas, overrides))[ESCRITURA]

        assert escritura.casas_desconsideradas == 1
        assert escritura.percentual_real == pytest.approx(200 / 3)

    def test_manual_disregard(self, rows: list[GestaoRow], casas: list[CasaOracao]) -> None:
        """Test a manual disregard on a document no rule covers."""
        overrides = [
            DocumentoFaltante(codigo="BR 21-0001", documento="Bombeiros", desconsiderar=True)
        ]

        bombeiros = by_name(compute_analyses(rows, casas, overrides))["Bombeiros"]

        assert bombeiros.casas_desconsideradas == 1


class TestProposeAndCommit:
    """Tests for the propose/commit phases."""

    def test_proposals(self, rows: list[GestaoRow], casas: list[CasaOracao], now: datetime) -> None:
        """Test one proposal per waived missing document."""
        proposals = propose_overrides(rows, casas, now=now)

        keys = {p.key for p in proposals}
        assert keys == {
            ("BR 21-0002", ESCRITURA),
            ("BR 21-0003", ESCRITURA),
            ("BR 21-0002", "Habite-se"),
            ("BR 21-0001", "Contrato de Aluguel"),
            ("BR 21-0003", "Contrato de Aluguel"),
        }
        assert all(p.desconsiderar for p in proposals)
        assert all(p.data_observacao == now.isoformat() for p in proposals)

    def test_existing_overrides_not_proposed(self, rows: list[GestaoRow], casas: list[CasaOracao]) -> None:
        """Test keys with a stored override are skipped."""
        overrides = [DocumentoFaltante(codigo="BR 21-0002", documento=ESCRITURA)]

        proposals = propose_overrides(rows, casas, overrides)

        assert ("BR 21-0002", ESCRITURA) not in {p.key for p in proposals}
        assert len(proposals) == 4

    def test_commit_is_write_once(
        self, store: GestaoDataStore, rows: list[GestaoRow], casas: list[CasaOracao]
    ) -> None:
        """Test committing the same proposals twice writes nothing the second time."""
        proposals = propose_overrides(rows, casas)

        assert len(commit_overrides(store, proposals)) == 5
        assert commit_overrides(store, proposals) == []
        assert len(store.load_overrides()) == 5

    def test_commit_nothing(self, store: GestaoDataStore) -> None:
        """Test empty proposals are a no-op."""
        assert commit_overrides(store, []) == []


class TestAnalyze:
    """Tests for the persisting analyze call."""

    def test_persists_automatic_disregards(
        self, store: GestaoDataStore, rows: list[GestaoRow], casas: list[CasaOracao]
    ) -> None:
        """Test automatic disregards are stored once across runs."""
        first = analyze(rows, casas, store)
        stored = store.load_overrides()
        second = analyze(rows, casas, store)

        assert len(stored) == 5
        assert store.load_overrides() == stored
        assert [a.percentual_real for a in first] == [a.percentual_real for a in second]

    def test_edited_override_survives(
        self, store: GestaoDataStore, rows: list[GestaoRow], casas: list[CasaOracao], now: datetime
    ) -> None:
        """Test a user-edited override is never overwritten by a rule."""
        analyze(rows, casas, store)
        store.update_override("BR 21-0002", ESCRITURA, "Escritura em andamento", False, now=now)

        escritura = by_name(analyze(rows, casas, store))[ESCRITURA]

        override = store.get_override("BR 21-0002", ESCRITURA)
        assert override.desconsiderar is False
        assert override.observacao == "Escritura em andamento"
        assert escritura.casas_desconsideradas == 1
        assert len(store.load_overrides()) == 5


class TestOrderingAndCharts:
    """Tests for sort_analyses and chart_data."""

    def test_sort_analyses(self, rows: list[GestaoRow], casas: list[CasaOracao]) -> None:
        """Test mandatory first, then by missing count descending."""
        ordered = sort_analyses(compute_analyses(rows, casas))

        assert [a.nome_documento for a in ordered] == [
            "Bombeiros",
            "Habite-se",
            ESCRITURA,
            "Contrato de Aluguel",
        ]

    def test_chart_data(self, rows: list[GestaoRow], casas: list[CasaOracao]) -> None:
        """Test chart values count disregarded documents as present."""
        entries = chart_data(compute_analyses(rows, casas))

        assert [e.name for e in entries] == ["Habite-se", "Bombeiros", ESCRITURA, "Contrato de Aluguel"]
        habite = entries[0]
        assert habite.value == 3
        assert habite.original_value == 2
        assert habite.exemptions == 1
        assert habite.percentage == 100.0

    def test_chart_drops_empty_documents(self) -> None:
        """Test documents nobody holds or is exempt from are dropped."""
        rows = [GestaoRow(codigo="A", valores={"Bombeiros": ""})]

        assert chart_data(compute_analyses(rows, [])) == []


class TestPerPropertyStatus:
    """Tests for casa_document_status and compliance_table."""

    def test_casa_document_status(self, rows: list[GestaoRow], casa_alugada: CasaOracao) -> None:
        """Test statuses for a rented property."""
        statuses = casa_document_status(rows[1], casa_alugada)

        assert [s.nome for s in statuses] == ["Bombeiros", "Habite-se", "Contrato de Aluguel", ESCRITURA]
        habite = statuses[1]
        assert habite.presente is False
        assert habite.obrigatorio is True
        assert habite.desconsiderar is True
        assert habite.aplicavel is False
        assert habite.observacao == "Imóvel locado, documento pode ser desconsiderado"
        assert statuses[0].presente is True
        assert statuses[0].aplicavel is True

    def test_compliance_table(self, rows: list[GestaoRow], casas: list[CasaOracao]) -> None:
        """Test per-property percentages with exemptions."""
        table = {c.codigo: c for c in compliance_table(rows, casas)}

        propria = table["BR 21-0001"]
        assert [s.nome for s in propria.documentos_obrigatorios] == ["Habite-se", "Bombeiros"]
        assert propria.percentual_obrigatorios == 50.0
        assert propria.percentual_opcionais == 100.0
        assert table["BR 21-0002"].percentual_obrigatorios == 100.0

    def test_compliance_table_without_exemptions(self, rows: list[GestaoRow], casas: list[CasaOracao]) -> None:
        """Test disregards are ignored when exemptions are off."""
        table = {c.codigo: c for c in compliance_table(rows, casas, use_exemptions=False)}

        assert table["BR 21-0001"].percentual_opcionais == 50.0
        assert table["BR 21-0002"].percentual_obrigatorios == 50.0

    def test_compliance_table_skips_properties_without_record(self, rows: list[GestaoRow]) -> None:
        """Test registered properties without a management record are left out."""
        casas = [CasaOracao(codigo="OUTRA", nome="OUTRA")]

        assert compliance_table(rows, casas) == []
