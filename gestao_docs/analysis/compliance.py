"""Document compliance statistics.

The analysis runs in two phases. :func:`propose_overrides` is pure: it
lists the automatic disregards implied by the property-type exception rules
for documents that have no stored override yet. :func:`commit_overrides`
writes those proposals to a store, write-once. :func:`compute_analyses`
then derives the per-document statistics from the matrix, the registry and
the overrides.

Percentages use the number of properties that have a management record
(matrix rows) as denominator, not the size of the property registry.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from gestao_docs.documents.classifier import ExceptionRule, is_mandatory, matching_rule
from gestao_docs.documents.normalizer import fold
from gestao_docs.logging import get_logger
from gestao_docs.matrix import document_keys
from gestao_docs.models import (
    AnaliseDocumento,
    CasaCompliance,
    CasaFaltante,
    CasaOracao,
    ChartEntry,
    DocumentoFaltante,
    DocumentoStatus,
    GestaoRow,
)

logger = get_logger(__name__)

OverrideIndex = dict[tuple[str, str], DocumentoFaltante]


@dataclass(frozen=True)
class Resolution:
    """Effective override state of one missing document for one property."""

    observacao: str | None
    desconsiderar: bool
    rule: ExceptionRule | None = None  # Set only for automatic disregards


def index_overrides(overrides: Iterable[DocumentoFaltante]) -> OverrideIndex:
    """Index overrides by ``(codigo, documento)``; the first record per key wins."""
    index: OverrideIndex = {}
    for override in overrides:
        index.setdefault(override.key, override)
    return index


def resolve_missing(
    documento: str,
    casa: CasaOracao | None,
    override: DocumentoFaltante | None,
) -> Resolution:
    """Decide whether a missing document is disregarded.

    A stored override always wins. Without one, the first exception rule
    that waives the document for the property produces an automatic
    disregard. Otherwise the document is simply missing.
    """
    if override is not None:
        return Resolution(observacao=override.observacao, desconsiderar=override.desconsiderar)

    rule = matching_rule(documento, casa)
    if rule is not None:
        return Resolution(observacao=rule.observacao, desconsiderar=True, rule=rule)

    return Resolution(observacao=None, desconsiderar=False)


def propose_overrides(
    rows: Iterable[GestaoRow],
    casas: Iterable[CasaOracao],
    overrides: Iterable[DocumentoFaltante] = (),
    now: datetime | None = None,
) -> list[DocumentoFaltante]:
    """List the automatic disregards not yet covered by an override.

    Parameters
    ----------
    rows : Iterable[GestaoRow]
        Document presence matrix.
    casas : Iterable[CasaOracao]
        Property registry.
    overrides : Iterable[DocumentoFaltante]
        Overrides already stored.
    now : datetime | None
        Timestamp for the proposals (default: current time).

    Returns
    -------
    list[DocumentoFaltante]
        One disregarded override per missing ``(codigo, documento)`` that
        an exception rule waives and that has no stored override.
    """
    rows = list(rows)
    casas_by_code = {casa.codigo: casa for casa in casas}
    index = index_overrides(overrides)
    stamp = (now or datetime.now()).isoformat()

    proposals: list[DocumentoFaltante] = []
    seen: set[tuple[str, str]] = set()
    for documento in document_keys(rows):
        for row in rows:
            key = (row.codigo, documento)
            if row.has(documento) or key in index or key in seen:
                continue
            resolution = resolve_missing(documento, casas_by_code.get(row.codigo), None)
            if resolution.rule is None:
                continue
            seen.add(key)
            proposals.append(
                DocumentoFaltante(
                    codigo=row.codigo,
                    documento=documento,
                    observacao=resolution.observacao,
                    desconsiderar=True,
                    data_observacao=stamp,
                )
            )
    return proposals


def commit_overrides(store, proposals: list[DocumentoFaltante]) -> list[DocumentoFaltante]:
    """Persist proposed overrides without touching existing ones.

    Parameters
    ----------
    store : GestaoDataStore
        Target store.
    proposals : list[DocumentoFaltante]
        Output of :func:`propose_overrides`.

    Returns
    -------
    list[DocumentoFaltante]
        The overrides actually written.
    """
    if not proposals:
        return []
    written = store.add_overrides_if_absent(proposals)
    if written:
        logger.info("Auto-disregarded %d missing documents", len(written))
    return written


def compute_analyses(
    rows: Iterable[GestaoRow],
    casas: Iterable[CasaOracao],
    overrides: Iterable[DocumentoFaltante] = (),
) -> list[AnaliseDocumento]:
    """Compute compliance statistics for every document in the matrix.

    Missing documents without a stored override still get the automatic
    disregard of a matching exception rule, so the result does not depend
    on whether proposals were committed first.
    """
    rows = list(rows)
    if not rows:
        return []

    casas_by_code = {casa.codigo: casa for casa in casas}
    index = index_overrides(overrides)
    total_casas = len(rows)

    analises: list[AnaliseDocumento] = []
    for documento in document_keys(rows):
        casas_com_documento = 0
        faltantes: list[CasaFaltante] = []

        for row in rows:
            if row.has(documento):
                casas_com_documento += 1
                continue

            casa = casas_by_code.get(row.codigo)
            resolution = resolve_missing(documento, casa, index.get((row.codigo, documento)))
            faltantes.append(
                CasaFaltante(
                    codigo=row.codigo,
                    nome=(casa.nome if casa and casa.nome else row.codigo),
                    observacao=resolution.observacao,
                    desconsiderar=resolution.desconsiderar,
                )
            )

        casas_desconsideradas = sum(1 for f in faltantes if f.desconsiderar)
        analises.append(
            AnaliseDocumento(
                nome_documento=documento,
                is_obrigatorio=is_mandatory(documento),
                total_casas=total_casas,
                casas_com_documento=casas_com_documento,
                casas_sem_documento=len(faltantes),
                casas_desconsideradas=casas_desconsideradas,
                percentual_original=_percent(casas_com_documento, total_casas),
                percentual_real=_percent(casas_com_documento + casas_desconsideradas, total_casas),
                casas_faltantes=faltantes,
            )
        )

    return analises


def analyze(
    rows: Iterable[GestaoRow],
    casas: Iterable[CasaOracao],
    store,
    now: datetime | None = None,
) -> list[AnaliseDocumento]:
    """Propose, commit and compute in one call.

    Automatic disregards are written to ``store`` as a side effect; a
    second call finds them stored and writes nothing.
    """
    rows = list(rows)
    casas = list(casas)
    proposals = propose_overrides(rows, casas, store.load_overrides(), now=now)
    commit_overrides(store, proposals)
    return compute_analyses(rows, casas, store.load_overrides())


def sort_analyses(analyses: list[AnaliseDocumento]) -> list[AnaliseDocumento]:
    """Mandatory documents first, then by descending number of missing properties."""
    return sorted(analyses, key=lambda a: (not a.is_obrigatorio, -a.casas_sem_documento))


def chart_data(analyses: Iterable[AnaliseDocumento]) -> list[ChartEntry]:
    """Build chart entries counting disregarded documents as present.

    Entries with no occurrence at all are dropped. Mandatory documents come
    first; each group is ordered by descending value.
    """
    entries = []
    for analise in analyses:
        value = analise.casas_com_documento + analise.casas_desconsideradas
        if value <= 0:
            continue
        entries.append(
            ChartEntry(
                name=analise.nome_documento,
                value=value,
                original_value=analise.casas_com_documento,
                exemptions=analise.casas_desconsideradas,
                is_obrigatorio=analise.is_obrigatorio,
                percentage=_percent(value, analise.total_casas),
            )
        )
    return sorted(entries, key=lambda e: (not e.is_obrigatorio, -e.value))


def casa_document_status(
    row: GestaoRow,
    casa: CasaOracao | None,
    overrides: Iterable[DocumentoFaltante] | OverrideIndex = (),
    documentos: Iterable[str] | None = None,
    ordered: bool = True,
) -> list[DocumentoStatus]:
    """Describe each document of one property.

    Parameters
    ----------
    row : GestaoRow
        The property's management record.
    casa : CasaOracao | None
        The registered property, if any.
    overrides : Iterable[DocumentoFaltante] | OverrideIndex
        Stored overrides.
    documentos : Iterable[str] | None
        Document keys to report (default: the keys of ``row``).
    ordered : bool
        Sort mandatory documents first, then by name.
    """
    index = overrides if isinstance(overrides, dict) else index_overrides(overrides)
    keys = list(documentos) if documentos is not None else row.documentos()

    statuses = []
    for documento in keys:
        presente = row.has(documento)
        override = index.get((row.codigo, documento))
        if presente:
            observacao = override.observacao if override else None
            desconsiderar = override.desconsiderar if override else False
        else:
            resolution = resolve_missing(documento, casa, override)
            observacao, desconsiderar = resolution.observacao, resolution.desconsiderar
        statuses.append(
            DocumentoStatus(
                nome=documento,
                presente=presente,
                obrigatorio=is_mandatory(documento),
                desconsiderar=desconsiderar,
                observacao=observacao,
                aplicavel=matching_rule(documento, casa) is None,
            )
        )

    if ordered:
        statuses.sort(key=lambda s: (not s.obrigatorio, fold(s.nome)))
    return statuses


def compliance_table(
    rows: Iterable[GestaoRow],
    casas: Iterable[CasaOracao],
    overrides: Iterable[DocumentoFaltante] = (),
    use_exemptions: bool = True,
) -> list[CasaCompliance]:
    """Per-property compliance for documents that at least one property has.

    Properties without a management record are left out. With
    ``use_exemptions`` disregarded documents count as present.
    """
    rows = list(rows)
    if not rows:
        return []

    rows_by_code: dict[str, GestaoRow] = {}
    for row in rows:
        rows_by_code.setdefault(row.codigo, row)

    com_dados = [doc for doc in document_keys(rows) if any(row.has(doc) for row in rows)]
    obrigatorios = [doc for doc in com_dados if is_mandatory(doc)]
    opcionais = [doc for doc in com_dados if not is_mandatory(doc)]
    index = index_overrides(overrides)

    def percentual(statuses: list[DocumentoStatus]) -> float:
        ok = sum(1 for s in statuses if s.presente or (use_exemptions and s.desconsiderar))
        return _percent(ok, len(statuses))

    table = []
    for casa in casas:
        row = rows_by_code.get(casa.codigo)
        if row is None:
            continue
        docs_obrigatorios = casa_document_status(row, casa, index, obrigatorios, ordered=False)
        docs_opcionais = casa_document_status(row, casa, index, opcionais, ordered=False)
        table.append(
            CasaCompliance(
                codigo=casa.codigo,
                nome=casa.nome,
                documentos_obrigatorios=docs_obrigatorios,
                documentos_opcionais=docs_opcionais,
                percentual_obrigatorios=percentual(docs_obrigatorios),
                percentual_opcionais=percentual(docs_opcionais),
            )
        )
    return table


def _percent(part: int, total: int) -> float:
    return (part / total) * 100 if total > 0 else 0.0
