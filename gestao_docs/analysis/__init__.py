"""Compliance analysis of the document presence matrix."""

from gestao_docs.analysis.analyzer import ComplianceAnalyzer
from gestao_docs.analysis.compliance import (
    Resolution,
    analyze,
    casa_document_status,
    chart_data,
    commit_overrides,
    compliance_table,
    compute_analyses,
    index_overrides,
    propose_overrides,
    resolve_missing,
    sort_analyses,
)

__all__ = [
    "ComplianceAnalyzer",
    "Resolution",
    "analyze",
    "casa_document_status",
    "chart_data",
    "commit_overrides",
    "compliance_table",
    "compute_analyses",
    "index_overrides",
    "propose_overrides",
    "resolve_missing",
    "sort_analyses",
]
