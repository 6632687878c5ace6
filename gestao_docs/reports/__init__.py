"""Report outputs."""

from gestao_docs.reports.console import ConsoleReport

__all__ = ["ConsoleReport"]
