"""Console compliance report."""

from typing import Iterable

from gestao_docs.models import AnaliseDocumento, CasaCompliance, ChartEntry


class ConsoleReport:
    """Print compliance results to stdout."""

    def __init__(self, max_rows: int | None = None) -> None:
        """Initialize console report.

        Parameters
        ----------
        max_rows : int | None
            Maximum missing properties listed per document (None for all).
        """
        self.max_rows = max_rows
        self._counts: dict[str, int] = {}

    def write_analyses(self, analyses: list[AnaliseDocumento]) -> None:
        """Print per-document statistics and the properties missing each document."""
        self._section(f"Documents ({len(analyses)} analysed)")

        for analise in analyses:
            flag = "*" if analise.is_obrigatorio else " "
            print(
                f"{flag} {analise.nome_documento}: "
                f"{analise.casas_com_documento}/{analise.total_casas} "
                f"({analise.percentual_original:.1f}% original, "
                f"{analise.percentual_real:.1f}% real)"
            )

            faltantes = [f for f in analise.casas_faltantes if not f.desconsiderar]
            shown = faltantes[: self.max_rows] if self.max_rows else faltantes
            for faltante in shown:
                print(f"    - {faltante.codigo} {faltante.nome}")
            if self.max_rows and len(faltantes) > self.max_rows:
                print(f"    ... and {len(faltantes) - self.max_rows} more")

        self._count("documents", len(analyses))

    def write_chart(self, entries: Iterable[ChartEntry]) -> None:
        """Print chart entries as text bars."""
        entries = list(entries)
        self._section(f"Chart ({len(entries)} entries)")
        for entry in entries:
            bar = "#" * int(round(entry.percentage / 5))
            print(
                f"{entry.name[:40]:<40} {bar:<20} {entry.percentage:5.1f}% "
                f"({entry.original_value} + {entry.exemptions} disregarded)"
            )
        self._count("chart entries", len(entries))

    def write_table(self, table: Iterable[CasaCompliance]) -> None:
        """Print per-property compliance percentages."""
        table = list(table)
        self._section(f"Properties ({len(table)})")
        for casa in table:
            print(
                f"{casa.codigo:<14} {casa.nome[:30]:<30} "
                f"mandatory {casa.percentual_obrigatorios:5.1f}%  "
                f"optional {casa.percentual_opcionais:5.1f}%"
            )
        self._count("properties", len(table))

    def close(self) -> None:
        """Print summary."""
        self._section("Compliance Report Summary")
        for name, count in self._counts.items():
            print(f"  {name}: {count}")

    def _section(self, title: str) -> None:
        print(f"\n{'='*60}")
        print(title)
        print("=" * 60)

    def _count(self, name: str, count: int) -> None:
        self._counts[name] = self._counts.get(name, 0) + count
