#!/usr/bin/env python3
"""Generate sample spreadsheets for validation.

This script writes a property registry and a management sheet to the
local/ folder, laid out like the real exports (header on the configured
row), so that the import and compliance pipeline can be exercised by hand.
"""

import argparse
import sys
from pathlib import Path

from openpyxl import Workbook

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gestao_docs.config import GestaoConfig
from gestao_docs.generators import CasaGenerator, GestaoSheetGenerator
from gestao_docs.models import CasaOracao

CASAS_HEADER = ("Código", "Nome", "Tipo Imóvel", "Endereço", "Status")


def save_sheet(rows: list, filename: str, output_dir: Path, header_row: int, title: str) -> Path:
    """Save rows to a workbook with the header on ``header_row + 1``."""
    filepath = output_dir / filename
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Plan1"
    if header_row > 0:
        worksheet.cell(row=1, column=1, value=title)
    for offset, row in enumerate(rows):
        for column, value in enumerate(row, start=1):
            worksheet.cell(row=header_row + 1 + offset, column=column, value=value)
    workbook.save(filepath)
    print(f"Saved {len(rows) - 1} rows to {filepath}")
    return filepath


def generate_casas(casa_gen: CasaGenerator, num_casas: int, output_dir: Path, header_row: int) -> list:
    """Generate the property registry."""
    print("\n1. Generating casas de oração...")
    casas = list(casa_gen.generate_batch(num_casas))
    rows = [CASAS_HEADER] + [
        (c.codigo, c.nome, c.tipo_imovel, c.endereco, c.status) for c in casas
    ]
    save_sheet(rows, "casas.xlsx", output_dir, header_row, "Relação de Casas de Oração")
    return casas


def generate_gestao(
    gestao_gen: GestaoSheetGenerator,
    casas: list[CasaOracao],
    output_dir: Path,
    header_row: int,
) -> list:
    """Generate the management sheet."""
    print("\n2. Generating gestão sheet...")
    rows = gestao_gen.generate_sheet(casas)
    save_sheet(rows, "gestao.xlsx", output_dir, header_row, "Gestão de Documentos")
    return rows[1:]


def print_summary(data: dict[str, list], output_dir: Path) -> None:
    """Print generation summary."""
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    for name, items in data.items():
        print(f"{name + ':':18}{len(items)}")
    print(f"\nAll files saved to: {output_dir}")
    print("=" * 60)


def main() -> None:
    """Generate all sample spreadsheets."""
    parser = argparse.ArgumentParser(description="Generate sample gestao-docs spreadsheets")
    parser.add_argument("--casas", type=int, default=20, help="Number of casas (default: 20)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--presence-rate",
        type=float,
        default=0.7,
        help="Probability that a casa holds a document (default: 0.7)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=project_root / "local",
        help="Output directory (default: local/)",
    )
    args = parser.parse_args()

    config = GestaoConfig.from_env()
    output_dir = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print("Generating Sample Data for Validation")
    print("=" * 60)

    casa_gen = CasaGenerator(seed=args.seed)
    gestao_gen = GestaoSheetGenerator(seed=args.seed, presence_rate=args.presence_rate)

    casas = generate_casas(casa_gen, args.casas, output_dir, config.imports.casas_header_row)
    gestao_rows = generate_gestao(gestao_gen, casas, output_dir, config.imports.gestao_header_row)

    print_summary({"Casas": casas, "Gestão rows": gestao_rows}, output_dir)


if __name__ == "__main__":
    main()
