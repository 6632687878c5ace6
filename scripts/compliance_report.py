#!/usr/bin/env python3
"""Import spreadsheets and print the document compliance report.

Usage::

    python scripts/compliance_report.py --casas local/casas.xlsx --gestao local/gestao.xlsx
    python scripts/compliance_report.py --chart --table
    python scripts/compliance_report.py --backup backup.json
    python scripts/compliance_report.py --restore backup.json --merge
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gestao_docs.analysis import ComplianceAnalyzer
from gestao_docs.backup import apply_backup, backup_summary, read_backup, write_backup
from gestao_docs.config import GestaoConfig
from gestao_docs.exceptions import GestaoError
from gestao_docs.gestao_vista import generate_gestao_from_vista
from gestao_docs.importers import import_casas, import_gestao, import_gestao_vista
from gestao_docs.logging import get_logger, setup_logging
from gestao_docs.reports import ConsoleReport
from gestao_docs.store import GestaoDataStore, JsonFileBackend

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Document compliance report for casas de oração")
    parser.add_argument("--data-dir", type=Path, help="Data directory (default: $GESTAO_DATA_DIR or data/)")
    parser.add_argument("--casas", type=Path, help="Import the property registry from this workbook")
    parser.add_argument("--gestao", type=Path, help="Import the management sheet from this workbook")
    parser.add_argument(
        "--gestao-vista",
        type=Path,
        help="Import a gestão à vista export and rebuild the management matrix from it",
    )
    parser.add_argument("--max-rows", type=int, default=10, help="Missing casas listed per document")
    parser.add_argument("--chart", action="store_true", help="Print chart data")
    parser.add_argument("--table", action="store_true", help="Print the per-casa compliance table")
    parser.add_argument(
        "--no-exemptions",
        action="store_true",
        help="Do not count disregarded documents as present in the table",
    )

    backup_group = parser.add_argument_group("backup")
    backup_group.add_argument("--backup", type=Path, help="Write a JSON backup and exit")
    backup_group.add_argument("--restore", type=Path, help="Restore a JSON backup and exit")
    backup_group.add_argument("--merge", action="store_true", help="Merge the restored backup")
    return parser


def main() -> int:
    args = build_parser().parse_args()

    config = GestaoConfig.from_env()
    setup_logging(config.log_level, config.log_format)

    data_dir = args.data_dir or config.storage.data_dir
    store = GestaoDataStore(JsonFileBackend(data_dir, pretty=config.storage.pretty_json))

    try:
        if args.backup:
            write_backup(store, args.backup)
            return 0

        if args.restore:
            backup = read_backup(args.restore)
            logger.info("Restoring backup: %s", backup_summary(backup))
            apply_backup(store, backup, merge=args.merge)
            return 0

        if args.casas:
            import_casas(args.casas, store, header_row=config.imports.casas_header_row)
        if args.gestao:
            import_gestao(args.gestao, store, header_row=config.imports.gestao_header_row)
        if args.gestao_vista:
            vista = import_gestao_vista(
                args.gestao_vista, store, header_row=config.imports.gestao_vista_header_row
            )
            store.save_gestao(generate_gestao_from_vista(vista))

        unregistered = store.unregistered_codes()
        if unregistered:
            logger.warning("%d codes without a registered casa: %s", len(unregistered), ", ".join(unregistered))

        analyzer = ComplianceAnalyzer(store)
        report = ConsoleReport(max_rows=args.max_rows)
        report.write_analyses(analyzer.analyze(sort=True))
        if args.chart:
            report.write_chart(analyzer.chart_data())
        if args.table:
            report.write_table(analyzer.compliance_table(use_exemptions=not args.no_exemptions))
        report.close()
    except GestaoError as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
