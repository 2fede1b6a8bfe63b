#!/usr/bin/env python3
"""
Trade Import Script: Broker Export to Journal

Imports a broker trade history (CSV or Excel) into a JSON journal store,
skipping trades that were already imported. Optionally writes the journal
as CSV or a performance report afterwards.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

from loguru import logger

from tradelog.config import configure_logging, settings
from tradelog.core.enums import ImportState, MappingField, ReportPeriod
from tradelog.core.exceptions.journal import TradeLogException
from tradelog.core.models.column_mapping import ColumnMapping
from tradelog.infrastructure.csv_import import ImportSession
from tradelog.infrastructure.export import ReportGenerator, export_trades_csv
from tradelog.infrastructure.storage import (
    JsonFileKeyValueStore,
    KeyValueTradeRepository,
    migrate_account_ids,
)


def parse_mapping_args(assignments: list[str]) -> dict[str, str]:
    """Parse ``field=Header Name`` pairs into a field to header dictionary."""
    parsed: dict[str, str] = {}
    for assignment in assignments:
        field, separator, header = assignment.partition("=")
        if not separator or not header.strip():
            raise ValueError(f"Expected field=column, got '{assignment}'")
        parsed[MappingField(field.strip()).value] = header.strip()
    return parsed


def run_import(args: argparse.Namespace, repository: KeyValueTradeRepository) -> int:
    """Drive one import session; returns a process exit code."""
    session = ImportSession(repository, account_id=args.account)
    session.load_path(args.file)

    if session.state == ImportState.MAPPING_REQUIRED:
        headers = session.parse_result.headers
        if not args.map:
            for error in session.parse_result.errors:
                logger.error(error)
            suggested = {
                field: headers[index]
                for field, index in session.suggested_mapping.to_dict().items()
                if index >= 0
            }
            logger.info(f"Suggested mapping: {suggested}")
            logger.info("Re-run with --map field=column for every missing field")
            return 2

        mapping = ColumnMapping.from_dict(session.suggested_mapping.to_dict())
        overrides = ColumnMapping.from_header_names(headers, parse_mapping_args(args.map))
        for field in MappingField:
            if overrides.is_mapped(field):
                mapping[field] = overrides[field]
        result = session.submit_mapping(mapping)
        if session.state != ImportState.PREVIEW_READY:
            for error in result.errors:
                logger.error(error)
            return 1
    elif args.map:
        logger.warning("Columns were detected automatically; --map ignored")

    summary = session.parse_result.summary
    for error in session.parse_result.errors:
        logger.warning(error)
    logger.info(
        f"Parsed {summary.successful_parsed} trades, {summary.failed} rows failed"
        + (
            f" ({summary.date_range.earliest} to {summary.date_range.latest})"
            if summary.date_range
            else ""
        )
    )

    if args.dry_run:
        session.cancel()
        logger.info("Dry run: nothing was written")
        return 0

    result = session.confirm()
    logger.success(
        f"Imported {result.added} new trades, skipped {result.skipped} duplicates "
        f"({len(result.merged)} trades in account {args.account})"
    )
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Import broker trade history into the trade journal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python import_trades.py --file history.csv
  python import_trades.py --file history.csv --map openPrice=In closePrice=Out quantity=Qty pnl=Result
  python import_trades.py --export trades.csv --report quarterly --report-output report.csv
        """,
    )

    parser.add_argument("--file", type=str, help="Broker export to import (CSV, XLSX or XLS)")

    parser.add_argument(
        "--store",
        type=str,
        default=str(settings.data_file),
        help=f"JSON journal store (default: {settings.data_file})",
    )

    parser.add_argument(
        "--account",
        type=str,
        default=settings.default_account_id,
        help="Account the trades belong to",
    )

    parser.add_argument(
        "--map",
        nargs="+",
        metavar="FIELD=COLUMN",
        help=f"Column mapping when detection fails; fields: {', '.join(MappingField)}",
    )

    parser.add_argument("--dry-run", action="store_true", help="Parse and preview only")

    parser.add_argument("--export", type=str, help="Write the account's trades to this CSV file")

    parser.add_argument(
        "--report",
        choices=[period.value for period in ReportPeriod],
        help="Generate a performance report for this period",
    )
    parser.add_argument("--start", type=str, help="Custom report start date (YYYY-MM-DD)")
    parser.add_argument("--end", type=str, help="Custom report end date (YYYY-MM-DD)")
    parser.add_argument(
        "--report-output",
        type=str,
        default="trading_report.csv",
        help="Report file (default: trading_report.csv)",
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    configure_logging("DEBUG" if args.debug else settings.log_level)

    repository = KeyValueTradeRepository(JsonFileKeyValueStore(args.store))

    try:
        migrate_account_ids(repository, settings.default_account_id)

        if args.file:
            exit_code = run_import(args, repository)
            if exit_code:
                return exit_code

        trades = [trade for trade in repository.load() if trade.account_id == args.account]

        if args.export:
            Path(args.export).write_text(export_trades_csv(trades), encoding="utf-8")
            logger.success(f"Exported {len(trades)} trades to {args.export}")

        if args.report:
            report = ReportGenerator().generate(
                trades,
                period=args.report,
                start=date_arg(args.start),
                end=date_arg(args.end),
            )
            Path(args.report_output).write_text(report.to_csv(), encoding="utf-8")
            logger.success(
                f"Wrote {args.report} report with {len(report.trades)} trades "
                f"to {args.report_output}"
            )

        return 0

    except (TradeLogException, ValueError, OSError) as e:
        logger.error(f"Import failed: {e}")
        return 1


def date_arg(value: str | None) -> date | None:
    """Parse an optional YYYY-MM-DD argument."""
    if value is None:
        return None
    return date.fromisoformat(value)


if __name__ == "__main__":
    sys.exit(main())
