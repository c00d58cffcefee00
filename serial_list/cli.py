"""Command-line entrypoint for the serial order report."""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path

from serial_list.application.use_cases import (
    SELECTION,
    BuildSerialReportUseCase,
    DeliverReportUseCase,
    OrderLookupUseCase,
    ReportContext,
)
from serial_list.config import Settings, load_settings
from serial_list.domain.rows import STATIC_COLUMNS
from serial_list.exceptions import QueryError, ReportStageError, SinkWriteError
from serial_list.infrastructure.database.engine import create_session_factory, session_scope
from serial_list.infrastructure.repositories.sql_repositories import (
    SqlFundReference,
    SqlHoldingsCatalog,
    SqlOrderCatalog,
)
from serial_list.logging_config import configure_logging, get_logger
from serial_list.presentation.clipboard import ClipboardSink, StreamSink, copy_to_clipboard
from serial_list.presentation.spreadsheet import SpreadsheetSink

logger = get_logger("cli")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report potential serial orders from the acquisitions database")
    parser.add_argument("--settings", type=Path, help="JSON file overriding the default settings")
    parser.add_argument("--database-url", type=str, help="SQLAlchemy URL of the order database")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Build the serial order report")
    report.add_argument("--holdings-url", type=str, help="SQLAlchemy URL of the holdings database")
    report.add_argument("--as-of", type=date.fromisoformat, help="Date used to work out fiscal years (YYYY-MM-DD)")
    report.add_argument("--strict", action="store_true", help="Abort when an order lacks its bib or fund")
    target = report.add_mutually_exclusive_group()
    target.add_argument("--output", "-o", type=Path, help="Spreadsheet path (default from settings)")
    target.add_argument("--clipboard", action="store_true", help="Copy tab-separated rows to the clipboard")
    target.add_argument("--stdout", action="store_true", help="Print tab-separated rows")

    lookup = sub.add_parser("lookup", help="Describe orders by record number")
    lookup.add_argument("record_nums", nargs="+", type=parse_record_num, help="Order record numbers, with or without the o/a wrapper")
    lookup.add_argument("--clipboard", action="store_true", help="Copy the lines to the clipboard")
    return parser.parse_args(argv)


def parse_record_num(value: str) -> int:
    text = value.strip().lower()
    if text.startswith("o"):
        text = text[1:]
    if text.endswith("a") and len(text) > 1:
        text = text[:-1]
    return int(text)


def resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.settings)
    if args.database_url:
        settings = replace(settings, database_url=args.database_url)
    if getattr(args, "holdings_url", None):
        settings = replace(settings, holdings_url=args.holdings_url)
    if getattr(args, "strict", False):
        settings = replace(settings, strict=True)
    return settings


def build_sink(args: argparse.Namespace, settings: Settings):
    if args.clipboard:
        return ClipboardSink(settings.clipboard_command)
    if args.stdout:
        return StreamSink()
    return SpreadsheetSink(args.output or Path(settings.output_path), sheet_name=settings.sheet_name)


def run_report(args: argparse.Namespace, settings: Settings) -> int:
    today = args.as_of or date.today()
    try:
        orders_factory = create_session_factory(settings.database_url)
        holdings_factory = create_session_factory(settings.holdings_url)
    except QueryError as exc:
        raise ReportStageError(SELECTION, exc) from exc

    with session_scope(orders_factory) as orders_session, session_scope(holdings_factory) as holdings_session:
        context = ReportContext(
            order_catalog=SqlOrderCatalog(orders_session),
            fund_reference=SqlFundReference(orders_session),
            holdings_catalog=SqlHoldingsCatalog(holdings_session),
            settings=settings,
            today=today,
        )
        report = BuildSerialReportUseCase(context).execute()

    DeliverReportUseCase(build_sink(args, settings)).execute(report)

    print("Serial Order Report", file=sys.stderr)
    print("===================", file=sys.stderr)
    print(f"Generated: {report.generated_at:%Y-%m-%d %H:%M} (as of {report.as_of})", file=sys.stderr)
    print(f"Fiscal years: {', '.join(report.header[len(STATIC_COLUMNS):])}", file=sys.stderr)
    print(f"Candidate orders: {report.candidates}", file=sys.stderr)
    print(f"Rows written: {len(report.rows)}", file=sys.stderr)
    print(f"Deleted orders excluded: {report.excluded_deleted}", file=sys.stderr)
    if report.has_skips():
        print(f"Orders skipped: {len(report.skipped)}", file=sys.stderr)
        for skipped in report.skipped:
            print(f"- {skipped.reason}", file=sys.stderr)
    return 0


def run_lookup(args: argparse.Namespace, settings: Settings) -> int:
    record_nums = list(args.record_nums)
    factory = create_session_factory(settings.database_url)
    with session_scope(factory) as session:
        lines = OrderLookupUseCase(SqlOrderCatalog(session)).execute(record_nums)
    text = "\n".join(lines)
    if args.clipboard:
        copy_to_clipboard(text, settings.clipboard_command)
    else:
        print(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    settings = resolve_settings(args)

    try:
        if args.command == "lookup":
            return run_lookup(args, settings)
        return run_report(args, settings)
    except ReportStageError as exc:
        logger.error("Report failed during %s stage", exc.stage, exc_info=exc.cause)
        print(f"Report failed during {exc.stage}: {exc.cause}", file=sys.stderr)
        return 1
    except (QueryError, SinkWriteError) as exc:
        logger.error("Lookup failed: %s", exc)
        print(f"Lookup failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
