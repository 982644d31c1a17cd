#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence

from spendscan.domain.insights import Timeframe


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Receipt scanning and spending analysis CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <text-file|->        Parse recognized receipt text
  scan <image>               Scan a receipt image via the OCR service
  budget <receipts> <budgets>
                             Budget usage per category and month
  trend <receipts>           Spending trend over a timeframe
  summary <receipts> [budgets]
                             Current month spending summary

Notes:
  receipts/budgets are CSV snapshots (see spendscan.runtime.snapshot)
  SPENDSCAN_OCR_URL / SPENDSCAN_EXTRACTION_URL set default service URLs
""",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: $SPENDSCAN_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Parse recognized receipt text")
    parse_parser.add_argument("text_file", help="Text file with OCR output ('-' for stdin)")
    parse_parser.add_argument("--json", action="store_true", help="Print the parsed receipt as JSON")
    parse_parser.add_argument("--today", default=None, help="Fallback date for receipts without one (YYYY-MM-DD)")

    # scan command
    scan_parser = subparsers.add_parser("scan", help="Scan a receipt image")
    scan_parser.add_argument("image", help="Path to receipt image")
    scan_parser.add_argument("--ocr-url", default=None, help="OCR service URL (default: $SPENDSCAN_OCR_URL)")
    scan_parser.add_argument(
        "--extraction-url",
        default=None,
        help="Structured extraction service URL (default: $SPENDSCAN_EXTRACTION_URL, disabled if unset)",
    )
    scan_parser.add_argument("--json", action="store_true", help="Print the parsed receipt as JSON")
    scan_parser.add_argument("--today", default=None, help="Reference date (YYYY-MM-DD)")

    # budget command
    budget_parser = subparsers.add_parser("budget", help="Show budget usage")
    budget_parser.add_argument("receipts", help="Receipts CSV snapshot")
    budget_parser.add_argument("budgets", help="Budgets CSV snapshot")

    # trend command
    trend_parser = subparsers.add_parser("trend", help="Show spending trend")
    trend_parser.add_argument("receipts", help="Receipts CSV snapshot")
    trend_parser.add_argument(
        "--timeframe",
        default=Timeframe.MONTH.value,
        choices=[timeframe.value for timeframe in Timeframe],
        help="Lookback window (default: month)",
    )
    trend_parser.add_argument("--now", default=None, help="End of the window (YYYY-MM-DD, default: today)")

    # summary command
    summary_parser = subparsers.add_parser("summary", help="Show current month spending summary")
    summary_parser.add_argument("receipts", help="Receipts CSV snapshot")
    summary_parser.add_argument("budgets", nargs="?", default=None, help="Budgets CSV snapshot")
    summary_parser.add_argument("--today", default=None, help="Day inside the month to summarize (YYYY-MM-DD)")

    args = parser.parse_args(argv)

    if args.log_level is not None:
        from spendscan.runtime.logging import set_log_level

        set_log_level(args.log_level)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "parse":
        from spendscan.cli.receipt import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "scan":
        from spendscan.cli.receipt import cmd_scan

        return _run_command(cmd_scan, args)
    elif args.command == "budget":
        from spendscan.cli.spending import cmd_budget

        return _run_command(cmd_budget, args)
    elif args.command == "trend":
        from spendscan.cli.spending import cmd_trend

        return _run_command(cmd_trend, args)
    elif args.command == "summary":
        from spendscan.cli.spending import cmd_summary

        return _run_command(cmd_summary, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
