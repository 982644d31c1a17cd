"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

from spendscan.domain.category import Category
from spendscan.domain.receipt import ParsedReceipt
from spendscan.runtime import get_logger, get_paths

logger = get_logger(__name__)


def _receipt_payload(parsed: ParsedReceipt, category: Category | None, source: str | None) -> dict[str, Any]:
    return {
        "storeName": parsed.store_name,
        "date": parsed.date.isoformat(),
        "dateIsPlaceholder": parsed.date_is_placeholder,
        "items": [
            {"name": item.name, "price": str(item.price), "quantity": item.quantity} for item in parsed.items
        ],
        "subtotal": str(parsed.subtotal) if parsed.subtotal is not None else None,
        "tax": str(parsed.tax) if parsed.tax is not None else None,
        "total": str(parsed.total),
        "category": category.value if category is not None else None,
        "source": source,
    }


def _print_receipt(parsed: ParsedReceipt, category: Category | None) -> None:
    print("\n" + "=" * 60)
    print("PARSED RECEIPT")
    print("=" * 60)
    print(f"Store: {parsed.store_name}")
    date_str = parsed.date.isoformat() if not parsed.date_is_placeholder else "UNKNOWN"
    print(f"Date: {date_str}")
    if category is not None:
        print(f"Category: {category.value}")
    print(f"Total: ${parsed.total:.2f}")
    if parsed.tax:
        print(f"Tax: ${parsed.tax:.2f}")
    print(f"\nItems ({len(parsed.items)}):")
    for i, item in enumerate(parsed.items, 1):
        qty_str = f" x{item.quantity}" if item.quantity > 1 else ""
        print(f"  {i}. {item.name}{qty_str} - ${item.price:.2f}")
    print("=" * 60)


def _parse_today(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        print(f"Error: invalid date {value!r} (expected YYYY-MM-DD)")
        sys.exit(2)


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse recognized receipt text from a file (or stdin with '-')."""
    from spendscan.application.receipts.scan import parse_text_receipt

    if args.text_file == "-":
        text = sys.stdin.read()
    else:
        text_path = Path(args.text_file)
        if not text_path.exists():
            print(f"Error: Text file not found: {text_path}")
            sys.exit(1)
        text = text_path.read_text(encoding="utf-8")

    result = parse_text_receipt(text, today=_parse_today(args.today))
    assert result.parsed is not None

    if args.json:
        print(json.dumps(_receipt_payload(result.parsed, result.category, result.source), indent=2))
        return
    _print_receipt(result.parsed, result.category)


def cmd_scan(args: argparse.Namespace) -> None:
    """Scan a receipt image through the OCR (and optional extraction) service."""
    from spendscan.application.receipts.scan import ReceiptScanRequest, run_receipt_scan

    paths = get_paths()
    result = run_receipt_scan(
        ReceiptScanRequest(
            image_path=Path(args.image),
            ocr_url=args.ocr_url or paths.ocr_url,
            extraction_url=args.extraction_url or paths.extraction_url,
            today=_parse_today(args.today),
        )
    )

    if result.status == "file_not_found":
        logger.error("%s", result.error)
        print(f"Error: {result.error}")
        sys.exit(1)

    if result.status == "ocr_unavailable":
        logger.error("%s", result.error)
        print(f"OCR service unavailable: {result.error}")
        print("Make sure the OCR service is running before scanning receipts.")
        sys.exit(1)

    parsed = result.parsed
    if parsed is None:
        print("Scan failed: missing receipt output.")
        sys.exit(1)

    if result.error:
        logger.warning("Partial scan: %s", result.error)

    if args.json:
        print(json.dumps(_receipt_payload(parsed, result.category, result.source), indent=2))
        return

    _print_receipt(parsed, result.category)
    print(f"\nSource: {result.source}")
    if parsed.is_empty:
        print("Nothing recognized; check the image or enter the receipt manually.")
