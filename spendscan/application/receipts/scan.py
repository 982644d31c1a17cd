"""Receipt scan workflow orchestration."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Literal

from spendscan.domain.category import Category
from spendscan.domain.receipt import ParsedReceipt
from spendscan.receipt.defaults import resolve_store_name
from spendscan.receipt.ocr_result_parser import parse_receipt
from spendscan.receipt.structured_adapter import parse_structured_response
from spendscan.runtime import get_categorizer, get_logger
from spendscan.runtime.extraction_service import (
    ExtractionServiceUnavailable,
    call_extraction_service,
    call_ocr_service,
)

logger = get_logger(__name__)

ScanStatus = Literal[
    "file_not_found",
    "ocr_unavailable",
    "parsed",
]

ScanSource = Literal["structured", "ocr", "text"]


@dataclass(frozen=True)
class ReceiptScanRequest:
    """Inputs for running receipt scan workflow."""

    image_path: Path
    ocr_url: str
    extraction_url: str | None = None
    today: date | None = None


@dataclass(frozen=True)
class ReceiptScanResult:
    """Outcome from receipt scan workflow."""

    status: ScanStatus
    parsed: ParsedReceipt | None = None
    category: Category | None = None
    source: ScanSource | None = None
    raw_text: str | None = None
    error: str | None = None


def _with_store_default(parsed: ParsedReceipt) -> ParsedReceipt:
    store_name = resolve_store_name(parsed.store_name)
    if store_name == parsed.store_name:
        return parsed
    return dataclasses.replace(parsed, store_name=store_name)


def parse_text_receipt(text: str, today: date | None = None) -> ReceiptScanResult:
    """Parse and categorize already-recognized receipt text."""
    parsed = _with_store_default(parse_receipt(text, today=today))
    category = get_categorizer().categorize(parsed.store_name, parsed.items)
    return ReceiptScanResult(status="parsed", parsed=parsed, category=category, source="text", raw_text=text)


def run_receipt_scan(request: ReceiptScanRequest) -> ReceiptScanResult:
    """
    Run scan flow: structured extraction and/or OCR -> parse -> categorize.

    The structured guess is preferred when it is non-empty; the OCR text parse
    is the fallback. Only when every configured source fails is the scan
    reported as ocr_unavailable.
    """
    if not request.image_path.exists():
        return ReceiptScanResult(
            status="file_not_found",
            error=f"Receipt file not found: {request.image_path}",
        )

    candidates: list[tuple[ScanSource, ParsedReceipt, str | None]] = []
    errors: list[str] = []

    if request.extraction_url:
        try:
            content = call_extraction_service(request.image_path, request.extraction_url)
        except ExtractionServiceUnavailable as exc:
            errors.append(str(exc))
        else:
            candidates.append(("structured", parse_structured_response(content, today=request.today), None))

    try:
        text = call_ocr_service(request.image_path, request.ocr_url)
    except ExtractionServiceUnavailable as exc:
        errors.append(str(exc))
    else:
        candidates.append(("ocr", _with_store_default(parse_receipt(text, today=request.today)), text))

    if not candidates:
        return ReceiptScanResult(status="ocr_unavailable", error="; ".join(errors))

    source, parsed, raw_text = next(
        (candidate for candidate in candidates if not candidate[1].is_empty),
        candidates[-1],
    )
    if parsed.is_empty:
        logger.warning("No items or total recognized in %s", request.image_path.name)
    else:
        logger.info("Using %s result for %s", source, request.image_path.name)

    category = get_categorizer().categorize(parsed.store_name, parsed.items)
    return ReceiptScanResult(
        status="parsed",
        parsed=parsed,
        category=category,
        source=source,
        raw_text=raw_text,
        error="; ".join(errors) or None,
    )
