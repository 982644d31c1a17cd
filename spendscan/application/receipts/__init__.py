"""Receipt workflows."""

from spendscan.application.receipts.scan import (
    ReceiptScanRequest,
    ReceiptScanResult,
    parse_text_receipt,
    run_receipt_scan,
)

__all__ = [
    "ReceiptScanRequest",
    "ReceiptScanResult",
    "parse_text_receipt",
    "run_receipt_scan",
]
