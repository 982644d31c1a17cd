"""Line classification and store-name selection."""

from enum import Enum

# Substring keywords (not word-boundary matches): "card" also fires on
# "cardamom". Receipts scanned so far depend on this looser behavior.
EXCLUDE_KEYWORDS = (
    "subtotal",
    "sub total",
    "sub-total",
    "total",
    "grand total",
    "tax",
    "sales tax",
    "vat",
    "cash",
    "change",
    "paid",
    "payment",
    "balance",
    "due",
    "tender",
    "credit",
    "debit",
    "card",
    "visa",
    "mastercard",
    "amex",
    "thank you",
    "thanks",
)

STORE_NAME_SCAN_LINES = 3
STORE_NAME_MIN_LENGTH = 4
STORE_NAME_REJECT_WORDS = ("receipt", "store", "date")


class LineKind(str, Enum):
    TOTAL = "total-line"
    SUBTOTAL = "subtotal-line"
    TAX = "tax-line"
    EXCLUDED = "excluded-noise"
    ITEM = "item-candidate"


def _is_subtotal(lowered: str) -> bool:
    return "subtotal" in lowered or "sub total" in lowered


def classify_line(lowered: str) -> LineKind:
    """Classify a lowercased receipt line."""
    if _is_subtotal(lowered):
        return LineKind.SUBTOTAL
    if "total" in lowered:
        return LineKind.TOTAL
    if "tax" in lowered:
        return LineKind.TAX
    if any(keyword in lowered for keyword in EXCLUDE_KEYWORDS):
        return LineKind.EXCLUDED
    return LineKind.ITEM


def _is_store_name_candidate(line: str) -> bool:
    lowered = line.lower()
    if any(word in lowered for word in STORE_NAME_REJECT_WORDS):
        return False
    if ":" in line:
        return False
    return len(line) >= STORE_NAME_MIN_LENGTH


def select_store_name(lines: list[str]) -> str:
    """
    Pick the store name from the first few non-empty lines.

    The longest qualifying line wins (earliest on ties); if none qualify the
    first line is used. Returns "" for an empty document.
    """
    if not lines:
        return ""

    candidates = [line for line in lines[:STORE_NAME_SCAN_LINES] if _is_store_name_candidate(line)]
    if candidates:
        return max(candidates, key=len)
    return lines[0]
