"""Parse raw OCR text into a ParsedReceipt."""

import logging
from datetime import date
from decimal import Decimal

from spendscan.domain.receipt import LineItem, ParsedReceipt

from .date_utils import extract_date
from .defaults import resolve_date, resolve_total
from .ocr_parser.common import clean_item_name, extract_prices
from .ocr_parser.fields_parser import LineKind, classify_line, select_store_name

logger = logging.getLogger(__name__)

MIN_ITEM_NAME_LENGTH = 2


def split_lines(raw_text: str) -> list[str]:
    """Split OCR text into trimmed, non-empty lines."""
    return [line.strip() for line in raw_text.splitlines() if line.strip()]


def parse_receipt(raw_text: str, today: date | None = None) -> ParsedReceipt:
    """
    Parse OCR text into a ParsedReceipt.

    This is a best-effort parser: it never raises on noisy input and falls
    back to defaults (today's date, a derived total) for anything it cannot
    find. When several lines carry a date, the last one wins, so a footer
    timestamp supersedes a header date. Repeated total/subtotal/tax lines
    behave the same way.

    Args:
        raw_text: Newline-delimited text from the OCR collaborator
        today: Date used when no date is found (defaults to date.today())

    Returns:
        ParsedReceipt with store name, date, items and total
    """
    lines = split_lines(raw_text)
    store_name = select_store_name(lines)

    found_date: date | None = None
    total: Decimal | None = None
    subtotal: Decimal | None = None
    tax: Decimal | None = None
    items: list[LineItem] = []

    for line in lines:
        line_date = extract_date(line)
        if line_date is not None:
            found_date = line_date

        prices = extract_prices(line)
        if not prices:
            continue
        price = prices[-1]

        kind = classify_line(line.lower())
        if kind is LineKind.TOTAL:
            total = price
        elif kind is LineKind.SUBTOTAL:
            subtotal = price
        elif kind is LineKind.TAX:
            tax = price
        elif kind is LineKind.ITEM:
            name, quantity = clean_item_name(line)
            if len(name) >= MIN_ITEM_NAME_LENGTH:
                items.append(LineItem(name=name, price=price, quantity=quantity))
            else:
                logger.debug("Dropping priced line without a usable name: %r", line)

    receipt_date, date_is_placeholder = resolve_date(found_date, today)
    if date_is_placeholder:
        logger.debug("No date found on receipt, using %s", receipt_date.isoformat())

    resolved_total = resolve_total(total, subtotal, tax, items)
    if total is None:
        logger.debug("No total line found, derived total %s", resolved_total)

    return ParsedReceipt(
        store_name=store_name,
        date=receipt_date,
        items=tuple(items),
        total=resolved_total,
        subtotal=subtotal,
        tax=tax,
        date_is_placeholder=date_is_placeholder,
    )
