"""Shared constants and helpers for OCR receipt parsing."""

import re
from decimal import Decimal, InvalidOperation

# "$12.99", "$ 12.99" or a bare "12.99". One alternation keeps every
# occurrence counted once and in line order.
PRICE_PATTERN = re.compile(r"\$\s*\d+\.\d{2}|\d+\.\d{2}")

# Stripped from item names in this order.
NAME_PRICE_PATTERNS = (
    re.compile(r"\$\s*\d+\.\d{2}"),
    re.compile(r"\d+\.\d{2}"),
)

QUANTITY_MARKER = re.compile(r"^(\d+)\s*x\s*", re.IGNORECASE)
LEADING_NUMBER = re.compile(r"^\d+\s+")
WHITESPACE_RUN = re.compile(r"\s{2,}")


def _to_amount(token: str) -> Decimal | None:
    """Convert a matched price token into a positive Decimal."""
    cleaned = token.replace("$", "").replace(" ", "")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    # Zero amounts are OCR noise, not prices.
    if value <= 0:
        return None
    return value


def extract_prices(line: str) -> list[Decimal]:
    """Return every positive price on a line, left to right."""
    prices: list[Decimal] = []
    for match in PRICE_PATTERN.finditer(line):
        amount = _to_amount(match.group(0))
        if amount is not None:
            prices.append(amount)
    return prices


def line_price(line: str) -> Decimal | None:
    """Return the rightmost price on a line (the line's canonical amount)."""
    prices = extract_prices(line)
    return prices[-1] if prices else None


def strip_prices(line: str) -> str:
    """Remove every price substring from a line."""
    for pattern in NAME_PRICE_PATTERNS:
        line = pattern.sub("", line)
    return line


def clean_item_name(line: str) -> tuple[str, int]:
    """
    Turn an item line into (name, quantity).

    Removes all prices, collapses whitespace, then drops a leading
    "2 x" quantity marker (kept as the quantity) and a bare leading number.
    """
    name = strip_prices(line).strip()
    name = WHITESPACE_RUN.sub(" ", name)

    quantity = 1
    marker = QUANTITY_MARKER.match(name)
    if marker:
        quantity = max(1, int(marker.group(1)))
        name = name[marker.end() :]
    name = LEADING_NUMBER.sub("", name)

    return name.strip(), quantity
