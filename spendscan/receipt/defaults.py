"""Fallback chains for receipt fields.

Every default the parser and the structured adapter apply lives here so the
policy can be read and tested in one place:

store name   parsed name -> "Unknown Store"
date         parsed date -> today
total        direct total -> subtotal + tax -> sum(items) + tax -> 0.00
structured   parsed MM/DD/YYYY date inside [today - 2 years, today + 1 month] -> today
"""

from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal

from spendscan.domain.receipt import LineItem

from .date_utils import shift_months

UNKNOWN_STORE = "Unknown Store"
ZERO = Decimal("0.00")

STRUCTURED_DATE_FORMAT = "%m/%d/%Y"
MAX_PAST_MONTHS = 24
MAX_FUTURE_MONTHS = 1


def resolve_store_name(name: str | None) -> str:
    if name is None:
        return UNKNOWN_STORE
    name = name.strip()
    return name or UNKNOWN_STORE


def resolve_date(found: date | None, today: date | None = None) -> tuple[date, bool]:
    """Return (date, is_placeholder)."""
    if found is not None:
        return found, False
    return today or date.today(), True


def resolve_total(
    direct: Decimal | None,
    subtotal: Decimal | None,
    tax: Decimal | None,
    items: Sequence[LineItem],
) -> Decimal:
    if direct is not None and direct > 0:
        return direct
    if subtotal is not None and subtotal > 0 and tax is not None and tax > 0:
        return subtotal + tax
    if items:
        return sum((item.price for item in items), ZERO) + (tax or ZERO)
    return ZERO


def resolve_structured_date(value: object, today: date | None = None) -> tuple[date, bool]:
    """
    Validate a date string from an external extraction source.

    Unparseable dates, dates more than two years old and dates more than a
    month ahead are replaced by today. Returns (date, is_placeholder).
    """
    today = today or date.today()
    if not isinstance(value, str):
        return today, True
    try:
        parsed = datetime.strptime(value.strip(), STRUCTURED_DATE_FORMAT).date()
    except ValueError:
        return today, True

    if parsed < shift_months(today, -MAX_PAST_MONTHS):
        return today, True
    if parsed > shift_months(today, MAX_FUTURE_MONTHS):
        return today, True
    return parsed, False
