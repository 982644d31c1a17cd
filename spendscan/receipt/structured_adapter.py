"""Normalize structured receipt guesses from an external extraction service.

A vision-capable model returns something shaped like::

    {"storeName": "Walmart", "date": "MM/DD/YYYY",
     "items": [{"name": "Milk", "price": 3.49}], "total": 3.49}

Any field may be missing or wrong. Bad fields fall back to defaults; this
module never raises on malformed input.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from spendscan.domain.receipt import LineItem, ParsedReceipt
from spendscan.util.json_payload import extract_json_object

from .defaults import ZERO, resolve_store_name, resolve_structured_date

logger = logging.getLogger(__name__)

DATE_KEYS = ("date", "dateString", "date_string")
STORE_KEYS = ("storeName", "store_name")


def _first_present(guess: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in guess and guess[key] is not None:
            return guess[key]
    return None


def _to_amount(value: Any) -> Decimal | None:
    """Convert a JSON number (or numeric string) to a non-negative Decimal."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        amount = Decimal(str(value).strip().lstrip("$"))
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def _adapt_items(raw_items: Any) -> list[LineItem]:
    if not isinstance(raw_items, list):
        return []

    items: list[LineItem] = []
    for raw in raw_items:
        if not isinstance(raw, Mapping):
            continue
        name = raw.get("name")
        price = _to_amount(raw.get("price"))
        if not isinstance(name, str) or not name.strip() or price is None:
            logger.debug("Skipping malformed structured item: %r", raw)
            continue
        quantity = raw.get("quantity", 1)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            quantity = 1
        items.append(LineItem(name=name.strip(), price=price, quantity=quantity))
    return items


def adapt_structured_receipt(guess: Mapping[str, Any] | None, today: date | None = None) -> ParsedReceipt:
    """Convert a structured guess into a ParsedReceipt, defaulting bad fields."""
    if not isinstance(guess, Mapping):
        guess = {}

    raw_store = _first_present(guess, STORE_KEYS)
    store_name = resolve_store_name(raw_store if isinstance(raw_store, str) else None)

    receipt_date, date_is_placeholder = resolve_structured_date(_first_present(guess, DATE_KEYS), today)
    if date_is_placeholder:
        logger.debug("Structured date rejected or missing, using %s", receipt_date.isoformat())

    items = _adapt_items(guess.get("items"))
    total = _to_amount(guess.get("total"))

    return ParsedReceipt(
        store_name=store_name,
        date=receipt_date,
        items=tuple(items),
        total=total if total is not None else ZERO,
        date_is_placeholder=date_is_placeholder,
    )


def parse_structured_response(content: str, today: date | None = None) -> ParsedReceipt:
    """Adapt the raw text reply of an extraction model (fenced JSON allowed)."""
    payload = extract_json_object(content)
    if payload is None:
        logger.warning("Extraction response did not contain a JSON object")
    return adapt_structured_receipt(payload, today)
