"""Data models for receipt scanning."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from spendscan.domain.category import Category


@dataclass(frozen=True)
class LineItem:
    """A single line item on a receipt."""

    name: str
    price: Decimal
    quantity: int = 1

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("LineItem name must be non-empty")
        if self.name != self.name.strip():
            object.__setattr__(self, "name", self.name.strip())
        if self.price < 0:
            raise ValueError(f"LineItem price must be >= 0, got {self.price}")
        if self.quantity < 1:
            raise ValueError(f"LineItem quantity must be >= 1, got {self.quantity}")

    @property
    def total(self) -> Decimal:
        # Price is the line amount printed on the receipt.
        # Quantity is informational only.
        return self.price


@dataclass(frozen=True)
class ParsedReceipt:
    """Normalized result of one scan attempt."""

    store_name: str
    date: date
    items: tuple[LineItem, ...] = ()
    total: Decimal = Decimal("0.00")
    subtotal: Decimal | None = None
    tax: Decimal | None = None
    date_is_placeholder: bool = False

    @property
    def is_empty(self) -> bool:
        """True when the scan produced neither items nor a positive total."""
        return not self.items and self.total <= 0


@dataclass
class Receipt:
    """Persisted receipt as handed over by the storage layer.

    The core only reads these; tag edits and category overrides happen elsewhere.
    """

    store_name: str
    date: date
    total_amount: Decimal
    category: Category = Category.OTHER
    items: list[LineItem] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    raw_text: str | None = None
    image_data: bytes | None = None
    notes: str | None = None
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_parsed(
        cls,
        parsed: ParsedReceipt,
        category: Category,
        raw_text: str | None = None,
    ) -> Receipt:
        return cls(
            store_name=parsed.store_name,
            date=parsed.date,
            total_amount=parsed.total,
            category=category,
            items=list(parsed.items),
            raw_text=raw_text,
        )
