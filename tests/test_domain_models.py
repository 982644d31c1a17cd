from datetime import date
from decimal import Decimal

import pytest
from spendscan.domain import Category, LineItem, ParsedReceipt, Receipt


def test_line_item_trims_name() -> None:
    assert LineItem(name="  Milk ", price=Decimal("2.49")).name == "Milk"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "price": Decimal("1.00")},
        {"name": "   ", "price": Decimal("1.00")},
        {"name": "Milk", "price": Decimal("-0.01")},
        {"name": "Milk", "price": Decimal("1.00"), "quantity": 0},
    ],
)
def test_line_item_rejects_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        LineItem(**kwargs)


def test_receipt_from_parsed() -> None:
    parsed = ParsedReceipt(
        store_name="Safeway",
        date=date(2024, 6, 1),
        items=(LineItem(name="Milk", price=Decimal("2.49")),),
        total=Decimal("2.49"),
    )
    receipt = Receipt.from_parsed(parsed, Category.GROCERIES, raw_text="Safeway\nMilk 2.49")

    assert receipt.store_name == "Safeway"
    assert receipt.total_amount == Decimal("2.49")
    assert receipt.items == list(parsed.items)
    assert receipt.tags == []


def test_category_from_value_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        Category.from_value("Pets")
