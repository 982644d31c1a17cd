from decimal import Decimal

import pytest
from spendscan.receipt.ocr_parser.common import clean_item_name, extract_prices, line_price, strip_prices


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Bananas 1.99", [Decimal("1.99")]),
        ("Almond Milk $3.49", [Decimal("3.49")]),
        ("Steak $ 12.50", [Decimal("12.50")]),
        ("2 @ 1.50 3.00", [Decimal("1.50"), Decimal("3.00")]),
        ("Coupon 0.00", []),
        ("Store #1234", []),
        ("Price 1.5", []),
        ("", []),
    ],
)
def test_extract_prices(line: str, expected: list[Decimal]) -> None:
    assert extract_prices(line) == expected


def test_dollar_price_is_counted_once() -> None:
    assert extract_prices("Milk $3.49") == [Decimal("3.49")]


def test_line_price_is_rightmost_amount() -> None:
    assert line_price("2 @ 1.50 3.00") == Decimal("3.00")
    assert line_price("no prices here") is None


def test_strip_prices_removes_both_forms() -> None:
    assert strip_prices("Milk $3.49 and 2.00").split() == ["Milk", "and"]


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Bananas 1.99", ("Bananas", 1)),
        ("2 x Yogurt   4.50", ("Yogurt", 2)),
        ("3X Apples 2.97", ("Apples", 3)),
        ("12 Donuts 9.99", ("Donuts", 1)),
        ("Almond    Milk $3.49", ("Almond Milk", 1)),
    ],
)
def test_clean_item_name(line: str, expected: tuple[str, int]) -> None:
    assert clean_item_name(line) == expected
