from datetime import date
from decimal import Decimal

from spendscan.receipt.ocr_result_parser import parse_receipt


def test_parse_sample_receipt(sample_receipt_text: str, fixed_today: date) -> None:
    parsed = parse_receipt(sample_receipt_text, today=fixed_today)

    assert parsed.store_name == "Trader Joe's"
    assert parsed.date == date(2024, 5, 10)
    assert not parsed.date_is_placeholder
    assert [(item.name, item.price) for item in parsed.items] == [
        ("Bananas", Decimal("1.99")),
        ("Almond Milk", Decimal("3.49")),
        ("Organic Eggs", Decimal("4.99")),
    ]
    assert parsed.subtotal == Decimal("10.47")
    assert parsed.tax == Decimal("0.84")
    assert parsed.total == Decimal("11.31")


def test_parse_is_deterministic_for_fixed_today(sample_receipt_text: str, fixed_today: date) -> None:
    assert parse_receipt(sample_receipt_text, today=fixed_today) == parse_receipt(
        sample_receipt_text, today=fixed_today
    )


def test_missing_total_sums_items_and_tax(fixed_today: date) -> None:
    parsed = parse_receipt("Corner Deli\nSandwich 7.50\nSoda 1.25\nTax 0.70\n", today=fixed_today)
    assert parsed.total == Decimal("9.45")


def test_missing_total_uses_subtotal_plus_tax(fixed_today: date) -> None:
    parsed = parse_receipt("Corner Deli\nSubtotal 8.75\nTax 0.70\n", today=fixed_today)
    assert parsed.items == ()
    assert parsed.total == Decimal("9.45")


def test_tax_only_receipt_totals_zero(fixed_today: date) -> None:
    parsed = parse_receipt("Corner Deli\nTax 0.70\n", today=fixed_today)
    assert parsed.total == Decimal("0.00")


def test_no_date_falls_back_to_today(fixed_today: date) -> None:
    parsed = parse_receipt("Corner Deli\nSandwich 7.50\n", today=fixed_today)
    assert parsed.date == fixed_today
    assert parsed.date_is_placeholder


def test_last_date_wins(fixed_today: date) -> None:
    text = "Corner Deli\n01/02/2024\nSandwich 7.50\nPrinted 01/03/2024\n"
    assert parse_receipt(text, today=fixed_today).date == date(2024, 1, 3)


def test_quantity_marker_is_recorded(fixed_today: date) -> None:
    parsed = parse_receipt("Corner Deli\n2 x Bagel 3.00\n", today=fixed_today)
    assert parsed.items[0].name == "Bagel"
    assert parsed.items[0].quantity == 2
    assert parsed.items[0].price == Decimal("3.00")


def test_noise_lines_are_not_items(fixed_today: date) -> None:
    text = "Corner Deli\nSandwich 7.50\nVISA 7.50\nChange 0.00\nThank you 1.00\nX 2.00\n"
    parsed = parse_receipt(text, today=fixed_today)
    assert [item.name for item in parsed.items] == ["Sandwich"]


def test_empty_text(fixed_today: date) -> None:
    parsed = parse_receipt("", today=fixed_today)
    assert parsed.store_name == ""
    assert parsed.items == ()
    assert parsed.total == Decimal("0.00")
    assert parsed.is_empty


def test_store_name_starting_with_digit_is_kept(fixed_today: date) -> None:
    parsed = parse_receipt("99 Ranch Market\nSan Jose CA\nRice 12.99\nTOTAL 12.99\n", today=fixed_today)

    assert parsed.store_name == "99 Ranch Market"
    assert parsed.total == Decimal("12.99")
