from datetime import date
from decimal import Decimal

import pytest
from spendscan.domain.category import Category
from spendscan.domain.receipt import LineItem
from spendscan.receipt.categorizer import Categorizer, build_category_rules, categorize_receipt
from spendscan.receipt.ocr_result_parser import parse_receipt


@pytest.mark.parametrize(
    ("store_name", "expected"),
    [
        ("Trader Joe's", Category.GROCERIES),
        ("WHOLE FOODS MARKET", Category.GROCERIES),
        ("Starbucks Coffee", Category.DINING),
        ("Shell Station #42", Category.TRANSPORT),
        ("AMC Cinema 12", Category.ENTERTAINMENT),
        ("CVS/pharmacy", Category.HEALTH),
        ("Best Buy", Category.OTHER),
    ],
)
def test_store_rules(store_name: str, expected: Category) -> None:
    assert categorize_receipt(store_name) is expected


def test_store_rule_order_decides_conflicts() -> None:
    # "market" (Groceries) is checked before "cafe" (Dining).
    assert categorize_receipt("Market Cafe") is Category.GROCERIES


def test_item_rules_apply_when_store_is_unknown() -> None:
    items = [LineItem(name="Whole Grain Bread", price=Decimal("3.99"))]
    assert categorize_receipt("Neighborhood Shop", items) is Category.GROCERIES


def test_store_rules_win_over_items() -> None:
    items = [LineItem(name="Milk", price=Decimal("2.49"))]
    assert categorize_receipt("Pizza Palace", items) is Category.DINING


def test_accepts_item_mappings() -> None:
    assert categorize_receipt("Corner Shop", [{"name": "EGGS DOZEN"}]) is Category.GROCERIES


def test_empty_input_is_other() -> None:
    assert categorize_receipt("") is Category.OTHER


def test_extra_rules_are_appended_after_builtins() -> None:
    rules = build_category_rules(
        [
            {
                "rules": [
                    {"category": "Utilities", "keywords": ["hydro", "comcast"]},
                    {"category": "Shopping", "keywords": "target"},
                    {"category": "Dining", "keywords": ["sandwich"], "source": "items"},
                    # "market" is already claimed by Groceries.
                    {"category": "Shopping", "keywords": ["market"]},
                ]
            }
        ]
    )
    categorizer = Categorizer(rules)

    assert categorizer.categorize("Toronto Hydro") is Category.UTILITIES
    assert categorizer.categorize("TARGET T-1234") is Category.SHOPPING
    assert categorizer.categorize("Farmers Market") is Category.GROCERIES
    assert (
        categorizer.categorize("Corner Shop", [LineItem(name="Turkey Sandwich", price=Decimal("6.00"))])
        is Category.DINING
    )


def test_invalid_extra_rules_are_skipped() -> None:
    rules = build_category_rules(
        [
            {
                "rules": [
                    {"category": "Pets", "keywords": ["petco"]},
                    {"category": "Shopping", "keywords": ["ikea"], "source": "receipt"},
                    {"category": "Shopping", "keywords": []},
                    "not a rule",
                ]
            }
        ]
    )
    assert rules == build_category_rules()


def test_digit_leading_store_name_categorizes(fixed_today: date) -> None:
    parsed = parse_receipt("99 Ranch Market\nSan Jose CA\nRice 12.99\nTOTAL 12.99\n", today=fixed_today)
    assert categorize_receipt(parsed.store_name, parsed.items) is Category.GROCERIES
