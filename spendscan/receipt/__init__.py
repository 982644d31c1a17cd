"""Receipt text parsing, categorization and structured-guess adaptation.

Usage:
    from spendscan.receipt import parse_receipt, categorize_receipt

    parsed = parse_receipt(ocr_text)
    category = categorize_receipt(parsed.store_name, parsed.items)
"""

from .categorizer import Categorizer, CategoryRules, build_category_rules, categorize_receipt
from .date_utils import extract_date
from .ocr_parser import LineKind, classify_line, extract_prices, line_price, select_store_name
from .ocr_result_parser import parse_receipt
from .structured_adapter import adapt_structured_receipt, parse_structured_response

__all__ = [
    "Categorizer",
    "CategoryRules",
    "LineKind",
    "adapt_structured_receipt",
    "build_category_rules",
    "categorize_receipt",
    "classify_line",
    "extract_date",
    "extract_prices",
    "line_price",
    "parse_receipt",
    "parse_structured_response",
    "select_store_name",
]
