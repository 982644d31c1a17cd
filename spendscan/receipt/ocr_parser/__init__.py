"""Composable OCR receipt parser components."""

from .common import clean_item_name, extract_prices, line_price, strip_prices
from .fields_parser import EXCLUDE_KEYWORDS, LineKind, classify_line, select_store_name

__all__ = [
    "EXCLUDE_KEYWORDS",
    "LineKind",
    "classify_line",
    "clean_item_name",
    "extract_prices",
    "line_price",
    "select_store_name",
    "strip_prices",
]
