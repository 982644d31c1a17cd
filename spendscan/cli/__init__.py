"""Unified command-line interface for spendscan.

Usage:
    spendscan parse <text-file|->
    spendscan parse <text-file> --json
    spendscan scan <image> [--ocr-url URL] [--extraction-url URL]
    spendscan budget <receipts.csv> <budgets.csv>
    spendscan trend <receipts.csv> [--timeframe week|month|3-month|6-month|year]
    spendscan summary <receipts.csv> [budgets.csv]
"""
