"""Shared pytest fixtures for spendscan tests."""

from __future__ import annotations

from datetime import date

import pytest

SAMPLE_RECEIPT_TEXT = """\
Trader Joe's
123 Main St
Date: 05/10/2024

Bananas 1.99
Almond Milk $3.49
Organic Eggs 4.99

SUBTOTAL 10.47
Tax $0.84
TOTAL $11.31
"""


@pytest.fixture
def sample_receipt_text() -> str:
    return SAMPLE_RECEIPT_TEXT


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 6, 15)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Point the config root at an empty directory and clear service URLs."""
    from spendscan.runtime.category_rules import load_category_rules
    from spendscan.runtime.paths import reset_paths

    monkeypatch.setenv("SPENDSCAN_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("SPENDSCAN_OCR_URL", raising=False)
    monkeypatch.delenv("SPENDSCAN_EXTRACTION_URL", raising=False)
    reset_paths()
    load_category_rules.cache_clear()
    yield
    reset_paths()
    load_category_rules.cache_clear()
