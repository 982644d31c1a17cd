from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from spendscan.application.receipts import scan
from spendscan.application.receipts.scan import ReceiptScanRequest, parse_text_receipt, run_receipt_scan
from spendscan.domain.category import Category
from spendscan.runtime.extraction_service import ExtractionServiceUnavailable

TODAY = date(2024, 6, 15)


@pytest.fixture
def receipt_image(tmp_path: Path) -> Path:
    path = tmp_path / "receipt.jpg"
    path.write_bytes(b"fake")
    return path


def _unavailable(*args: object) -> str:
    raise ExtractionServiceUnavailable("Failed to connect to OCR service: refused")


def test_missing_image(tmp_path: Path) -> None:
    result = run_receipt_scan(ReceiptScanRequest(image_path=tmp_path / "nope.jpg", ocr_url="http://ocr"))
    assert result.status == "file_not_found"
    assert result.parsed is None


def test_ocr_only_scan(monkeypatch: pytest.MonkeyPatch, receipt_image: Path, sample_receipt_text: str) -> None:
    monkeypatch.setattr(scan, "call_ocr_service", lambda path, url: sample_receipt_text)

    result = run_receipt_scan(ReceiptScanRequest(image_path=receipt_image, ocr_url="http://ocr", today=TODAY))

    assert result.status == "parsed"
    assert result.source == "ocr"
    assert result.category is Category.GROCERIES
    assert result.parsed is not None
    assert result.parsed.total == Decimal("11.31")
    assert result.raw_text == sample_receipt_text


def test_structured_result_is_preferred(monkeypatch: pytest.MonkeyPatch, receipt_image: Path) -> None:
    monkeypatch.setattr(
        scan,
        "call_extraction_service",
        lambda path, url: '{"storeName": "Starbucks", "date": "06/14/2024", "items": [], "total": 6.45}',
    )
    monkeypatch.setattr(scan, "call_ocr_service", lambda path, url: "Blurry\nLatte 6.45\n")

    result = run_receipt_scan(
        ReceiptScanRequest(image_path=receipt_image, ocr_url="http://ocr", extraction_url="http://vision", today=TODAY)
    )

    assert result.source == "structured"
    assert result.category is Category.DINING
    assert result.parsed is not None
    assert result.parsed.date == date(2024, 6, 14)


def test_empty_structured_result_falls_back_to_ocr(
    monkeypatch: pytest.MonkeyPatch, receipt_image: Path, sample_receipt_text: str
) -> None:
    monkeypatch.setattr(scan, "call_extraction_service", lambda path, url: "not json")
    monkeypatch.setattr(scan, "call_ocr_service", lambda path, url: sample_receipt_text)

    result = run_receipt_scan(
        ReceiptScanRequest(image_path=receipt_image, ocr_url="http://ocr", extraction_url="http://vision", today=TODAY)
    )

    assert result.source == "ocr"
    assert result.parsed is not None
    assert result.parsed.store_name == "Trader Joe's"


def test_extraction_failure_still_uses_ocr(
    monkeypatch: pytest.MonkeyPatch, receipt_image: Path, sample_receipt_text: str
) -> None:
    monkeypatch.setattr(scan, "call_extraction_service", _unavailable)
    monkeypatch.setattr(scan, "call_ocr_service", lambda path, url: sample_receipt_text)

    result = run_receipt_scan(
        ReceiptScanRequest(image_path=receipt_image, ocr_url="http://ocr", extraction_url="http://vision", today=TODAY)
    )

    assert result.status == "parsed"
    assert result.source == "ocr"
    assert result.error is not None


def test_all_sources_unavailable(monkeypatch: pytest.MonkeyPatch, receipt_image: Path) -> None:
    monkeypatch.setattr(scan, "call_ocr_service", _unavailable)

    result = run_receipt_scan(ReceiptScanRequest(image_path=receipt_image, ocr_url="http://ocr"))

    assert result.status == "ocr_unavailable"
    assert "refused" in (result.error or "")


def test_parse_text_receipt(sample_receipt_text: str) -> None:
    result = parse_text_receipt(sample_receipt_text, today=TODAY)

    assert result.status == "parsed"
    assert result.source == "text"
    assert result.category is Category.GROCERIES
    assert result.parsed is not None
    assert len(result.parsed.items) == 3


def test_parse_text_receipt_without_store_name() -> None:
    result = parse_text_receipt("", today=TODAY)

    assert result.parsed is not None
    assert result.parsed.store_name == "Unknown Store"
    assert result.parsed.date_is_placeholder


def test_ocr_scan_without_store_name(monkeypatch: pytest.MonkeyPatch, receipt_image: Path) -> None:
    monkeypatch.setattr(scan, "call_ocr_service", lambda path, url: "Total: 12.50\n")

    result = run_receipt_scan(ReceiptScanRequest(image_path=receipt_image, ocr_url="http://ocr", today=TODAY))

    assert result.status == "parsed"
    assert result.source == "ocr"
    assert result.parsed is not None
    assert result.parsed.store_name == "Unknown Store"
    assert result.parsed.total == Decimal("12.50")
