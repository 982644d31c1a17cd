"""Runtime infrastructure for spendscan.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Configuration paths and service URLs via get_paths(), ProjectPaths
- Category rule loading via load_category_rules(), get_categorizer()
- OCR and extraction service clients
- CSV snapshot loading for receipts and budgets

Usage:
    from spendscan.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.category_rules)
"""

from spendscan.runtime.category_rules import get_categorizer, load_category_rules
from spendscan.runtime.extraction_service import (
    ExtractionServiceUnavailable,
    call_extraction_service,
    call_ocr_service,
)
from spendscan.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    parse_log_level,
    set_log_level,
)
from spendscan.runtime.paths import DEFAULT_OCR_URL, ProjectPaths, get_paths, reset_paths
from spendscan.runtime.snapshot import SnapshotError, load_budgets_csv, load_receipts_csv

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "parse_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Rules
    "load_category_rules",
    "get_categorizer",
    # Services
    "ExtractionServiceUnavailable",
    "call_ocr_service",
    "call_extraction_service",
    # Snapshots
    "SnapshotError",
    "load_receipts_csv",
    "load_budgets_csv",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
    "DEFAULT_OCR_URL",
]
