"""Centralized path and service configuration for spendscan.

This module provides a single source of truth for configuration locations,
so runtime loaders do not compute paths on their own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_OCR_URL = "http://localhost:8001"


def _get_config_root() -> Path:
    """Determine the configuration root directory."""
    override = os.environ.get("SPENDSCAN_HOME")
    if override:
        return Path(override).expanduser()
    return Path("~/.config/spendscan").expanduser()


@dataclass
class ProjectPaths:
    """Container for spendscan configuration paths and service endpoints."""

    root: Path = field(default_factory=_get_config_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    @property
    def category_rules(self) -> Path:
        """User category keyword rules TOML file."""
        return self.root / "category_rules.toml"

    @property
    def ocr_url(self) -> str:
        """OCR service base URL (raw text)."""
        return os.environ.get("SPENDSCAN_OCR_URL", DEFAULT_OCR_URL)

    @property
    def extraction_url(self) -> str | None:
        """Structured extraction service base URL, if one is configured."""
        return os.environ.get("SPENDSCAN_EXTRACTION_URL") or None


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the shared ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the shared instance so environment changes are picked up."""
    global _paths
    _paths = None
