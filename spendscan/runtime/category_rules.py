"""Runtime loader for receipt category keyword rules."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from spendscan.receipt.categorizer import Categorizer, CategoryRules, build_category_rules
from spendscan.runtime.logging import get_logger
from spendscan.runtime.paths import get_paths

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=8)
def load_category_rules(config_path: str | None = None) -> CategoryRules:
    """Load built-in rules plus the user's category_rules.toml, if present."""
    path = Path(config_path) if config_path is not None else get_paths().category_rules
    config = _load_toml(path)
    if config:
        logger.debug("Loaded category rules from %s", path)
    return build_category_rules(configs=(config,))


def get_categorizer(config_path: str | None = None) -> Categorizer:
    """Categorizer using the runtime-configured rule layers."""
    return Categorizer(load_category_rules(config_path))
