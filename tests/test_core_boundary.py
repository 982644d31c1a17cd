"""Architecture boundary checks for the pure core packages."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

PACKAGE_DIR = Path(__file__).resolve().parents[1] / "spendscan"
CORE_PACKAGES = ("domain", "receipt", "analytics", "util")
FORBIDDEN_PREFIXES = ("spendscan.runtime", "spendscan.application", "spendscan.cli", "httpx", "pandas")


def _imports(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    result: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                result.append(alias.name)
        elif isinstance(node, ast.ImportFrom):
            base = "." * node.level + (node.module or "")
            result.append(base)
    return result


@pytest.mark.parametrize("package", CORE_PACKAGES)
def test_core_does_not_import_io_layers(package: str) -> None:
    package_dir = PACKAGE_DIR / package
    assert package_dir.exists(), f"Missing package directory: {package_dir}"

    violations: list[str] = []
    for path in sorted(package_dir.rglob("*.py")):
        for mod in _imports(path):
            if any(mod == prefix or mod.startswith(f"{prefix}.") for prefix in FORBIDDEN_PREFIXES):
                violations.append(f"{path}: {mod}")
    assert not violations, "Core -> I/O layer import violations:\n" + "\n".join(violations)


def test_util_does_not_import_spendscan() -> None:
    violations: list[str] = []
    for path in sorted((PACKAGE_DIR / "util").rglob("*.py")):
        for mod in _imports(path):
            if mod == "spendscan" or mod.startswith("spendscan.") or mod.startswith(".."):
                violations.append(f"{path}: {mod}")
    assert not violations, "Util import rule violations:\n" + "\n".join(violations)
