"""Load receipt and budget snapshots exported as CSV.

Receipts CSV columns: ``date, store_name, total_amount, category`` and
optionally ``id, tags, notes``. Tags are separated by ``;``.

Budgets CSV columns: ``category, monthly_limit, month``; ``month`` may be a
full date or ``YYYY-MM``.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

import pandas as pd

from spendscan.domain.budget import Budget
from spendscan.domain.category import Category
from spendscan.domain.receipt import Receipt
from spendscan.runtime.logging import get_logger

logger = get_logger(__name__)

RECEIPT_COLUMNS = ("date", "store_name", "total_amount", "category")
BUDGET_COLUMNS = ("category", "monthly_limit", "month")

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%Y-%m")


class SnapshotError(ValueError):
    """Raised when a snapshot file is missing columns or has malformed rows."""


def _read_frame(path: Path, required: tuple[str, ...]) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [str(column).strip() for column in df.columns]
    missing = [column for column in required if column not in df.columns]
    if missing:
        raise SnapshotError(f"{path.name}: missing column(s) {', '.join(missing)}")
    return df


def _parse_date(value: str, where: str) -> date:
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise SnapshotError(f"{where}: unrecognized date {value!r}")


def _parse_amount(value: str, where: str) -> Decimal:
    try:
        amount = Decimal(value.strip().lstrip("$").replace(",", ""))
    except InvalidOperation as e:
        raise SnapshotError(f"{where}: invalid amount {value!r}") from e
    if not amount.is_finite():
        raise SnapshotError(f"{where}: invalid amount {value!r}")
    return amount


def _parse_category(value: str, where: str) -> Category:
    try:
        return Category.from_value(value)
    except ValueError as e:
        raise SnapshotError(f"{where}: {e}") from e


def load_receipts_csv(path: str | Path) -> list[Receipt]:
    path = Path(path)
    df = _read_frame(path, RECEIPT_COLUMNS)

    receipts: list[Receipt] = []
    for index, row in df.iterrows():
        where = f"{path.name} row {int(index) + 2}"
        receipt_id = row.get("id", "").strip()
        try:
            parsed_id = uuid.UUID(receipt_id) if receipt_id else uuid.uuid4()
        except ValueError as e:
            raise SnapshotError(f"{where}: invalid id {receipt_id!r}") from e

        tags = [tag.strip() for tag in row.get("tags", "").split(";") if tag.strip()]
        receipts.append(
            Receipt(
                store_name=row["store_name"].strip(),
                date=_parse_date(row["date"], where),
                total_amount=_parse_amount(row["total_amount"], where),
                category=_parse_category(row["category"], where),
                id=parsed_id,
                notes=row.get("notes", "").strip() or None,
                tags=tags,
            )
        )

    logger.debug("Loaded %d receipts from %s", len(receipts), path)
    return receipts


def load_budgets_csv(path: str | Path) -> list[Budget]:
    path = Path(path)
    df = _read_frame(path, BUDGET_COLUMNS)

    budgets: list[Budget] = []
    for index, row in df.iterrows():
        where = f"{path.name} row {int(index) + 2}"
        budgets.append(
            Budget(
                category=_parse_category(row["category"], where),
                monthly_limit=_parse_amount(row["monthly_limit"], where),
                month=_parse_date(row["month"], where).replace(day=1),
            )
        )

    logger.debug("Loaded %d budgets from %s", len(budgets), path)
    return budgets
