"""Monthly budget model."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from spendscan.domain.category import Category


@dataclass(frozen=True)
class Budget:
    """Spending limit for one category in one calendar month.

    ``current_spending`` is a cache; recompute it with
    ``spendscan.analytics.refresh_budget_spending`` rather than trusting it.
    """

    category: Category
    monthly_limit: Decimal
    month: date
    current_spending: Decimal = Decimal("0.00")
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def month_start(self) -> date:
        return self.month.replace(day=1)


@dataclass(frozen=True)
class BudgetStatus:
    """Spending of one budget's category within the budget's month."""

    spent: Decimal
    remaining: Decimal
    percentage_used: Decimal
    over_budget: bool
