"""Current-month spending snapshots and the text payloads built from them.

The formatted payloads are what a natural-language analyst receives; the
analyst itself lives outside this package.
"""

from __future__ import annotations

import calendar
import dataclasses
from collections.abc import Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from spendscan.domain.budget import Budget
from spendscan.domain.category import Category
from spendscan.domain.insights import (
    CategorySpending,
    Insight,
    Prediction,
    SpendingInsights,
    SpendingSnapshot,
    TrendReport,
)
from spendscan.domain.receipt import Receipt
from spendscan.receipt.date_utils import as_date, month_bounds

from .aggregator import CENTS, ZERO, budget_status, spending_by_category

RECENT_STORE_LIMIT = 10
TOP_CATEGORY_LIMIT = 3
WARNING_PERCENT = Decimal("90")
CAUTION_PERCENT = Decimal("75")


def _budget_for(category: Category, month: date, budgets: Sequence[Budget]) -> Budget | None:
    # A budget applies from its own month onward; the most recent one wins.
    target = month.replace(day=1)
    applicable = [
        budget
        for budget in budgets
        if budget.category is category and as_date(budget.month).replace(day=1) <= target
    ]
    if not applicable:
        return None
    return max(applicable, key=lambda budget: as_date(budget.month).replace(day=1))


def monthly_snapshot(
    receipts: Sequence[Receipt],
    budgets: Sequence[Budget] = (),
    today: date | None = None,
) -> SpendingSnapshot:
    """Summarize the month containing today."""
    today = today or date.today()
    start, end = month_bounds(today)
    spent = spending_by_category(receipts, start, end)
    month_receipts = [receipt for receipt in receipts if start <= as_date(receipt.date) <= end]

    rows: list[CategorySpending] = []
    for category in Category:
        budget = _budget_for(category, start, budgets)
        limit = budget.monthly_limit if budget is not None else None
        if spent[category] > 0 or (limit is not None and limit > 0):
            rows.append(CategorySpending(category=category, spent=spent[category], limit=limit))

    ranked = sorted(
        (category for category in Category if spent[category] > 0),
        key=lambda category: spent[category],
        reverse=True,
    )

    recent_stores: list[str] = []
    newest_first = sorted(month_receipts, key=lambda receipt: as_date(receipt.date), reverse=True)
    for receipt in newest_first[:RECENT_STORE_LIMIT]:
        if receipt.store_name and receipt.store_name not in recent_stores:
            recent_stores.append(receipt.store_name)

    return SpendingSnapshot(
        month=start,
        rows=tuple(rows),
        total_spent=sum(spent.values(), ZERO),
        transaction_count=len(month_receipts),
        top_categories=tuple(ranked),
        recent_stores=tuple(recent_stores),
    )


def format_spending_data(snapshot: SpendingSnapshot) -> str:
    """Render a snapshot as the plain-text spending payload."""
    lines = ["Current Month Spending:"]
    for row in snapshot.rows:
        line = f"- {row.category.value}: ${row.spent:.2f}"
        if row.limit is not None and row.limit > 0:
            line += f" / ${row.limit:.2f} budget"
        lines.append(line)

    lines.append("")
    lines.append(f"Total Spending: ${snapshot.total_spent:.2f}")
    lines.append(f"Number of Transactions: {snapshot.transaction_count}")
    if snapshot.recent_stores:
        lines.append(f"Recent Stores: {', '.join(snapshot.recent_stores)}")
    return "\n".join(lines) + "\n"


def format_trend_data(report: TrendReport) -> str:
    """Render a trend report as the plain-text spending-over-time payload."""
    lines = ["Spending Over Time:"]
    for bucket in report.buckets:
        if bucket.receipt_count:
            lines.append(f"- {bucket.label}: ${bucket.total:.2f}")
    return "\n".join(lines) + "\n"


def _projected_month_total(snapshot: SpendingSnapshot, today: date) -> Decimal:
    days_in_month = calendar.monthrange(snapshot.month.year, snapshot.month.month)[1]
    days_elapsed = max(1, min(today.day, days_in_month))
    projected = snapshot.total_spent / days_elapsed * days_in_month
    return projected.quantize(CENTS, rounding=ROUND_HALF_UP)


def build_spending_insights(
    receipts: Sequence[Receipt],
    budgets: Sequence[Budget] = (),
    today: date | None = None,
) -> SpendingInsights:
    """
    Deterministic insights for the current month.

    Used when no analyst is available; falls back to SpendingInsights.default()
    when the month has no receipts.
    """
    today = today or date.today()
    snapshot = monthly_snapshot(receipts, budgets, today)
    if snapshot.transaction_count == 0:
        return SpendingInsights.default()

    insights: list[Insight] = []
    recommendations: list[str] = []
    for category in Category:
        budget = _budget_for(category, snapshot.month, budgets)
        if budget is None:
            continue
        status = budget_status(dataclasses.replace(budget, month=snapshot.month), receipts)
        name = category.value
        if status.over_budget:
            insights.append(Insight("warning", name, f"Over budget by ${-status.remaining:.2f}"))
            recommendations.append(f"Pause non-essential {name.lower()} spending until next month.")
        elif status.percentage_used >= WARNING_PERCENT:
            insights.append(Insight("warning", name, f"{status.percentage_used:.0f}% of budget used"))
        elif status.percentage_used >= CAUTION_PERCENT:
            insights.append(Insight("tip", name, f"{status.percentage_used:.0f}% of budget used"))
        else:
            insights.append(Insight("success", name, f"${status.remaining:.2f} left this month"))

    top = tuple(category.value for category in snapshot.top_categories[:TOP_CATEGORY_LIMIT])
    summary = (
        f"You spent ${snapshot.total_spent:.2f} across {snapshot.transaction_count} receipts "
        f"in {snapshot.month:%B %Y}."
    )
    if top:
        summary += f" Most of it went to {top[0]}."

    return SpendingInsights(
        summary=summary,
        top_categories=top,
        insights=tuple(insights),
        prediction=Prediction(
            next_month_estimate=_projected_month_total(snapshot, today),
            reasoning=f"Daily average of the first {today.day} days carried over the whole month.",
        ),
        recommendations=tuple(recommendations),
    )
