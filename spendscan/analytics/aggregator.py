"""Roll receipts and budgets up into spending totals and trends.

All functions here take snapshot inputs and return new values; nothing is
mutated. Empty receipt collections are valid and give zero results. Only
structurally invalid requests (negative limits, inverted periods, duplicate
budgets) raise InvalidAggregationRequest.
"""

from __future__ import annotations

import calendar
import dataclasses
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from spendscan.domain.budget import Budget, BudgetStatus
from spendscan.domain.category import Category
from spendscan.domain.insights import (
    CategoryTrend,
    SpendingBucket,
    Timeframe,
    TrendDirection,
    TrendReport,
)
from spendscan.domain.receipt import Receipt
from spendscan.receipt.date_utils import as_date, month_bounds, shift_months

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
CENTS = Decimal("0.01")

# Changes within +/- this many percent count as stable.
TREND_DEAD_ZONE = Decimal("2")

_LOOKBACK_MONTHS = {
    Timeframe.MONTH: 1,
    Timeframe.THREE_MONTHS: 3,
    Timeframe.SIX_MONTHS: 6,
    Timeframe.YEAR: 12,
}

_CATEGORY_TREND_LABELS = {
    TrendDirection.INCREASING: "up",
    TrendDirection.DECREASING: "down",
    TrendDirection.STABLE: "stable",
}


class InvalidAggregationRequest(ValueError):
    """Raised for aggregation requests that indicate a caller/config mistake."""


def _receipt_category(receipt: Receipt) -> Category:
    category = receipt.category
    if isinstance(category, Category):
        return category
    return Category.from_value(str(category))


def _receipt_amount(receipt: Receipt) -> Decimal:
    amount = receipt.total_amount
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def _in_period(receipts: Iterable[Receipt], start: date, end: date) -> list[Receipt]:
    return [receipt for receipt in receipts if start <= as_date(receipt.date) <= end]


def _percentage(part: Decimal, whole: Decimal) -> Decimal:
    return (part / whole * HUNDRED).quantize(CENTS, rounding=ROUND_HALF_UP)


def spending_by_category(
    receipts: Iterable[Receipt],
    period_start: date | datetime,
    period_end: date | datetime,
) -> dict[Category, Decimal]:
    """
    Sum receipt totals per category for an inclusive day-granularity period.

    Every category is present in the result; categories without spending map
    to zero.
    """
    start = as_date(period_start)
    end = as_date(period_end)
    if start > end:
        raise InvalidAggregationRequest(f"Period start {start} is after period end {end}")

    totals = {category: ZERO for category in Category}
    for receipt in _in_period(receipts, start, end):
        totals[_receipt_category(receipt)] += _receipt_amount(receipt)
    return totals


def _validate_budget(budget: Budget) -> None:
    if budget.monthly_limit < 0:
        raise InvalidAggregationRequest(
            f"Budget for {budget.category.value} has a negative monthly limit: {budget.monthly_limit}"
        )


def budget_status(budget: Budget, receipts: Iterable[Receipt]) -> BudgetStatus:
    """Compare a budget's limit with its category's spending in the budget month."""
    _validate_budget(budget)

    start, end = month_bounds(as_date(budget.month))
    spent = spending_by_category(receipts, start, end)[budget.category]
    limit = budget.monthly_limit

    percentage_used = _percentage(spent, limit) if limit > 0 else Decimal("0")
    return BudgetStatus(
        spent=spent,
        remaining=limit - spent,
        percentage_used=percentage_used,
        over_budget=spent > limit,
    )


def refresh_budget_spending(budgets: Sequence[Budget], receipts: Sequence[Receipt]) -> list[Budget]:
    """Return copies of the budgets with current_spending recomputed from receipts."""
    seen: set[tuple[Category, date]] = set()
    refreshed: list[Budget] = []
    for budget in budgets:
        key = (budget.category, as_date(budget.month).replace(day=1))
        if key in seen:
            raise InvalidAggregationRequest(
                f"More than one budget for {budget.category.value} in {key[1]:%B %Y}"
            )
        seen.add(key)
        status = budget_status(budget, receipts)
        refreshed.append(dataclasses.replace(budget, current_spending=status.spent))
    return refreshed


def lookback_start(timeframe: Timeframe, now: date) -> date:
    """First day included in a timeframe's window ending at now."""
    if timeframe is Timeframe.WEEK:
        return now - timedelta(days=6)
    return shift_months(now, -_LOOKBACK_MONTHS[timeframe])


def _bucket_start(value: date, weekly: bool) -> date:
    if weekly:
        return value - timedelta(days=value.weekday())
    return value.replace(day=1)


def _next_bucket(start: date, weekly: bool) -> date:
    if weekly:
        return start + timedelta(days=7)
    return shift_months(start, 1)


def _bucket_label(start: date, weekly: bool) -> str:
    if weekly:
        iso_year, iso_week, _ = start.isocalendar()
        return f"Week {iso_week}, {iso_year}"
    return f"{calendar.month_name[start.month]} {start.year}"


def _build_buckets(receipts: Sequence[Receipt], start: date, end: date, weekly: bool) -> list[SpendingBucket]:
    grouped: dict[date, list[Receipt]] = {}
    for receipt in receipts:
        grouped.setdefault(_bucket_start(as_date(receipt.date), weekly), []).append(receipt)

    buckets: list[SpendingBucket] = []
    cursor = _bucket_start(start, weekly)
    last = _bucket_start(end, weekly)
    while cursor <= last:
        members = grouped.get(cursor, [])
        by_category: dict[Category, Decimal] = {}
        for receipt in members:
            category = _receipt_category(receipt)
            by_category[category] = by_category.get(category, ZERO) + _receipt_amount(receipt)
        buckets.append(
            SpendingBucket(
                label=_bucket_label(cursor, weekly),
                start=cursor,
                total=sum((_receipt_amount(receipt) for receipt in members), ZERO),
                receipt_count=len(members),
                by_category=by_category,
            )
        )
        cursor = _next_bucket(cursor, weekly)
    return buckets


def percentage_change(first: Decimal, last: Decimal) -> Decimal:
    """Percent change from first to last; zero when first is zero."""
    if first == 0:
        return Decimal("0")
    return _percentage(last - first, first)


def classify_direction(change: Decimal, dead_zone: Decimal = TREND_DEAD_ZONE) -> TrendDirection:
    if change > dead_zone:
        return TrendDirection.INCREASING
    if change < -dead_zone:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def _category_trends(first: SpendingBucket, last: SpendingBucket) -> tuple[CategoryTrend, ...]:
    trends: list[CategoryTrend] = []
    for category in Category:
        before = first.by_category.get(category, ZERO)
        after = last.by_category.get(category, ZERO)
        if before == 0 and after == 0:
            continue
        if before == 0:
            change = HUNDRED
        else:
            change = percentage_change(before, after)
        direction = classify_direction(change)
        trends.append(CategoryTrend(category=category.value, trend=_CATEGORY_TREND_LABELS[direction], change=change))
    return tuple(trends)


def _weekday_totals(receipts: Iterable[Receipt]) -> dict[str, Decimal]:
    totals = {name: ZERO for name in calendar.day_name}
    for receipt in receipts:
        totals[calendar.day_name[as_date(receipt.date).weekday()]] += _receipt_amount(receipt)
    return totals


def trend(receipts: Iterable[Receipt], timeframe: Timeframe | str, now: date | datetime | None = None) -> TrendReport:
    """
    Bucket receipts over a timeframe's lookback window and measure the trend.

    Weekly buckets are used for the week timeframe and calendar months for
    the others. The headline change compares the first and last buckets that
    have spending.
    """
    try:
        timeframe = Timeframe(timeframe)
    except ValueError as exc:
        raise InvalidAggregationRequest(f"Unknown timeframe: {timeframe!r}") from exc

    window_end = as_date(now) if now is not None else date.today()
    window_start = lookback_start(timeframe, window_end)
    weekly = timeframe is Timeframe.WEEK

    in_window = _in_period(receipts, window_start, window_end)
    buckets = _build_buckets(in_window, window_start, window_end, weekly)

    non_empty = [bucket for bucket in buckets if bucket.receipt_count and bucket.total > 0]
    change = Decimal("0")
    category_trends: tuple[CategoryTrend, ...] = ()
    if len(non_empty) >= 2:
        change = percentage_change(non_empty[0].total, non_empty[-1].total)
        category_trends = _category_trends(non_empty[0], non_empty[-1])

    return TrendReport(
        timeframe=timeframe,
        window_start=window_start,
        window_end=window_end,
        buckets=tuple(buckets),
        percentage_change=change,
        direction=classify_direction(change),
        category_trends=category_trends,
        weekday_totals=_weekday_totals(in_window),
    )
