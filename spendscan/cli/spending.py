"""Spending report command handlers used by the unified CLI."""

import argparse
import sys
from datetime import date

from spendscan.analytics import (
    InvalidAggregationRequest,
    budget_status,
    build_spending_insights,
    format_spending_data,
    format_trend_data,
    monthly_snapshot,
    trend,
)
from spendscan.domain.budget import Budget
from spendscan.domain.receipt import Receipt
from spendscan.runtime import SnapshotError, get_logger, load_budgets_csv, load_receipts_csv

logger = get_logger(__name__)


def _load_receipts(path: str) -> list[Receipt]:
    try:
        return load_receipts_csv(path)
    except FileNotFoundError:
        print(f"Error: Receipts file not found: {path}")
        sys.exit(1)
    except SnapshotError as exc:
        print(f"Error: {exc}")
        sys.exit(1)


def _load_budgets(path: str | None) -> list[Budget]:
    if path is None:
        return []
    try:
        return load_budgets_csv(path)
    except FileNotFoundError:
        print(f"Error: Budgets file not found: {path}")
        sys.exit(1)
    except SnapshotError as exc:
        print(f"Error: {exc}")
        sys.exit(1)


def _parse_day(value: str | None) -> date:
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        print(f"Error: invalid date {value!r} (expected YYYY-MM-DD)")
        sys.exit(2)


def cmd_budget(args: argparse.Namespace) -> None:
    """Show spent / limit for each budget in its month."""
    receipts = _load_receipts(args.receipts)
    budgets = _load_budgets(args.budgets)
    if not budgets:
        print("No budgets defined.")
        return

    print(f"{'Category':<15} {'Month':<10} {'Spent':>10} {'Limit':>10} {'Used':>8}")
    for budget in budgets:
        try:
            status = budget_status(budget, receipts)
        except InvalidAggregationRequest as exc:
            print(f"Error: {exc}")
            sys.exit(1)
        flag = "  OVER" if status.over_budget else ""
        print(
            f"{budget.category.value:<15} {budget.month:%Y-%m}    "
            f"{status.spent:>10.2f} {budget.monthly_limit:>10.2f} {status.percentage_used:>7.2f}%{flag}"
        )


def cmd_trend(args: argparse.Namespace) -> None:
    """Show bucketed spending and the trend over a timeframe."""
    receipts = _load_receipts(args.receipts)
    try:
        report = trend(receipts, args.timeframe, now=_parse_day(args.now))
    except InvalidAggregationRequest as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    print(format_trend_data(report), end="")
    print(f"\nTrend: {report.direction.value} ({report.percentage_change:+.2f}%)")
    for category_trend in report.category_trends:
        print(f"  {category_trend.category}: {category_trend.trend} ({category_trend.change:+.2f}%)")


def cmd_summary(args: argparse.Namespace) -> None:
    """Show the current month's spending and deterministic insights."""
    receipts = _load_receipts(args.receipts)
    budgets = _load_budgets(args.budgets)
    today = _parse_day(args.today)

    try:
        snapshot = monthly_snapshot(receipts, budgets, today)
        insights = build_spending_insights(receipts, budgets, today)
    except InvalidAggregationRequest as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    print(format_spending_data(snapshot))
    print(insights.summary)
    for insight in insights.insights:
        print(f"  [{insight.kind}] {insight.category}: {insight.message}")
    if insights.prediction is not None:
        print(f"Projected month total: ${insights.prediction.next_month_estimate:.2f}")
    for recommendation in insights.recommendations:
        print(f"  - {recommendation}")
