"""Spending aggregation over receipt and budget snapshots.

Usage:
    from spendscan.analytics import budget_status, spending_by_category, trend
"""

from .aggregator import (
    TREND_DEAD_ZONE,
    InvalidAggregationRequest,
    budget_status,
    classify_direction,
    lookback_start,
    percentage_change,
    refresh_budget_spending,
    spending_by_category,
    trend,
)
from .responses import parse_insights_response, parse_trend_response
from .summary import build_spending_insights, format_spending_data, format_trend_data, monthly_snapshot

__all__ = [
    "TREND_DEAD_ZONE",
    "InvalidAggregationRequest",
    "budget_status",
    "build_spending_insights",
    "classify_direction",
    "format_spending_data",
    "format_trend_data",
    "lookback_start",
    "monthly_snapshot",
    "parse_insights_response",
    "parse_trend_response",
    "percentage_change",
    "refresh_budget_spending",
    "spending_by_category",
    "trend",
]
