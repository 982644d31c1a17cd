"""Computed spending snapshots.

These are produced fresh for every aggregation request and never persisted
by the core.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from spendscan.domain.category import Category


class Timeframe(str, Enum):
    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "3-month"
    SIX_MONTHS = "6-month"
    YEAR = "year"


class TrendDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass(frozen=True)
class Insight:
    kind: str  # "warning", "tip" or "success"
    category: str
    message: str


@dataclass(frozen=True)
class Prediction:
    next_month_estimate: Decimal
    reasoning: str


@dataclass(frozen=True)
class Anomaly:
    category: str
    description: str


@dataclass(frozen=True)
class SpendingInsights:
    summary: str
    top_categories: tuple[str, ...] = ()
    insights: tuple[Insight, ...] = ()
    prediction: Prediction | None = None
    recommendations: tuple[str, ...] = ()
    anomalies: tuple[Anomaly, ...] = ()

    @classmethod
    def default(cls) -> SpendingInsights:
        return cls(
            summary="Not enough data to generate insights yet.",
            recommendations=("Start adding receipts to get personalized insights!",),
        )


@dataclass(frozen=True)
class CategoryTrend:
    category: str
    trend: str  # "up", "down" or "stable"
    change: Decimal


@dataclass(frozen=True)
class TrendAnalysis:
    trend: TrendDirection
    percentage_change: Decimal
    analysis: str
    category_trends: tuple[CategoryTrend, ...] = ()
    weekday_pattern: str = ""
    recommendations: tuple[str, ...] = ()

    @classmethod
    def default(cls) -> TrendAnalysis:
        return cls(
            trend=TrendDirection.STABLE,
            percentage_change=Decimal("0"),
            analysis="Not enough historical data for trend analysis.",
            weekday_pattern="No pattern detected yet",
        )


@dataclass(frozen=True)
class SpendingBucket:
    """Receipts summed over one calendar week or month."""

    label: str
    start: date
    total: Decimal
    receipt_count: int
    by_category: dict[Category, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class TrendReport:
    """Deterministic trend input handed to presentation or an analyst."""

    timeframe: Timeframe
    window_start: date
    window_end: date
    buckets: tuple[SpendingBucket, ...]
    percentage_change: Decimal
    direction: TrendDirection
    category_trends: tuple[CategoryTrend, ...] = ()
    weekday_totals: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class CategorySpending:
    category: Category
    spent: Decimal
    limit: Decimal | None = None


@dataclass(frozen=True)
class SpendingSnapshot:
    """Current-month spending prepared for display or summarization."""

    month: date
    rows: tuple[CategorySpending, ...]
    total_spent: Decimal
    transaction_count: int
    top_categories: tuple[Category, ...]
    recent_stores: tuple[str, ...]
