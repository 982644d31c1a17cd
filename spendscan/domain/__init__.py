"""Core domain models for spendscan.

This module provides the data models used throughout the project:
- LineItem, ParsedReceipt, Receipt: receipt scanning models
- Category: closed set of spending categories
- Budget, BudgetStatus: monthly budgets
- SpendingInsights, TrendAnalysis, TrendReport, SpendingSnapshot: aggregation outputs

Usage:
    from spendscan.domain import Category, ParsedReceipt, Receipt
"""

from spendscan.domain.budget import Budget, BudgetStatus
from spendscan.domain.category import Category
from spendscan.domain.insights import (
    Anomaly,
    CategorySpending,
    CategoryTrend,
    Insight,
    Prediction,
    SpendingBucket,
    SpendingInsights,
    SpendingSnapshot,
    Timeframe,
    TrendAnalysis,
    TrendDirection,
    TrendReport,
)
from spendscan.domain.receipt import LineItem, ParsedReceipt, Receipt

__all__ = [
    "Anomaly",
    "Budget",
    "BudgetStatus",
    "Category",
    "CategorySpending",
    "CategoryTrend",
    "Insight",
    "LineItem",
    "ParsedReceipt",
    "Prediction",
    "Receipt",
    "SpendingBucket",
    "SpendingInsights",
    "SpendingSnapshot",
    "Timeframe",
    "TrendAnalysis",
    "TrendDirection",
    "TrendReport",
]
