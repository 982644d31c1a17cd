"""Normalize an analyst's JSON reply into insight and trend snapshots.

Replies are model output: fields go missing or come back with the wrong type.
Each field falls back on its own; an undecodable reply gives the default
snapshot.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from spendscan.domain.insights import (
    Anomaly,
    CategoryTrend,
    Insight,
    Prediction,
    SpendingInsights,
    TrendAnalysis,
    TrendDirection,
)
from spendscan.util.json_payload import extract_json_object


def _text(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _number(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return Decimal("0")
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")
    return number if number.is_finite() else Decimal("0")


def _strings(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _records(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def parse_insights_response(content: str) -> SpendingInsights:
    data = extract_json_object(content)
    if data is None:
        return SpendingInsights.default()

    insights = tuple(
        Insight(
            kind=_text(item.get("type"), "tip"),
            category=_text(item.get("category")),
            message=_text(item.get("message")),
        )
        for item in _records(data.get("insights"))
    )

    prediction = None
    predictions = data.get("predictions")
    if isinstance(predictions, dict):
        prediction = Prediction(
            next_month_estimate=_number(predictions.get("nextMonthEstimate")),
            reasoning=_text(predictions.get("reasoning")),
        )

    anomalies = tuple(
        Anomaly(category=_text(item.get("category")), description=_text(item.get("description")))
        for item in _records(data.get("anomalies"))
    )

    return SpendingInsights(
        summary=_text(data.get("summary"), "No insights available"),
        top_categories=_strings(data.get("topCategories")),
        insights=insights,
        prediction=prediction,
        recommendations=_strings(data.get("recommendations")),
        anomalies=anomalies,
    )


def parse_trend_response(content: str) -> TrendAnalysis:
    data = extract_json_object(content)
    if data is None:
        return TrendAnalysis.default()

    try:
        direction = TrendDirection(_text(data.get("trend"), "stable").lower())
    except ValueError:
        direction = TrendDirection.STABLE

    category_trends = tuple(
        CategoryTrend(
            category=_text(item.get("category")),
            trend=_text(item.get("trend"), "stable"),
            change=_number(item.get("change")),
        )
        for item in _records(data.get("categoryTrends"))
    )

    return TrendAnalysis(
        trend=direction,
        percentage_change=_number(data.get("percentageChange")),
        analysis=_text(data.get("analysis"), "No trend analysis available"),
        category_trends=category_trends,
        weekday_pattern=_text(data.get("weekdayPattern")),
        recommendations=_strings(data.get("recommendations")),
    )
