"""Spending categories."""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """Closed set of spending categories.

    Values are the display names; icon and color are stable identifiers used
    by presentation layers.
    """

    GROCERIES = "Groceries"
    DINING = "Dining"
    SHOPPING = "Shopping"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    HEALTH = "Health"
    UTILITIES = "Utilities"
    OTHER = "Other"

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @property
    def color(self) -> str:
        return _COLORS[self]

    @classmethod
    def from_value(cls, value: str) -> Category:
        """Parse a display name or member name, case-insensitively."""
        needle = value.strip().lower()
        for member in cls:
            if needle in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown category: {value!r}")


_ICONS = {
    Category.GROCERIES: "cart.fill",
    Category.DINING: "fork.knife",
    Category.SHOPPING: "bag.fill",
    Category.TRANSPORT: "car.fill",
    Category.ENTERTAINMENT: "tv.fill",
    Category.HEALTH: "heart.fill",
    Category.UTILITIES: "bolt.fill",
    Category.OTHER: "questionmark.circle.fill",
}

_COLORS = {
    Category.GROCERIES: "green",
    Category.DINING: "orange",
    Category.SHOPPING: "pink",
    Category.TRANSPORT: "blue",
    Category.ENTERTAINMENT: "purple",
    Category.HEALTH: "red",
    Category.UTILITIES: "yellow",
    Category.OTHER: "gray",
}
