"""Receipt categorization rules.

This module maps a store name and its line items to one spending category
using keyword containment on lowercased text.

Rule order is significant:
1. Store-name rules, in the order listed in STORE_RULES (first match wins)
2. Item-content rules over all item names joined by single spaces
3. Category.OTHER

To add keywords without touching this file, drop a category_rules.toml into
the config directory (see spendscan.runtime.category_rules). Extra rules are
appended after the built-ins, so they never change what a built-in keyword
already decides.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from spendscan.domain.category import Category
from spendscan.domain.receipt import LineItem

logger = logging.getLogger(__name__)

RuleEntry = tuple[Category, tuple[str, ...]]

STORE_RULES: tuple[RuleEntry, ...] = (
    (Category.GROCERIES, ("grocery", "market", "whole foods", "trader joe", "safeway", "walmart")),
    (Category.DINING, ("restaurant", "cafe", "coffee", "pizza", "burger", "starbucks")),
    (Category.TRANSPORT, ("gas", "shell", "chevron", "uber", "lyft")),
    (Category.ENTERTAINMENT, ("movie", "theater", "cinema")),
    (Category.HEALTH, ("pharmacy", "cvs", "walgreens", "hospital", "clinic")),
)

ITEM_RULES: tuple[RuleEntry, ...] = ((Category.GROCERIES, ("milk", "bread", "eggs")),)


@dataclass(frozen=True)
class CategoryRules:
    """Ordered store-name and item-content keyword rules."""

    store_rules: tuple[RuleEntry, ...] = STORE_RULES
    item_rules: tuple[RuleEntry, ...] = ITEM_RULES


def _normalize_keywords(raw: Any) -> tuple[str, ...]:
    """Normalize a keywords value from TOML into a lowercase tuple."""
    if isinstance(raw, str):
        value = raw.strip().lower()
        return (value,) if value else tuple()
    if isinstance(raw, list):
        return tuple(str(v).strip().lower() for v in raw if str(v).strip())
    return tuple()


def build_category_rules(configs: Sequence[Mapping[str, Any]] | None = None) -> CategoryRules:
    """Merge built-in rules with extra in-memory rule layers.

    Each config is a mapping with a ``rules`` list; every rule has a
    ``category``, ``keywords`` and optionally ``source`` ("store", the
    default, or "items"). Invalid rules are skipped with a warning.
    """
    store_rules: list[RuleEntry] = list(STORE_RULES)
    item_rules: list[RuleEntry] = list(ITEM_RULES)

    for config in configs or ():
        for rule in config.get("rules", []):
            if not isinstance(rule, Mapping):
                continue
            keywords = _normalize_keywords(rule.get("keywords"))
            if not keywords:
                continue
            try:
                category = Category.from_value(str(rule.get("category", "")))
            except ValueError:
                logger.warning("Skipping category rule with unknown category: %r", rule.get("category"))
                continue

            source = str(rule.get("source", "store")).strip().lower()
            if source == "items":
                item_rules.append((category, keywords))
            elif source == "store":
                store_rules.append((category, keywords))
            else:
                logger.warning("Skipping category rule with unknown source: %r", source)

    return CategoryRules(store_rules=tuple(store_rules), item_rules=tuple(item_rules))


def _item_name(item: Any) -> str:
    """Accept LineItem objects, {"name": ...} mappings or (name, price) pairs."""
    if isinstance(item, Mapping):
        return str(item.get("name") or "")
    if isinstance(item, str):
        return item
    if isinstance(item, tuple) and item:
        return str(item[0])
    return str(getattr(item, "name", "") or "")


def _first_match(text: str, rules: Iterable[RuleEntry]) -> Category | None:
    for category, keywords in rules:
        if any(keyword in text for keyword in keywords):
            return category
    return None


class Categorizer:
    """Stateless keyword categorizer; safe to share between callers."""

    def __init__(self, rules: CategoryRules | None = None) -> None:
        self.rules = rules or CategoryRules()

    def categorize(self, store_name: str, items: Sequence[LineItem] = ()) -> Category:
        """Return the category for a store name and its items."""
        store = (store_name or "").lower()
        category = _first_match(store, self.rules.store_rules)
        if category is not None:
            logger.debug("Store rule matched for '%s': %s", store_name, category.value)
            return category

        item_text = " ".join(_item_name(item).lower() for item in items)
        category = _first_match(item_text, self.rules.item_rules)
        if category is not None:
            logger.debug("Item rule matched for '%s': %s", store_name, category.value)
            return category

        return Category.OTHER


_DEFAULT_CATEGORIZER = Categorizer()


def categorize_receipt(store_name: str, items: Sequence[LineItem] = ()) -> Category:
    """Categorize with the built-in rules only."""
    return _DEFAULT_CATEGORIZER.categorize(store_name, items)
