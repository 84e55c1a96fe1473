"""Consumable classifier: sorts raw inventory slots into categorized, counted items.

Rebuilt from the snapshot every tick; nothing is cached across ticks, so items
that have been used up simply disappear from the next result.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from autosustain.models import (
    CategoryRule,
    ConsumableCategory,
    ConsumableItem,
    InventorySlot,
)

_MARKUP_RE = re.compile(r"<[^>]*>")


def strip_markup(name: str) -> str:
    """Remove colour tags such as '<col=f8d56b>' from an item name."""
    return _MARKUP_RE.sub("", name or "").strip()


def match_category(name: str, rules: Sequence[CategoryRule]) -> Optional[ConsumableCategory]:
    """Return the category of the first rule matching name, scanning in table order."""
    for rule in rules:
        if rule.matches(name):
            return rule.category
    return None


def _is_classifiable(slot: InventorySlot) -> bool:
    # Stacks (size > 1) are counters, not single consumable items
    return not slot.is_empty and slot.size == 1


def _add_item(items: list[ConsumableItem], name: str, item_id: int, category: ConsumableCategory) -> None:
    for item in items:
        if item.name == name and item.category == category:
            item.count += 1
            return
    items.append(ConsumableItem(name=name, id=item_id, category=category, count=1))


def classify(slots: Iterable[InventorySlot], rules: Sequence[CategoryRule]) -> list[ConsumableItem]:
    items: list[ConsumableItem] = []
    for slot in slots:
        if not _is_classifiable(slot):
            continue
        name = strip_markup(slot.name)
        category = match_category(name, rules)
        if category is not None:
            _add_item(items, name, slot.item_id, category)
    return items


def filter_category(items: Iterable[ConsumableItem], category: ConsumableCategory) -> list[ConsumableItem]:
    return [item for item in items if item.category == category]


def total_count(items: Iterable[ConsumableItem]) -> int:
    return sum(item.count for item in items)
