"""Consumable item types and the ordered name-matching rule tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from autosustain.models.thresholds import ConfigError


class ConsumableCategory(Enum):
    POTION = "Potion"
    JELLYFISH = "Jellyfish"
    FOOD = "Food"

    @classmethod
    def parse(cls, raw: object) -> ConsumableCategory:
        name = str(raw or "").strip().lower()
        for category in cls:
            if category.value.lower() == name:
                return category
        raise ConfigError(f"Unknown consumable category: {raw!r}")


class MatchMode(Enum):
    EXACT = "exact"
    SUBSTRING = "substring"

    @classmethod
    def parse(cls, raw: object) -> MatchMode:
        mode = str(raw or "").strip().lower()
        for match in cls:
            if match.value == mode:
                return match
        raise ConfigError(f"Unknown match mode: {raw!r}")


@dataclass
class ConsumableItem:
    """Inventory items sharing a name and category, collapsed into one entry."""
    name: str
    id: int
    category: ConsumableCategory
    count: int = 1


@dataclass(frozen=True)
class CategoryRule:
    category: ConsumableCategory
    patterns: tuple[str, ...]
    match: MatchMode = MatchMode.EXACT

    def matches(self, name: str) -> bool:
        if self.match == MatchMode.SUBSTRING:
            return any(pattern in name for pattern in self.patterns)
        return name in self.patterns

    @classmethod
    def from_dict(cls, data: dict) -> CategoryRule:
        if not isinstance(data, dict):
            raise ConfigError(f"Category rule must be an object, got {data!r}")
        patterns = data.get("patterns") or []
        if not isinstance(patterns, list):
            raise ConfigError(f"Category patterns must be a list, got {patterns!r}")
        return cls(
            category=ConsumableCategory.parse(data.get("category")),
            patterns=tuple(str(p) for p in patterns if str(p)),
            match=MatchMode.parse(data.get("match", "exact")),
        )

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "match": self.match.value,
            "patterns": list(self.patterns),
        }


HEALTH_POTIONS = (
    "Guthix rest", "Super Guthix brew",
    "Saradomin brew", "Super Saradomin brew",
)

JELLYFISH = (
    "Blue blubber jellyfish", "2/3 blue blubber jellyfish", "1/3 blue blubber jellyfish",
    "Green blubber jellyfish", "2/3 green blubber jellyfish", "1/3 green blubber jellyfish",
)

FOODS = (
    "Kebab", "Bread", "Doughnut", "Roll", "Square sandwich",
    "Crayfish", "Shrimps", "Sardine", "Herring", "Mackerel",
    "Anchovies", "Cooked chicken", "Cooked meat", "Trout", "Cod",
    "Pike", "Salmon", "Tuna", "Bass", "Lobster", "Swordfish",
    "Desert sole", "Catfish", "Monkfish", "Beltfish", "Ghostly sole",
    "Cooked eeligator", "Shark", "Sea turtle", "Great white shark", "Cavefish",
    "Manta ray", "Rocktail", "Tiger shark", "Sailfish", "Baron shark",
    "Potato with cheese", "Tuna potato", "Great maki", "Great gunkan",
    "Rocktail soup", "Sailfish soup", "Fury shark", "Primal feast",
)

PRAYER_POTIONS = (
    "Prayer", "Super restore", "Sanfew",
    "Super prayer", "Spiritual prayer", "Extreme prayer",
    "Blessed flask",
)


def default_health_rules() -> list[CategoryRule]:
    return [
        CategoryRule(ConsumableCategory.POTION, HEALTH_POTIONS, MatchMode.SUBSTRING),
        CategoryRule(ConsumableCategory.JELLYFISH, JELLYFISH, MatchMode.EXACT),
        CategoryRule(ConsumableCategory.FOOD, FOODS, MatchMode.EXACT),
    ]


def default_prayer_rules() -> list[CategoryRule]:
    return [CategoryRule(ConsumableCategory.POTION, PRAYER_POTIONS, MatchMode.SUBSTRING)]
