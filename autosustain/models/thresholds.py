"""Threshold tiers for health and prayer, with defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

NORMAL = "normal"
CRITICAL = "critical"
SPECIAL = "special"


class ConfigError(ValueError):
    """Raised while loading configuration; never raised during a tick."""


class ThresholdKind(Enum):
    PERCENT = "percent"
    ABSOLUTE = "current"

    @classmethod
    def parse(cls, raw: object) -> ThresholdKind:
        kind = str(raw or "").strip().lower()
        if kind == "percent":
            return cls.PERCENT
        if kind in ("current", "absolute"):
            return cls.ABSOLUTE
        raise ConfigError(f"Unknown threshold type: {raw!r}")


@dataclass(frozen=True)
class ThresholdTier:
    kind: ThresholdKind
    value: float

    @classmethod
    def from_dict(cls, data: dict) -> ThresholdTier:
        if not isinstance(data, dict):
            raise ConfigError(f"Threshold tier must be an object, got {data!r}")
        value = data.get("value")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"Threshold value must be a number, got {value!r}")
        return cls(kind=ThresholdKind.parse(data.get("type")), value=value)

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "value": self.value}


@dataclass(frozen=True)
class ThresholdSet:
    """Named tiers attached to one metric; read-only at runtime."""
    tiers: dict[str, ThresholdTier] = field(default_factory=dict)

    def get(self, name: str) -> ThresholdTier | None:
        return self.tiers.get(name)

    def names(self) -> list[str]:
        return list(self.tiers)

    @classmethod
    def from_dict(cls, data: dict) -> ThresholdSet:
        if not isinstance(data, dict):
            raise ConfigError(f"Threshold set must be an object, got {data!r}")
        return cls(tiers={str(name): ThresholdTier.from_dict(raw) for name, raw in data.items()})

    def to_dict(self) -> dict:
        return {name: tier.to_dict() for name, tier in self.tiers.items()}


def default_health_thresholds() -> ThresholdSet:
    return ThresholdSet(
        tiers={
            NORMAL: ThresholdTier(ThresholdKind.PERCENT, 50),
            CRITICAL: ThresholdTier(ThresholdKind.PERCENT, 25),
            SPECIAL: ThresholdTier(ThresholdKind.PERCENT, 75),
        }
    )


def default_prayer_thresholds() -> ThresholdSet:
    return ThresholdSet(
        tiers={
            NORMAL: ThresholdTier(ThresholdKind.ABSOLUTE, 200),
            CRITICAL: ThresholdTier(ThresholdKind.PERCENT, 10),
            SPECIAL: ThresholdTier(ThresholdKind.ABSOLUTE, 600),
        }
    )
