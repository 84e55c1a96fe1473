"""Engine configuration with JSON load/save and management overrides."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union

from autosustain.models.actions import ELVEN_SHARD, EXCALIBUR, ActionKind, SpecialItem
from autosustain.models.consumables import (
    CategoryRule,
    default_health_rules,
    default_prayer_rules,
)
from autosustain.models.thresholds import (
    ConfigError,
    ThresholdSet,
    default_health_thresholds,
    default_prayer_thresholds,
)


@dataclass(frozen=True)
class StaticOverride:
    value: bool = False

    def resolve(self) -> bool:
        return self.value


@dataclass(frozen=True)
class DynamicOverride:
    """Override decided by a predicate, resolved once at the start of each tick."""
    predicate: Callable[[], bool]

    def resolve(self) -> bool:
        return bool(self.predicate())


Override = Union[StaticOverride, DynamicOverride]


def as_override(raw: object) -> Override:
    """Wrap a bool or predicate (or an existing override) as an Override."""
    if isinstance(raw, (StaticOverride, DynamicOverride)):
        return raw
    if raw is None:
        return StaticOverride(False)
    if isinstance(raw, bool):
        return StaticOverride(raw)
    if callable(raw):
        return DynamicOverride(raw)
    raise ConfigError(f"Override must be a boolean or a callable, got {raw!r}")


def _parse_rules(raw: object, fallback: list[CategoryRule]) -> list[CategoryRule]:
    if raw is None:
        return fallback
    if not isinstance(raw, list):
        raise ConfigError(f"Category rules must be a list, got {raw!r}")
    return [CategoryRule.from_dict(r) for r in raw]


def _parse_windows(raw: object) -> dict[ActionKind, int]:
    if not isinstance(raw, dict):
        raise ConfigError(f"Cooldown windows must be an object, got {raw!r}")
    windows: dict[ActionKind, int] = {}
    for key, value in raw.items():
        try:
            kind = ActionKind(str(key).strip().lower())
        except ValueError:
            raise ConfigError(f"Unknown action kind in cooldown windows: {key!r}") from None
        windows[kind] = int(value)
    return windows


@dataclass
class EngineConfig:
    """Runtime engine configuration."""
    health_thresholds: ThresholdSet = field(default_factory=default_health_thresholds)
    prayer_thresholds: ThresholdSet = field(default_factory=default_prayer_thresholds)
    override_health_management: Override = field(default_factory=StaticOverride)
    override_prayer_management: Override = field(default_factory=StaticOverride)
    override_buff_management: Override = field(default_factory=StaticOverride)
    health_rules: list[CategoryRule] = field(default_factory=default_health_rules)
    prayer_rules: list[CategoryRule] = field(default_factory=default_prayer_rules)
    excalibur: SpecialItem = EXCALIBUR
    elven_shard: SpecialItem = ELVEN_SHARD
    # Ticks that must pass after a fire; 1 blocks the same and the next tick
    cooldown_window: int = 1
    cooldown_windows: dict[ActionKind, int] = field(default_factory=dict)
    tick_interval_ms: int = 600
    # Pause after each accepted consume so the host registers it
    settle_delay_ms: int = 60
    # Global hotkey that pauses/resumes the tick loop; empty = not set
    pause_bind: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> EngineConfig:
        if not isinstance(data, dict):
            raise ConfigError("Config root must be an object")
        thresholds = data.get("thresholds", {})
        overrides = data.get("overrides", {})
        categories = data.get("categories", {})
        specials = data.get("special_items", {})
        cooldowns = data.get("cooldowns", {})
        timing = data.get("timing", {})
        health = thresholds.get("health")
        prayer = thresholds.get("prayer")
        return cls(
            health_thresholds=(
                ThresholdSet.from_dict(health) if health is not None else default_health_thresholds()
            ),
            prayer_thresholds=(
                ThresholdSet.from_dict(prayer) if prayer is not None else default_prayer_thresholds()
            ),
            override_health_management=as_override(overrides.get("health", False)),
            override_prayer_management=as_override(overrides.get("prayer", False)),
            override_buff_management=as_override(overrides.get("buffs", False)),
            health_rules=_parse_rules(categories.get("health"), default_health_rules()),
            prayer_rules=_parse_rules(categories.get("prayer"), default_prayer_rules()),
            excalibur=SpecialItem.from_dict(specials.get("excalibur", {}), EXCALIBUR),
            elven_shard=SpecialItem.from_dict(specials.get("elven_shard", {}), ELVEN_SHARD),
            cooldown_window=int(cooldowns.get("window", 1)),
            cooldown_windows=_parse_windows(cooldowns.get("windows", {})),
            tick_interval_ms=int(timing.get("tick_interval_ms", 600)),
            settle_delay_ms=int(timing.get("settle_delay_ms", 60)),
            pause_bind=str(data.get("pause_bind", "") or ""),
        )

    def to_dict(self) -> dict:
        """Serialize to dict for JSON config file. Dynamic overrides serialize as False."""
        def static(override: Override) -> bool:
            return isinstance(override, StaticOverride) and override.value

        return {
            "thresholds": {
                "health": self.health_thresholds.to_dict(),
                "prayer": self.prayer_thresholds.to_dict(),
            },
            "overrides": {
                "health": static(self.override_health_management),
                "prayer": static(self.override_prayer_management),
                "buffs": static(self.override_buff_management),
            },
            "categories": {
                "health": [r.to_dict() for r in self.health_rules],
                "prayer": [r.to_dict() for r in self.prayer_rules],
            },
            "special_items": {
                "excalibur": self.excalibur.to_dict(),
                "elven_shard": self.elven_shard.to_dict(),
            },
            "cooldowns": {
                "window": self.cooldown_window,
                "windows": {k.value: v for k, v in self.cooldown_windows.items()},
            },
            "timing": {
                "tick_interval_ms": self.tick_interval_ms,
                "settle_delay_ms": self.settle_delay_ms,
            },
            "pause_bind": self.pause_bind,
        }
