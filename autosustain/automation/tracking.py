"""Tracking rows: (label, value) pairs describing engine state for a display layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from autosustain.analysis import total_count
from autosustain.models import ConsumableItem, PlayerSnapshot

if TYPE_CHECKING:
    from autosustain.automation.engine import SustainEngine

Rows = list[tuple[str, str]]


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def state_rows(snapshot: PlayerSnapshot) -> Rows:
    health, prayer, coords = snapshot.health, snapshot.prayer, snapshot.coords
    return [
        ("Player State:", ""),
        ("- Health", f"{health.current}/{health.max} ({health.percent}%)"),
        ("- Prayer", f"{prayer.current}/{prayer.max} ({prayer.percent}%)"),
        ("- Adrenaline", f"{snapshot.adrenaline}"),
        ("- Coordinates", f"(X:{coords.x}, Y:{coords.y}, Z:{coords.z})"),
        ("- Location", snapshot.location),
        ("- Animation", "Idle" if snapshot.animation == 0 else str(snapshot.animation)),
        ("- Moving?", _yes_no(snapshot.moving)),
        ("- In Combat?", _yes_no(snapshot.in_combat)),
    ]


def management_rows(engine: SustainEngine) -> Rows:
    config = engine.config
    return [
        ("Player Management:", ""),
        ("- Items:", ""),
        (f"-- Has {config.excalibur.name}?", _yes_no(engine.has_special(config.excalibur))),
        (f"-- Has {config.elven_shard.name}?", _yes_no(engine.has_special(config.elven_shard))),
        ("-- Edible food count:", str(total_count(engine.health_items))),
        ("-- Prayer item count:", str(total_count(engine.prayer_items))),
    ]


def consumable_rows(title: str, items: Iterable[ConsumableItem], empty_text: str) -> Rows:
    rows: Rows = [(title, "")]
    items = list(items)
    if not items:
        rows.append((empty_text, ""))
        return rows
    for item in items:
        rows.append((f"-- {item.count}x {item.category.value}", item.name))
    return rows


def cooldown_rows(engine: SustainEngine) -> Rows:
    rows: Rows = [("- Cooldowns:", "")]
    for kind, tick in engine.cooldowns.items():
        rows.append((f"-- {kind}", "never" if tick is None else f"tick {tick}"))
    return rows


def buff_rows(engine: SustainEngine) -> Rows:
    rows: Rows = [("- Buffs:", "")]
    phases = engine.buff_phases()
    if not phases:
        rows.append(("-- No buff rules", ""))
    for name, phase in phases.items():
        rows.append((f"-- {name}", phase.value))
    return rows


def all_rows(engine: SustainEngine) -> Rows:
    return (
        state_rows(engine.snapshot)
        + management_rows(engine)
        + consumable_rows("- Food Stuff:", engine.health_items, "-- No foods found")
        + consumable_rows("- Prayer Stuff:", engine.prayer_items, "-- No prayer items found")
        + cooldown_rows(engine)
        + buff_rows(engine)
    )
