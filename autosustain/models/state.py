"""Per-tick player snapshot as read from the host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

EMPTY_SLOT_ID = -1
UNKNOWN_LOCATION = "UNKNOWN"


def _number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if number != number or number < 0:
        return 0
    return int(number) if number.is_integer() else number


@dataclass(frozen=True)
class Metric:
    """A resource pool with a derived floor percentage (0 when max is 0)."""
    current: float = 0
    max: float = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "current", _number(self.current))
        object.__setattr__(self, "max", _number(self.max))

    @property
    def percent(self) -> int:
        if self.max <= 0:
            return 0
        return int(self.current * 100 // self.max)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Metric:
        if not isinstance(data, dict):
            return cls()
        return cls(current=data.get("current", 0), max=data.get("max", 0))

    def to_dict(self) -> dict:
        return {"current": self.current, "max": self.max, "percent": self.percent}


@dataclass(frozen=True)
class Coords:
    x: int = 0
    y: int = 0
    z: int = 0


@dataclass(frozen=True)
class InventorySlot:
    """One raw inventory slot as read from the host."""
    item_id: int = EMPTY_SLOT_ID
    name: str = ""
    size: int = 0

    @property
    def is_empty(self) -> bool:
        return self.item_id == EMPTY_SLOT_ID

    @classmethod
    def from_dict(cls, data: dict) -> InventorySlot:
        item_id = data.get("item_id", data.get("id"))
        return cls(
            item_id=int(item_id) if item_id is not None else EMPTY_SLOT_ID,
            name=str(data.get("name", "") or ""),
            size=int(data.get("size", 0) or 0),
        )


@dataclass(frozen=True)
class PlayerSnapshot:
    """Frozen per-tick view of the actor; read once at the start of a tick."""
    tick: int = 0
    health: Metric = field(default_factory=Metric)
    prayer: Metric = field(default_factory=Metric)
    adrenaline: float = 0
    animation: int = -1
    moving: bool = False
    in_combat: bool = False
    location: str = UNKNOWN_LOCATION
    coords: Coords = field(default_factory=Coords)
    inventory: tuple[InventorySlot, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> PlayerSnapshot:
        """Build a snapshot from loose host data; absent fields default to zero/false/empty."""
        if not isinstance(data, dict):
            return cls()
        coords = data.get("coords") or {}
        if isinstance(coords, Coords):
            coords = {"x": coords.x, "y": coords.y, "z": coords.z}
        inventory = []
        for raw in data.get("inventory") or []:
            if isinstance(raw, InventorySlot):
                inventory.append(raw)
            elif isinstance(raw, dict):
                inventory.append(InventorySlot.from_dict(raw))
        animation = data.get("animation")
        return cls(
            tick=int(data.get("tick", 0) or 0),
            health=Metric.from_dict(data.get("health")),
            prayer=Metric.from_dict(data.get("prayer")),
            adrenaline=_number(data.get("adrenaline", 0)),
            animation=int(animation) if animation is not None else -1,
            moving=bool(data.get("moving", False)),
            in_combat=bool(data.get("in_combat", False)),
            location=str(data.get("location") or UNKNOWN_LOCATION),
            coords=Coords(
                x=int(coords.get("x", 0) or 0),
                y=int(coords.get("y", 0) or 0),
                z=int(coords.get("z", 0) or 0),
            ),
            inventory=tuple(inventory),
        )
