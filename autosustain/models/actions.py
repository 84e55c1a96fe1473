"""Fired-action records and the special items the engine can use."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ActionKind(Enum):
    EAT = "eat"
    EAT_COMBO = "eat_combo"
    DRINK = "drink"
    USE_EXCALIBUR = "use_excalibur"
    USE_ELVEN_SHARD = "use_elven_shard"


class ItemLocation(Enum):
    INVENTORY = "inventory"
    EQUIPPED = "equipped"


@dataclass(frozen=True)
class FiredAction:
    """An action the host accepted during a tick."""
    kind: ActionKind
    name: str
    item_id: int
    tick: int
    location: ItemLocation = ItemLocation.INVENTORY


@dataclass(frozen=True)
class SpecialItem:
    """A limited-use item gated by possession, a blocking debuff and a cooldown."""
    name: str
    item_ids: tuple[int, ...]
    kind: ActionKind
    debuff_id: Optional[int] = None
    equip_slot: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict, default: SpecialItem) -> SpecialItem:
        ids = data.get("item_ids", list(default.item_ids))
        return cls(
            name=str(data.get("name", default.name)),
            item_ids=tuple(int(i) for i in ids),
            kind=default.kind,
            debuff_id=data.get("debuff_id", default.debuff_id),
            equip_slot=data.get("equip_slot", default.equip_slot),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "item_ids": list(self.item_ids),
            "debuff_id": self.debuff_id,
            "equip_slot": self.equip_slot,
        }


EXCALIBUR = SpecialItem(
    name="Enhanced Excalibur",
    item_ids=(14632, 36619),  # enhanced, augmented enhanced
    kind=ActionKind.USE_EXCALIBUR,
    debuff_id=14632,
    equip_slot=5,  # off-hand
)

ELVEN_SHARD = SpecialItem(
    name="Elven ritual shard",
    item_ids=(43358,),
    kind=ActionKind.USE_ELVEN_SHARD,
    debuff_id=43358,
)
