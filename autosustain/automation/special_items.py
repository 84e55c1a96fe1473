"""Special-item policy: possession + no blocking debuff + cooldown elapsed."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from autosustain.automation.cooldowns import CooldownTracker
from autosustain.models import ActionKind, ItemLocation, SpecialItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Possession:
    location: ItemLocation
    item_id: int


def find_special(
    item: SpecialItem,
    has_item: Callable[[int], bool],
    has_item_equipped: Optional[Callable[[int, int], bool]] = None,
) -> Optional[Possession]:
    """Locate the item: for each id in order, check the inventory, then the equipped slot."""
    for item_id in item.item_ids:
        if has_item(item_id):
            return Possession(ItemLocation.INVENTORY, item_id)
        if (
            item.equip_slot is not None
            and has_item_equipped is not None
            and has_item_equipped(item.equip_slot, item_id)
        ):
            return Possession(ItemLocation.EQUIPPED, item_id)
    return None


def try_use_special(
    possession: Optional[Possession],
    blocked: bool,
    cooldowns: CooldownTracker,
    kind: ActionKind,
    current_tick: int,
    dispatch: Callable[[Possession], bool],
) -> bool:
    """Fire the special item if the gate passes; record the cooldown only on success."""
    if possession is None or blocked:
        return False
    if not cooldowns.can_fire(kind, current_tick):
        return False
    if not dispatch(possession):
        logger.debug("Dispatch rejected for %s (%s)", kind.value, possession.location.value)
        return False
    cooldowns.record_fire(kind, current_tick)
    return True
