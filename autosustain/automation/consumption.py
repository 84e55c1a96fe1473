"""One-cycle consumption cascade across consumable categories."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from autosustain.analysis.classifier import filter_category
from autosustain.automation.cooldowns import CooldownTracker
from autosustain.models import ActionKind, ConsumableCategory, ConsumableItem, FiredAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CascadeStep:
    category: ConsumableCategory
    kind: ActionKind
    # Only taken when the caller allows the costly category (e.g. food drains adrenaline)
    high_cost: bool = False


HEALTH_CASCADE: tuple[CascadeStep, ...] = (
    CascadeStep(ConsumableCategory.FOOD, ActionKind.EAT, high_cost=True),
    CascadeStep(ConsumableCategory.JELLYFISH, ActionKind.EAT_COMBO),
    CascadeStep(ConsumableCategory.POTION, ActionKind.DRINK),
)

PRAYER_CASCADE: tuple[CascadeStep, ...] = (
    CascadeStep(ConsumableCategory.POTION, ActionKind.DRINK),
)


def run_cascade(
    items: Sequence[ConsumableItem],
    steps: Sequence[CascadeStep],
    cooldowns: CooldownTracker,
    current_tick: int,
    allow_high_cost: bool,
    dispatch: Callable[[ConsumableItem], bool],
    settle: Optional[Callable[[], None]] = None,
) -> list[FiredAction]:
    """
    Consume at most one item per step, in step order, within one tick.

    Several categories may fire together (a jellyfish and a brew in the same
    tick). A rejected dispatch leaves the cooldown unset so the next tick
    retries it; nothing is retried within the same cascade.
    """
    fired: list[FiredAction] = []
    for step in steps:
        if step.high_cost and not allow_high_cost:
            continue
        if not cooldowns.can_fire(step.kind, current_tick):
            continue
        candidates = filter_category(items, step.category)
        if not candidates:
            continue
        item = candidates[0]
        if not dispatch(item):
            logger.debug("Dispatch rejected for %s (%s)", item.name, step.kind.value)
            continue
        cooldowns.record_fire(step.kind, current_tick)
        fired.append(FiredAction(kind=step.kind, name=item.name, item_id=item.id, tick=current_tick))
        logger.info("Consumed %s (%s) on tick %s", item.name, step.category.value, current_tick)
        if settle is not None:
            settle()
    return fired
