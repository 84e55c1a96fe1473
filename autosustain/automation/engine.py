"""Sustain engine: runs health, prayer and buff management once per tick.

One engine instance owns the cooldown ledger and the buff phase table. All
host reads happen at the start of update() and are not repeated mid-tick.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Optional

from autosustain.analysis import classify, is_triggered, total_count
from autosustain.automation.buff_manager import BuffManager
from autosustain.automation.consumption import HEALTH_CASCADE, PRAYER_CASCADE, run_cascade
from autosustain.automation.cooldowns import CooldownTracker
from autosustain.automation.host import Host
from autosustain.automation.special_items import Possession, find_special, try_use_special
from autosustain.models import (
    CRITICAL,
    NORMAL,
    SPECIAL,
    BuffDecision,
    BuffPhase,
    BuffRule,
    BuffStatus,
    ConsumableItem,
    EngineConfig,
    FiredAction,
    ItemLocation,
    Override,
    PlayerSnapshot,
    SpecialItem,
)

logger = logging.getLogger(__name__)


class ManagementOutcome(Enum):
    SKIPPED = "skipped"
    IDLE = "idle"
    ACTED = "acted"
    OUT_OF_SUPPLIES = "out_of_supplies"


@dataclass
class TickReport:
    tick: Optional[int] = None  # None until the snapshot has been read
    actions: list[FiredAction] = field(default_factory=list)
    health: ManagementOutcome = ManagementOutcome.IDLE
    prayer: ManagementOutcome = ManagementOutcome.IDLE
    buffs: list[BuffDecision] = field(default_factory=list)
    error: Optional[str] = None


class SustainEngine:
    def __init__(
        self,
        config: EngineConfig,
        host: Host,
        buff_rules: Iterable[BuffRule] = (),
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._config = config
        self._host = host
        self._sleep = sleep
        self._cooldowns = CooldownTracker(config.cooldown_window, config.cooldown_windows)
        self._buffs = BuffManager(buff_rules)
        self._snapshot = PlayerSnapshot()
        self._health_items: list[ConsumableItem] = []
        self._prayer_items: list[ConsumableItem] = []

    # --- read-only accessors for tracking ---

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def snapshot(self) -> PlayerSnapshot:
        return self._snapshot

    @property
    def health_items(self) -> list[ConsumableItem]:
        return list(self._health_items)

    @property
    def prayer_items(self) -> list[ConsumableItem]:
        return list(self._prayer_items)

    @property
    def cooldowns(self) -> dict[str, Optional[int]]:
        return self._cooldowns.snapshot()

    def buff_phases(self) -> dict[str, BuffPhase]:
        return self._buffs.phases()

    def has_special(self, item: SpecialItem) -> bool:
        return self._find(item) is not None

    # --- tick ---

    def update(self) -> TickReport:
        """Run one tick. Never raises; a failure is logged and stored on the report."""
        report = TickReport()
        try:
            self._evaluate(report)
        except Exception as e:
            logger.error(f"Tick evaluation failed: {e}", exc_info=True)
            report.error = str(e)
        return report

    def _evaluate(self, report: TickReport) -> None:
        self._snapshot = self._read_snapshot()
        report.tick = self._snapshot.tick
        self._health_items = classify(self._snapshot.inventory, self._config.health_rules)
        self._prayer_items = classify(self._snapshot.inventory, self._config.prayer_rules)

        skip_health = self._resolve(self._config.override_health_management, "health")
        skip_prayer = self._resolve(self._config.override_prayer_management, "prayer")
        skip_buffs = self._resolve(self._config.override_buff_management, "buff")
        statuses: dict[str, BuffStatus] = {}
        if not skip_buffs:
            statuses = self._buffs.collect_statuses(self._host.get_buff_status)

        report.health = ManagementOutcome.SKIPPED if skip_health else self._manage_health(report)
        report.prayer = ManagementOutcome.SKIPPED if skip_prayer else self._manage_prayer(report)
        if not skip_buffs:
            report.buffs = self._buffs.evaluate(statuses)

    def _read_snapshot(self) -> PlayerSnapshot:
        raw = self._host.get_snapshot()
        if isinstance(raw, PlayerSnapshot):
            return raw
        return PlayerSnapshot.from_dict(raw)

    def _resolve(self, override: Override, what: str) -> bool:
        try:
            return override.resolve()
        except Exception as e:
            logger.warning("Override for %s management raised, managing anyway: %s", what, e)
            return False

    def _manage_health(self, report: TickReport) -> ManagementOutcome:
        health = self._snapshot.health
        tiers = self._config.health_thresholds
        normal = is_triggered(health, tiers, NORMAL)
        critical = is_triggered(health, tiers, CRITICAL)
        acted = False

        if is_triggered(health, tiers, SPECIAL):
            acted = self._use_special(self._config.excalibur, report)
        if normal and self._health_items:
            fired = run_cascade(
                self._health_items,
                HEALTH_CASCADE,
                self._cooldowns,
                report.tick,
                allow_high_cost=critical,
                dispatch=self._dispatch_item,
                settle=self._settle,
            )
            report.actions.extend(fired)
            acted = acted or bool(fired)
        if critical and not self._health_items:
            logger.warning("Health critical (%s%%) and no food left", health.percent)
            return ManagementOutcome.OUT_OF_SUPPLIES
        return ManagementOutcome.ACTED if acted else ManagementOutcome.IDLE

    def _manage_prayer(self, report: TickReport) -> ManagementOutcome:
        prayer = self._snapshot.prayer
        tiers = self._config.prayer_thresholds
        normal = is_triggered(prayer, tiers, NORMAL)
        critical = is_triggered(prayer, tiers, CRITICAL)
        acted = False

        if is_triggered(prayer, tiers, SPECIAL):
            acted = self._use_special(self._config.elven_shard, report)
        if normal and self._prayer_items:
            fired = run_cascade(
                self._prayer_items,
                PRAYER_CASCADE,
                self._cooldowns,
                report.tick,
                allow_high_cost=False,
                dispatch=self._dispatch_item,
                settle=self._settle,
            )
            report.actions.extend(fired)
            acted = acted or bool(fired)
        if critical and total_count(self._prayer_items) == 0:
            logger.warning("Prayer critical (%s%%) and no prayer restores left", prayer.percent)
            return ManagementOutcome.OUT_OF_SUPPLIES
        return ManagementOutcome.ACTED if acted else ManagementOutcome.IDLE

    def _find(self, item: SpecialItem) -> Optional[Possession]:
        return find_special(
            item,
            lambda item_id: self._ask(self._host.has_item, item_id),
            lambda slot, item_id: self._ask(self._host.has_item_equipped, slot, item_id),
        )

    def _use_special(self, item: SpecialItem, report: TickReport) -> bool:
        possession = self._find(item)
        blocked = item.debuff_id is not None and self._ask(self._host.has_status_effect, item.debuff_id)

        def dispatch(p: Possession) -> bool:
            if p.location == ItemLocation.EQUIPPED:
                return self._ask(self._host.dispatch_equipped_action, item.equip_slot, p.item_id)
            return self._ask(self._host.dispatch_inventory_action, p.item_id)

        if not try_use_special(possession, blocked, self._cooldowns, item.kind, report.tick, dispatch):
            return False
        report.actions.append(
            FiredAction(
                kind=item.kind,
                name=item.name,
                item_id=possession.item_id,
                tick=report.tick,
                location=possession.location,
            )
        )
        logger.info("Used %s from %s on tick %s", item.name, possession.location.value, report.tick)
        return True

    def _dispatch_item(self, item: ConsumableItem) -> bool:
        return self._ask(self._host.dispatch_inventory_action, item.id)

    def _ask(self, fn: Callable[..., object], *args) -> bool:
        """Call into the host; a raising call counts as False (missing data / rejected dispatch)."""
        try:
            return bool(fn(*args))
        except Exception as e:
            logger.debug("Host call %s%r failed: %s", getattr(fn, "__name__", fn), args, e)
            return False

    def _settle(self) -> None:
        delay_sec = (self._config.settle_delay_ms or 0) / 1000.0
        if delay_sec > 0:
            self._sleep(delay_sec)
