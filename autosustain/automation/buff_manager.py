"""Buff manager: applies, refreshes and toggles off user-supplied buff rules each tick."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from autosustain.models import BuffDecision, BuffOutcome, BuffPhase, BuffRule, BuffStatus

logger = logging.getLogger(__name__)


def _call(rule: BuffRule, fn: Callable[[], bool], what: str) -> bool:
    try:
        return bool(fn())
    except Exception as e:
        logger.warning("Buff %s %s raised: %s", rule.name, what, e)
        return False


def _in_refresh_window(rule: BuffRule, status: BuffStatus) -> bool:
    if rule.refresh_window is None or status.remaining is None:
        return False
    return status.remaining <= rule.refresh_window


class BuffManager:
    """Evaluates buff rules highest priority first; rules are otherwise independent."""

    def __init__(self, rules: Iterable[BuffRule] = ()):
        # sorted() is stable, so equal priorities keep their configured order
        self._rules = sorted(rules, key=lambda r: r.priority, reverse=True)
        self._phases: dict[str, BuffPhase] = {r.name: BuffPhase.INACTIVE for r in self._rules}

    def phase(self, name: str) -> BuffPhase:
        return self._phases.get(name, BuffPhase.INACTIVE)

    def phases(self) -> dict[str, BuffPhase]:
        return dict(self._phases)

    def collect_statuses(
        self, get_status: Callable[[int], Optional[BuffStatus]]
    ) -> dict[str, BuffStatus]:
        """Read every rule's buff status up front so one tick sees a single frozen view."""
        statuses: dict[str, BuffStatus] = {}
        for rule in self._rules:
            try:
                status = get_status(rule.buff_id)
            except Exception as e:
                logger.warning("Buff status read failed for %s: %s", rule.name, e)
                status = None
            statuses[rule.name] = status if isinstance(status, BuffStatus) else BuffStatus()
        return statuses

    def evaluate(self, statuses: dict[str, BuffStatus]) -> list[BuffDecision]:
        decisions = []
        for rule in self._rules:
            status = statuses.get(rule.name) or BuffStatus()
            outcome = self._step(rule, status)
            decisions.append(BuffDecision(rule.name, outcome, self._phases[rule.name]))
        return decisions

    def _step(self, rule: BuffRule, status: BuffStatus) -> BuffOutcome:
        previous = self._phases[rule.name]
        wanted = _call(rule, rule.condition, "condition")

        if wanted and not status.active:
            self._phases[rule.name] = BuffPhase.PENDING
            if _call(rule, rule.action, "action"):
                self._phases[rule.name] = BuffPhase.ACTIVE
                logger.info("Applied buff %s", rule.name)
                return BuffOutcome.APPLIED
            self._phases[rule.name] = previous
            return BuffOutcome.FAILED

        if wanted:
            if previous == BuffPhase.TOGGLED_OFF:
                # Cancelled but the host still reports it; re-apply once it is gone
                return BuffOutcome.NOOP
            if _in_refresh_window(rule, status):
                if _call(rule, rule.action, "action"):
                    self._phases[rule.name] = BuffPhase.ACTIVE
                    logger.info("Refreshed buff %s (%.1fs left)", rule.name, status.remaining)
                    return BuffOutcome.REFRESHED
                return BuffOutcome.FAILED
            self._phases[rule.name] = BuffPhase.ACTIVE
            return BuffOutcome.NOOP

        if status.active:
            if not rule.toggle:
                self._phases[rule.name] = BuffPhase.EXPIRING
                return BuffOutcome.NOOP
            if previous == BuffPhase.TOGGLED_OFF:
                # Already cancelled; waiting for the host to report it gone
                return BuffOutcome.NOOP
            if _call(rule, rule.action, "action"):
                self._phases[rule.name] = BuffPhase.TOGGLED_OFF
                logger.info("Toggled off buff %s", rule.name)
                return BuffOutcome.TOGGLED_OFF
            return BuffOutcome.FAILED

        self._phases[rule.name] = BuffPhase.INACTIVE
        return BuffOutcome.NOOP
