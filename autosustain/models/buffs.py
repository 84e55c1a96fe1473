"""Buff rule definitions, host-reported status and per-tick decisions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class BuffPhase(Enum):
    INACTIVE = "inactive"
    PENDING = "pending"
    ACTIVE = "active"
    EXPIRING = "expiring"
    TOGGLED_OFF = "toggled_off"


class BuffOutcome(Enum):
    APPLIED = "applied"
    REFRESHED = "refreshed"
    TOGGLED_OFF = "toggled_off"
    NOOP = "noop"
    FAILED = "failed"


@dataclass(frozen=True)
class BuffStatus:
    """Observed buff bar state for one buff; remaining is in seconds."""
    active: bool = False
    remaining: Optional[float] = None


@dataclass(frozen=True)
class BuffRule:
    """One manageable buff.

    condition() says whether the buff is wanted this tick; action() applies it
    (and, for toggle buffs, cancels it when invoked while active).
    """
    name: str
    buff_id: int
    condition: Callable[[], bool]
    action: Callable[[], bool]
    priority: int = 0
    toggle: bool = False
    refresh_window: Optional[float] = None


@dataclass(frozen=True)
class BuffDecision:
    name: str
    outcome: BuffOutcome
    phase: BuffPhase
