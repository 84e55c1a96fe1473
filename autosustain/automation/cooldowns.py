"""Per-action-kind last-fired-tick ledger."""

from __future__ import annotations

from typing import Optional

from autosustain.models import ActionKind


class CooldownTracker:
    """Gates repeated firing of an action kind.

    A kind may fire at tick T only if T - last_fired > window. With the default
    window of 1 a fire at T blocks T and T + 1, and T + 2 is allowed again.
    """

    def __init__(self, window: int = 1, windows: Optional[dict[ActionKind, int]] = None):
        self._window = window
        self._windows = dict(windows or {})
        self._last_fired: dict[ActionKind, int] = {}

    def window_for(self, kind: ActionKind) -> int:
        return self._windows.get(kind, self._window)

    def last_fired(self, kind: ActionKind) -> Optional[int]:
        return self._last_fired.get(kind)

    def can_fire(self, kind: ActionKind, current_tick: int) -> bool:
        last = self._last_fired.get(kind)
        if last is None:
            return True
        return current_tick - self.window_for(kind) > last

    def record_fire(self, kind: ActionKind, current_tick: int) -> None:
        self._last_fired[kind] = current_tick

    def snapshot(self) -> dict[str, Optional[int]]:
        return {kind.value: self._last_fired.get(kind) for kind in ActionKind}

    def reset(self) -> None:
        self._last_fired.clear()
