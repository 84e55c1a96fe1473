"""Tick worker: drives the engine once per game tick on a background thread."""

from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from autosustain.automation.engine import SustainEngine, TickReport
from autosustain.automation.tracking import all_rows
from autosustain.models import EngineConfig

logger = logging.getLogger(__name__)


class TickWorker(QThread):
    """Worker thread that runs one engine update per tick interval.

    Every ledger and buff-phase mutation happens on this thread; other threads
    only receive reports and tracking rows through signals.
    """

    tick_completed = pyqtSignal(object)  # TickReport
    state_updated = pyqtSignal(list)  # Tracking rows [(label, value), ...]
    paused_changed = pyqtSignal(bool)

    def __init__(self, engine: SustainEngine, config: EngineConfig):
        super().__init__()
        self._engine = engine
        self._config = config
        self._running = False
        self._paused = False

    @property
    def paused(self) -> bool:
        return self._paused

    def set_paused(self, paused: bool) -> None:
        if paused == self._paused:
            return
        self._paused = paused
        logger.info("Sustain engine %s", "paused" if paused else "resumed")
        self.paused_changed.emit(paused)

    def toggle_paused(self, *_args) -> None:
        self.set_paused(not self._paused)

    def run_once(self) -> Optional[TickReport]:
        if self._paused:
            return None
        report = self._engine.update()
        self.tick_completed.emit(report)
        self.state_updated.emit(all_rows(self._engine))
        return report

    def run(self) -> None:
        self._running = True
        interval_ms = max(1, self._config.tick_interval_ms)
        logger.info(f"Tick worker started at {interval_ms} ms per tick")
        while self._running:
            try:
                self.run_once()
            except Exception as e:
                logger.error(f"Tick worker error: {e}", exc_info=True)
            self.msleep(interval_ms)
        logger.info("Tick worker stopped")

    def stop(self) -> None:
        self._running = False
        self.wait()
