"""Sustain engine: main entry point.

Wires together: host bridge → engine → tick worker (+ pause hotkey).

    python -m autosustain.main my_bot.host:create_host

The host factory is called with no arguments and may return either a host or
a (host, buff_rules) pair.
"""

from __future__ import annotations

import importlib
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Iterable, Optional

from PyQt6.QtCore import QCoreApplication, QTimer

from autosustain.automation.binds import format_bind_for_display
from autosustain.automation.engine import SustainEngine, TickReport
from autosustain.automation.hotkey import PauseHotkeyListener
from autosustain.automation.host import Host
from autosustain.models import BuffRule, EngineConfig
from autosustain.worker import TickWorker

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent / "config" / "default_config.json"


def load_config(path: Optional[Path] = None) -> EngineConfig:
    """Load config from JSON, falling back to defaults. Invalid config raises ConfigError."""
    path = path or CONFIG_PATH
    if path.exists():
        with open(path) as f:
            data = json.load(f)
        logger.info(f"Loaded config from {path}")
        return EngineConfig.from_dict(data)
    logger.warning(f"Config not found at {path}, using defaults")
    return EngineConfig()


def load_host(target: str) -> tuple[Host, list[BuffRule]]:
    """Import 'package.module:factory' and call it."""
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Host must look like 'module:factory', got {target!r}")
    factory = getattr(importlib.import_module(module_name), attr)
    result = factory()
    if isinstance(result, tuple):
        host, rules = result
        return host, list(rules)
    return result, []


def _log_report(report: TickReport) -> None:
    if report.error:
        tick = "?" if report.tick is None else report.tick
        logger.error("Tick %s failed: %s", tick, report.error)
    for action in report.actions:
        logger.debug("Tick %s: %s %s", report.tick, action.kind.value, action.name)


def run(host: Host, buff_rules: Iterable[BuffRule] = (), config: Optional[EngineConfig] = None) -> int:
    config = config or load_config()
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)

    engine = SustainEngine(config, host, buff_rules)
    worker = TickWorker(engine, config)
    worker.tick_completed.connect(_log_report)

    hotkey_listener = PauseHotkeyListener(get_bind=lambda: config.pause_bind)
    hotkey_listener.triggered.connect(worker.toggle_paused)
    hotkey_listener.start()
    logger.info("Pause hotkey: %s", format_bind_for_display(config.pause_bind))

    # Ctrl+C: Python signal handlers only run while the interpreter gets control
    signal.signal(signal.SIGINT, lambda *_: app.quit())
    heartbeat = QTimer()
    heartbeat.timeout.connect(lambda: None)
    heartbeat.start(250)

    worker.start()
    exit_code = app.exec()

    hotkey_listener.stop()
    worker.stop()
    return exit_code


def main() -> None:
    if len(sys.argv) < 2:
        print("usage: python -m autosustain.main module:host_factory", file=sys.stderr)
        sys.exit(2)
    host, rules = load_host(sys.argv[1])
    sys.exit(run(host, rules))


if __name__ == "__main__":
    main()
