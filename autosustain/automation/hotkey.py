"""Global pause hotkey (works when the game window has focus).

Uses the 'keyboard' library's low-level hook so the bind is seen even while
other keys are held down.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from autosustain.automation.binds import is_modifier_token, normalize_bind, normalize_key_token, parse_bind

logger = logging.getLogger(__name__)


class _HookThread(QThread):
    triggered = pyqtSignal(str)

    def __init__(self, get_bind: Callable[[], str], parent: Optional[QObject] = None):
        super().__init__(parent)
        self._get_bind = get_bind
        self._running = True

    def run(self) -> None:
        try:
            import keyboard
        except ImportError:
            logger.warning("keyboard library not installed; pause hotkey disabled. pip install keyboard")
            return

        while self._running:
            bind = normalize_bind(self._get_bind())
            parsed = parse_bind(bind)
            if parsed is None:
                self.msleep(500)
                continue
            modifiers, primary = parsed
            held_modifiers: set[str] = set()
            pressed = [False]

            def on_event(event):
                name = normalize_key_token(str(getattr(event, "name", "") or ""))
                if not name:
                    return
                if event.event_type == keyboard.KEY_DOWN:
                    if is_modifier_token(name):
                        held_modifiers.add(name)
                    elif name == primary and held_modifiers == set(modifiers) and not pressed[0]:
                        # Fire once per press, not on key repeat
                        pressed[0] = True
                        self.triggered.emit(bind)
                elif event.event_type == keyboard.KEY_UP:
                    if is_modifier_token(name):
                        held_modifiers.discard(name)
                    elif name == primary:
                        pressed[0] = False

            try:
                hook = keyboard.hook(on_event)
            except Exception as e:
                logger.warning("keyboard hook failed for %r: %s", bind, e)
                return
            try:
                while self._running and normalize_bind(self._get_bind()) == bind:
                    self.msleep(200)
            finally:
                try:
                    keyboard.unhook(hook)
                except Exception as e:
                    logger.debug("keyboard unhook failed: %s", e)

    def stop(self) -> None:
        self._running = False


class PauseHotkeyListener(QObject):
    """Emits triggered(bind) each time the configured pause bind is pressed."""

    triggered = pyqtSignal(str)

    def __init__(self, get_bind: Callable[[], str], parent: Optional[QObject] = None):
        super().__init__(parent)
        self._get_bind = get_bind
        self._thread: Optional[_HookThread] = None

    def start(self) -> None:
        if self._thread is not None and self._thread.isRunning():
            return
        self._thread = _HookThread(self._get_bind, self)
        self._thread.triggered.connect(self.triggered.emit)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is not None:
            self._thread.stop()
            self._thread.wait(2000)
            self._thread = None
