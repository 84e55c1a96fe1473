"""Helpers for parsing and displaying the pause hotkey bind."""
from __future__ import annotations

from typing import Optional

_MOD_ORDER = ("ctrl", "shift", "alt")

_MOD_ALIASES = {
    "control": "ctrl",
    "left ctrl": "ctrl",
    "right ctrl": "ctrl",
    "ctrl l": "ctrl",
    "ctrl r": "ctrl",
    "left shift": "shift",
    "right shift": "shift",
    "shift l": "shift",
    "shift r": "shift",
    "left alt": "alt",
    "right alt": "alt",
    "alt l": "alt",
    "alt r": "alt",
    "alt gr": "alt",
    "altgr": "alt",
}

_KEY_ALIASES = {
    "esc": "escape",
    "return": "enter",
    "pgup": "page up",
    "pgdn": "page down",
    "del": "delete",
    "spacebar": "space",
}


def normalize_key_token(token: str) -> str:
    """Lowercase, collapse whitespace and resolve aliases for one key name."""
    t = " ".join(str(token or "").strip().lower().replace("_", " ").split())
    if not t:
        return ""
    if t in _MOD_ALIASES:
        return _MOD_ALIASES[t]
    return _KEY_ALIASES.get(t, t)


def is_modifier_token(token: str) -> bool:
    return normalize_key_token(token) in _MOD_ORDER


def normalize_bind(bind: str) -> str:
    """Canonical bind string, e.g. 'Control + P' -> 'ctrl+p'. Empty if invalid."""
    parts = [normalize_key_token(p) for p in str(bind or "").split("+")]
    mods: set[str] = set()
    primary = ""
    for part in parts:
        if not part:
            continue
        if part in _MOD_ORDER:
            mods.add(part)
        elif primary:
            return ""
        else:
            primary = part
    if not primary:
        return ""
    return "+".join([m for m in _MOD_ORDER if m in mods] + [primary])


def parse_bind(bind: str) -> Optional[tuple[frozenset[str], str]]:
    """(modifiers, primary_key), or None if the bind is empty or invalid."""
    normalized = normalize_bind(bind)
    if not normalized:
        return None
    parts = normalized.split("+")
    return frozenset(parts[:-1]), parts[-1]


def format_bind_for_display(bind: str) -> str:
    normalized = normalize_bind(bind)
    if not normalized:
        return "Not set"
    tokens = []
    for part in normalized.split("+"):
        if part in _MOD_ORDER:
            tokens.append(part.capitalize())
        elif len(part) <= 3 and (len(part) <= 2 or part[1:].isdigit()):
            tokens.append(part.upper())
        else:
            tokens.append(part.capitalize())
    return "+".join(tokens)
