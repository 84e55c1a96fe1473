"""Per-tick health, prayer and buff sustain engine for game automation."""

__version__ = "0.1.0"
