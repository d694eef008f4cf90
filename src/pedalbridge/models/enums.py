"""Enumerations for the pedal bridge."""

from enum import Enum, IntEnum


class LedMode(IntEnum):
    """LED display modes, using the integer values sent by the engine."""

    DARK = 0  # Off, no autonomous transitions
    LIGHT = 1  # On, no autonomous transitions
    BLINK = 2  # Toggles every TIMER_BLINK ticks
    FAST_BLINK = 3  # Toggles every TIMER_FAST_BLINK ticks

    @property
    def is_blinking(self) -> bool:
        """Check if this mode takes part in the per-tick blink advance."""
        return self in (LedMode.BLINK, LedMode.FAST_BLINK)


class ConnectionPhase(str, Enum):
    """Phases of the link to the looping engine."""

    DISCONNECTED = "disconnected"  # No endpoints bound (initial)
    CONNECTING = "connecting"  # Both endpoints bound, ping not yet sent
    CONNECTED = "connected"  # Link up, heartbeat countdown running
