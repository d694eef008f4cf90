"""Data models for the pedal bridge."""

from .config import DEFAULT_CONFIG_PATH, BridgeConfig
from .connection import HEARTBEAT_LOST_THRESHOLD, HEARTBEAT_RESET, ConnectionState
from .enums import ConnectionPhase, LedMode
from .led import TIMER_BLINK, TIMER_FAST_BLINK, TIMER_OFF, LedState

__all__ = [
    # Config
    "BridgeConfig",
    "DEFAULT_CONFIG_PATH",
    # Connection
    "ConnectionState",
    "HEARTBEAT_LOST_THRESHOLD",
    "HEARTBEAT_RESET",
    # Enums
    "ConnectionPhase",
    "LedMode",
    # LEDs
    "LedState",
    "TIMER_BLINK",
    "TIMER_FAST_BLINK",
    "TIMER_OFF",
]
