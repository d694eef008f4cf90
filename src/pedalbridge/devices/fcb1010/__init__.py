"""Behringer FCB1010 (EurekaProm I/O mode) support."""

from .mapper import PedalMapper
from .output import (
    CC_DISPLAY_TENS,
    CC_DISPLAY_UNITS,
    CC_LED_OFF,
    CC_LED_ON,
    HEARTBEAT_LED,
    PedalOutput,
)

__all__ = [
    "CC_DISPLAY_TENS",
    "CC_DISPLAY_UNITS",
    "CC_LED_OFF",
    "CC_LED_ON",
    "HEARTBEAT_LED",
    "PedalMapper",
    "PedalOutput",
]
