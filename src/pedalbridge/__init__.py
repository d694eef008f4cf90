"""Pedalbridge: mirror a looping engine's LEDs onto an FCB1010 pedal board."""

__version__ = "0.1.0"

from .core import Bridge
from .models import BridgeConfig

__all__ = ["Bridge", "BridgeConfig"]
