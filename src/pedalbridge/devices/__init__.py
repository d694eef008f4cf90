"""Pedal board device support."""

from .fcb1010 import PedalMapper, PedalOutput
from .protocols import MidiSender

__all__ = ["MidiSender", "PedalMapper", "PedalOutput"]
