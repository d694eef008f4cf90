"""MIDI management - port discovery and output."""

from .output_manager import MidiOutputManager, list_ports, name_filter

__all__ = ["MidiOutputManager", "list_ports", "name_filter"]
