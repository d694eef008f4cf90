"""Device protocols and abstractions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import mido


class MidiSender(Protocol):
    """Anything that can write a MIDI message to the pedal board."""

    def send(self, message: mido.Message) -> bool:
        """
        Write a message.

        Returns:
            True if written, False if the port is missing or the write failed
        """
        ...
