"""Events handed from transport threads to the bridge loop.

Transport callbacks never touch bridge state. They wrap what happened in a
BridgeMessage and put it on the bridge queue; the bridge loop applies it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class BridgeEvent(Enum):
    """Kinds of events the bridge loop consumes."""

    OSC_MESSAGE = "osc_message"              # OSC message from the engine
    MIDI_CONNECTED = "midi_connected"        # MIDI output port (re)opened
    MIDI_DISCONNECTED = "midi_disconnected"  # MIDI output port vanished
    STOP = "stop"                            # Leave the loop


@dataclass(frozen=True)
class BridgeMessage:
    """One queued event with its payload."""

    event: BridgeEvent
    address: str = ""
    args: tuple[Any, ...] = ()
    port_name: Optional[str] = None

    @classmethod
    def osc(cls, address: str, args: tuple[Any, ...]) -> "BridgeMessage":
        return cls(BridgeEvent.OSC_MESSAGE, address=address, args=tuple(args))

    @classmethod
    def midi(cls, is_connected: bool, port_name: Optional[str]) -> "BridgeMessage":
        event = BridgeEvent.MIDI_CONNECTED if is_connected else BridgeEvent.MIDI_DISCONNECTED
        return cls(event, port_name=port_name)

    @classmethod
    def stop(cls) -> "BridgeMessage":
        return cls(BridgeEvent.STOP)
