"""Protocol and transport exceptions.

- ProtocolError: Base class for inbound message problems
- MessageDecodeError: OSC arguments don't match the expected schema
- TransportError: Base class for network/MIDI transport problems
- OscBindError: An OSC endpoint could not be bound
- MidiSendError: A MIDI message could not be written
"""

from typing import Optional

from .base import PedalBridgeError


class ProtocolError(PedalBridgeError):
    """Inbound message could not be handled."""
    pass


class MessageDecodeError(ProtocolError):
    """OSC message arguments don't match the expected schema."""

    def __init__(self, address: str, reason: str):
        """
        Initialize message decode error.

        Args:
            address: OSC address of the rejected message
            reason: What was wrong with the arguments
        """
        super().__init__(
            user_message=f"Unrecognized format for {address} message",
            technical_message=f"Rejected {address}: {reason}",
            recoverable=True,
        )
        self.address = address
        self.reason = reason


class TransportError(PedalBridgeError):
    """Network or MIDI transport failure."""
    pass


class OscBindError(TransportError):
    """OSC endpoint could not be bound."""

    def __init__(self, port: int, direction: str, original_error: Optional[str] = None):
        """
        Initialize OSC bind error.

        Args:
            port: UDP port that failed
            direction: "send" or "receive"
            original_error: Error reported by the socket layer
        """
        technical = f"Could not bind OSC {direction} port {port}"
        if original_error:
            technical += f": {original_error}"

        super().__init__(
            user_message=f"Could not connect to UDP port {port}",
            technical_message=technical,
            recoverable=True,
            recovery_hint=(
                "Check that no other application is using the port.\n"
                "Use 'oin <port>' or 'oout <port>' to pick different ports."
            ),
        )
        self.port = port
        self.direction = direction


class MidiSendError(TransportError):
    """MIDI message could not be written to the output port."""

    def __init__(self, control: int, value: int, original_error: Optional[str] = None):
        """
        Initialize MIDI send error.

        Args:
            control: Controller number of the failed message
            value: Controller value of the failed message
            original_error: Error reported by the MIDI backend
        """
        technical = f"Could not write CC {control} {value}"
        if original_error:
            technical += f": {original_error}"

        super().__init__(
            user_message=f"Could not write CC {control} {value}",
            technical_message=technical,
            recoverable=True,
        )
        self.control = control
        self.value = value
