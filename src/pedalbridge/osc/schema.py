"""Positional argument schemas for engine messages.

Each inbound message kind has an ordered list of expected argument types.
Decoding either returns a complete typed record or raises
MessageDecodeError; a message is never partially applied.
"""

from typing import Any, NamedTuple, Sequence

from pedalbridge.exceptions import MessageDecodeError


class EngineStatus(NamedTuple):
    """Payload of /pingack and /heartbeat."""

    host_label: str
    version_label: str
    led_count: int
    identity: int


class LedUpdate(NamedTuple):
    """Payload of /led."""

    index: int
    on: int
    blink_timer: int
    mode: int


class DisplayUpdate(NamedTuple):
    """Payload of /display."""

    selected_slot: int


def _type_name(value: Any) -> str:
    return type(value).__name__


def _matches(value: Any, expected: type) -> bool:
    # bool is an int subclass, but OSC True/False are not int32
    if expected is int and isinstance(value, bool):
        return False
    return isinstance(value, expected)


class MessageSchema:
    """
    Ordered argument schema for one message kind.

    Example:
        >>> LED_SCHEMA.decode("/led", (3, 1, 0, 2))
        LedUpdate(index=3, on=1, blink_timer=0, mode=2)
    """

    def __init__(self, record_type: type, types: Sequence[type]):
        """
        Initialize schema.

        Args:
            record_type: NamedTuple built from the decoded arguments
            types: Expected Python type at each position
        """
        if len(record_type._fields) != len(types):
            raise ValueError(f"{record_type.__name__} needs {len(record_type._fields)} types")
        self.record_type = record_type
        self.types = tuple(types)

    def decode(self, address: str, args: Sequence[Any]):
        """
        Check argument count and types, then build the record.

        Args:
            address: OSC address (for error reporting)
            args: Positional OSC arguments

        Raises:
            MessageDecodeError: If the count or any type doesn't match
        """
        if len(args) != len(self.types):
            raise MessageDecodeError(
                address, f"expected {len(self.types)} arguments, got {len(args)}"
            )

        for position, (value, expected) in enumerate(zip(args, self.types)):
            if not _matches(value, expected):
                raise MessageDecodeError(
                    address,
                    f"argument {position}: expected {expected.__name__}, got {_type_name(value)}",
                )

        return self.record_type(*args)


ENGINE_STATUS_SCHEMA = MessageSchema(EngineStatus, (str, str, int, int))
LED_SCHEMA = MessageSchema(LedUpdate, (int, int, int, int))
DISPLAY_SCHEMA = MessageSchema(DisplayUpdate, (int,))


def describe_arguments(args: Sequence[Any]) -> str:
    """Render arguments as 'type value' pairs for trace logging."""
    return ", ".join(f"{_type_name(value)} {value!r}" for value in args)
