"""FCB1010 output: LED and display control over MIDI Control-Change."""

import logging

import mido

from pedalbridge.devices.protocols import MidiSender
from pedalbridge.exceptions import MidiSendError

from .mapper import PedalMapper

logger = logging.getLogger(__name__)

# EurekaProm I/O mode controller numbers
CC_LED_ON = 106
CC_LED_OFF = 107
CC_DISPLAY_TENS = 113
CC_DISPLAY_UNITS = 114

# LED number of the board's heartbeat indicator
HEARTBEAT_LED = 23

# Largest value the two-digit display can show
MAX_DISPLAY_VALUE = 99


def limit_7bit(value: int) -> int:
    """Clamp a value to the 0-127 range of a MIDI data byte."""
    return max(0, min(0x7F, value))


class PedalOutput:
    """
    Control the pedal board LEDs and two-digit display.

    Every message is written immediately. A failed write is logged and
    otherwise ignored: the next state change from the engine re-sends
    the LED state, so nothing is queued or retried.
    """

    def __init__(self, midi: MidiSender, channel: int = 0):
        """
        Initialize pedal output.

        Args:
            midi: MIDI sender (usually a MidiOutputManager)
            channel: Zero-based MIDI channel for all messages
        """
        self.midi = midi
        self.channel = channel
        self.mapper = PedalMapper()

    def _control_change(self, control: int, value: int) -> mido.Message:
        return mido.Message(
            'control_change', channel=self.channel, control=control, value=limit_7bit(value)
        )

    def encode_led_on(self, logical_index: int) -> mido.Message:
        """Build the CC that lights an LED."""
        return self._control_change(CC_LED_ON, self.mapper.physical_pedal_number(logical_index))

    def encode_led_off(self, logical_index: int) -> mido.Message:
        """Build the CC that darkens an LED."""
        return self._control_change(CC_LED_OFF, self.mapper.physical_pedal_number(logical_index))

    def send(self, message: mido.Message) -> bool:
        """
        Write a message, logging failures.

        Returns:
            True if the message was written
        """
        try:
            if self.midi.send(message):
                return True
            error = MidiSendError(message.control, message.value)
        except Exception as e:
            error = MidiSendError(message.control, message.value, original_error=str(e))

        logger.warning(error.technical_message)
        return False

    def led_on(self, logical_index: int) -> bool:
        """Light an LED."""
        return self.send(self.encode_led_on(logical_index))

    def led_off(self, logical_index: int) -> bool:
        """Darken an LED."""
        return self.send(self.encode_led_off(logical_index))

    def set_led(self, logical_index: int, on: bool) -> bool:
        """Light or darken an LED."""
        return self.led_on(logical_index) if on else self.led_off(logical_index)

    def all_off(self, count: int, start: int = 0) -> None:
        """
        Darken LEDs start..count-1.

        Args:
            count: LEDs below this index are cleared
            start: First logical LED to clear
        """
        for index in range(start, count):
            self.led_off(index)

    def show_display(self, selected_slot: int) -> None:
        """
        Show a zero-based slot number as a one-based two-digit value.

        Values past 99 show 99.

        Args:
            selected_slot: Zero-based slot index from the engine
        """
        value = min(max(selected_slot + 1, 0), MAX_DISPLAY_VALUE)
        tens = value // 10
        self.send(self._control_change(CC_DISPLAY_TENS, tens))
        self.send(self._control_change(CC_DISPLAY_UNITS, value % 10))

    def toggle_heartbeat(self, currently_on: bool) -> bool:
        """
        Flip the heartbeat indicator.

        Args:
            currently_on: Current state of the indicator

        Returns:
            New state of the indicator
        """
        if currently_on:
            self.led_off(HEARTBEAT_LED)
        else:
            self.led_on(HEARTBEAT_LED)
        return not currently_on
