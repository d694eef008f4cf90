"""Unit tests for PedalOutput."""

from unittest.mock import Mock

import pytest

from pedalbridge.devices.fcb1010 import (
    CC_DISPLAY_TENS,
    CC_DISPLAY_UNITS,
    CC_LED_OFF,
    CC_LED_ON,
    HEARTBEAT_LED,
    PedalOutput,
)


@pytest.mark.unit
class TestPedalOutput:
    """Test pedal LED and display control."""

    def test_led_on_message(self, output):
        """LED on is CC 106 carrying the pedal number."""
        msg = output.encode_led_on(0)
        assert msg.type == 'control_change'
        assert msg.control == CC_LED_ON
        assert msg.value == 1
        assert msg.channel == 0

    def test_led_off_tenth_pedal(self, output):
        """The tenth LED is pedal 0 on the wire."""
        msg = output.encode_led_off(9)
        assert msg.control == CC_LED_OFF
        assert msg.value == 0

    def test_channel_is_used(self, mock_midi):
        """Messages go out on the configured channel."""
        output = PedalOutput(mock_midi, channel=3)
        output.led_on(2)
        assert mock_midi.send.call_args[0][0].channel == 3

    def test_set_led(self, output, sent_ccs):
        """set_led picks on or off."""
        output.set_led(1, True)
        output.set_led(1, False)
        assert sent_ccs() == [(CC_LED_ON, 2), (CC_LED_OFF, 2)]

    def test_all_off(self, output, sent_ccs):
        """all_off darkens LEDs 0..count-1 in order."""
        output.all_off(3)
        assert sent_ccs() == [(CC_LED_OFF, 1), (CC_LED_OFF, 2), (CC_LED_OFF, 3)]

    def test_all_off_from_start(self, output, sent_ccs):
        """all_off can skip the LEDs below start."""
        output.all_off(10, start=8)
        assert sent_ccs() == [(CC_LED_OFF, 9), (CC_LED_OFF, 0)]

    @pytest.mark.parametrize("slot,tens,units", [
        (0, 0, 1),
        (8, 0, 9),
        (9, 1, 0),
        (14, 1, 5),
        (98, 9, 9),
        (99, 9, 9),
        (150, 9, 9),
    ])
    def test_display(self, output, sent_ccs, slot, tens, units):
        """Display shows the one-based slot as two digits."""
        output.show_display(slot)
        assert sent_ccs() == [(CC_DISPLAY_TENS, tens), (CC_DISPLAY_UNITS, units)]

    def test_display_negative_slot(self, output, sent_ccs):
        """Negative slots show 00."""
        output.show_display(-5)
        assert sent_ccs() == [(CC_DISPLAY_TENS, 0), (CC_DISPLAY_UNITS, 0)]

    def test_toggle_heartbeat(self, output, sent_ccs):
        """Heartbeat toggles LED 23 and returns the new state."""
        assert output.toggle_heartbeat(False) is True
        assert output.toggle_heartbeat(True) is False
        assert sent_ccs() == [(CC_LED_ON, HEARTBEAT_LED), (CC_LED_OFF, HEARTBEAT_LED)]

    def test_send_failure_is_logged(self, mock_midi, output, caplog):
        """A refused write is logged, not raised."""
        mock_midi.send.return_value = False
        assert output.led_on(0) is False
        assert "Could not write CC 106 1" in caplog.text

    def test_send_exception_is_logged(self, output, caplog):
        """An exception from the MIDI layer is logged, not raised."""
        output.midi = Mock()
        output.midi.send = Mock(side_effect=OSError("port gone"))
        assert output.led_off(0) is False
        assert "port gone" in caplog.text
