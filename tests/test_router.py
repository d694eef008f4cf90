"""Tests for MessageRouter."""

import pytest

from pedalbridge.devices.fcb1010 import (
    CC_DISPLAY_TENS,
    CC_DISPLAY_UNITS,
    CC_LED_OFF,
    CC_LED_ON,
    HEARTBEAT_LED,
)
from pedalbridge.models import HEARTBEAT_RESET, LedMode
from pedalbridge.osc import addresses

REQUESTS = [
    addresses.UNREGISTER_AUTO_UPDATE,
    addresses.REGISTER_AUTO_UPDATE,
    addresses.QUERY_LEDS,
    addresses.QUERY_DISPLAY,
]


def status(count, identity=42):
    """Arguments of a /pingack or /heartbeat."""
    return ("studio", "1.2.0", count, identity)


@pytest.mark.unit
class TestPingAck:
    """Test the engine's answer to our ping."""

    def test_pingack_builds_bank_and_requests_state(self, router, bank, sent_ccs, sent_osc):
        """Three LEDs: three request rounds, then LEDs 0, 1, 2 flushed dark."""
        assert router.route("/pingack", status(3)) is True

        assert bank.count == 3
        assert sent_osc() == REQUESTS * 3
        assert sent_ccs() == [(CC_LED_OFF, 1), (CC_LED_OFF, 2), (CC_LED_OFF, 3)]

        state = router.state
        assert state.engine_identity == 42
        assert state.led_count == 3
        assert state.host_label == "studio"
        assert state.version_label == "1.2.0"

    def test_request_arguments(self, router, mock_link):
        """Registrations carry host and port, queries also a reply address."""
        router.route("/pingack", status(1))

        calls = [c[0] for c in mock_link.send.call_args_list]
        assert calls == [
            (addresses.UNREGISTER_AUTO_UPDATE, ["127.0.0.1", 9001]),
            (addresses.REGISTER_AUTO_UPDATE, ["127.0.0.1", 9001]),
            (addresses.QUERY_LEDS, ["127.0.0.1", 9001, "/led"]),
            (addresses.QUERY_DISPLAY, ["127.0.0.1", 9001, "/display"]),
        ]

    def test_pingack_without_leds(self, router, bank, sent_osc):
        """A zero count adopts the identity but builds nothing."""
        router.route("/pingack", status(0))
        assert bank.count == 0
        assert sent_osc() == []
        assert router.state.engine_identity == 42

    def test_pingack_resets_countdown(self, router, connected_supervisor):
        """Any valid message is a sign of life."""
        connected_supervisor.tick()
        connected_supervisor.tick()
        router.route("/pingack", status(1))
        assert connected_supervisor.state.heartbeat_countdown == HEARTBEAT_RESET


@pytest.mark.unit
class TestHeartbeat:
    """Test heartbeat handling."""

    def test_first_heartbeat_rebuilds(self, router, bank, sent_ccs, sent_osc):
        """An unseen identity rebuilds the bank and toggles the indicator."""
        router.route("/heartbeat", status(2, identity=7))

        assert bank.count == 2
        assert router.state.engine_identity == 7
        assert sent_osc() == REQUESTS * 2
        assert sent_ccs() == [(CC_LED_OFF, 1), (CC_LED_OFF, 2), (CC_LED_ON, HEARTBEAT_LED)]

    def test_heartbeat_toggles_indicator(self, router, sent_ccs):
        """Each heartbeat flips the indicator."""
        router.route("/pingack", status(0))
        router.route("/heartbeat", status(0))
        router.route("/heartbeat", status(0))
        assert sent_ccs() == [(CC_LED_ON, HEARTBEAT_LED), (CC_LED_OFF, HEARTBEAT_LED)]
        assert router.state.heartbeat_led_on is False

    def test_grown_count_appends(self, router, bank, sent_ccs, sent_osc):
        """More LEDs from the same engine are registered without a rebuild."""
        router.route("/pingack", status(2))
        bank.set_led(0, True, 0, LedMode.LIGHT)
        router.supervisor.link.send.reset_mock()
        router.output.midi.send.reset_mock()

        router.route("/heartbeat", status(4))

        assert bank.count == 4
        assert bank[0].on is True
        assert router.state.led_count == 4
        assert sent_osc() == REQUESTS * 2
        assert sent_ccs() == [(CC_LED_OFF, 3), (CC_LED_OFF, 4), (CC_LED_ON, HEARTBEAT_LED)]

    def test_smaller_count_ignored(self, router, bank, sent_osc):
        """A shrinking count leaves the bank alone."""
        router.route("/pingack", status(4))
        router.supervisor.link.send.reset_mock()

        router.route("/heartbeat", status(1))

        assert bank.count == 4
        assert sent_osc() == []

    def test_new_identity_without_leds_not_adopted(self, router, bank):
        """An engine reporting no LEDs doesn't replace the known one."""
        router.route("/pingack", status(2, identity=1))
        router.route("/heartbeat", status(0, identity=2))

        assert router.state.engine_identity == 1
        assert bank.count == 2

    def test_engine_restart_rebuilds(self, router, bank, sent_osc):
        """A new identity with LEDs resets the bank."""
        router.route("/pingack", status(3, identity=1))
        bank.set_led(0, True, 0, LedMode.LIGHT)
        router.supervisor.link.send.reset_mock()

        router.route("/heartbeat", status(4, identity=2))

        assert bank.count == 4
        assert all(not led.on and led.mode == LedMode.DARK for led in bank.states)
        assert router.state.engine_identity == 2
        assert sent_osc() == REQUESTS * 4

    def test_same_count_leaves_bank_untouched(self, router, bank, sent_ccs, sent_osc):
        """The same engine reporting the same count changes nothing but the indicator."""
        router.route("/pingack", status(3))
        bank.set_led(1, True, 2, LedMode.BLINK)
        before = bank.states
        router.supervisor.link.send.reset_mock()
        router.output.midi.send.reset_mock()

        router.route("/heartbeat", status(3))

        assert bank.states == before
        assert sent_osc() == []
        assert sent_ccs() == [(CC_LED_ON, HEARTBEAT_LED)]

    def test_heartbeat_marks_alive(self, router, connected_supervisor):
        """Heartbeats reset the countdown."""
        for _ in range(4):
            connected_supervisor.tick()
        router.route("/heartbeat", status(0))
        assert connected_supervisor.state.heartbeat_countdown == HEARTBEAT_RESET


@pytest.mark.unit
class TestLedAndDisplay:
    """Test /led and /display."""

    def test_led_update(self, router, bank, sent_ccs):
        """A valid update sets the LED and flushes it."""
        router.route("/pingack", status(2))
        router.output.midi.send.reset_mock()

        router.route("/led", (1, 1, 0, 2))

        assert bank[1].on is True
        assert bank[1].mode == LedMode.BLINK
        assert sent_ccs() == [(CC_LED_ON, 2)]

    def test_malformed_led_is_dropped(self, router, bank, sent_ccs, connected_supervisor, caplog):
        """Wrong argument types change nothing, not even liveness."""
        router.route("/pingack", status(2))
        router.output.midi.send.reset_mock()
        connected_supervisor.tick()
        connected_supervisor.tick()

        assert router.route("/led", (0, "on", 0, 1)) is True

        assert sent_ccs() == []
        assert bank[0].on is False
        assert connected_supervisor.state.heartbeat_countdown == HEARTBEAT_RESET - 2
        assert "Rejected /led" in caplog.text

    def test_wrong_argument_count(self, router, sent_ccs):
        """Too few arguments are rejected."""
        router.route("/pingack", status(1))
        router.output.midi.send.reset_mock()
        router.route("/led", (0, 1))
        assert sent_ccs() == []

    def test_unknown_mode_rejected(self, router, bank, sent_ccs):
        """Mode values outside 0-3 are rejected."""
        router.route("/pingack", status(1))
        router.output.midi.send.reset_mock()
        router.route("/led", (0, 1, 0, 7))
        assert sent_ccs() == []
        assert bank[0].mode == LedMode.DARK

    def test_out_of_range_led_still_alive(self, router, bank, connected_supervisor, sent_ccs):
        """Updates for unknown LEDs are ignored but count as life."""
        router.route("/pingack", status(1))
        router.output.midi.send.reset_mock()
        connected_supervisor.tick()

        router.route("/led", (5, 1, 0, 1))

        assert sent_ccs() == []
        assert connected_supervisor.state.heartbeat_countdown == HEARTBEAT_RESET

    @pytest.mark.parametrize("slot,tens,units", [(14, 1, 5), (0, 0, 1)])
    def test_display(self, router, sent_ccs, slot, tens, units):
        """The display shows the selected loop, one-based."""
        router.route("/display", (slot,))
        assert sent_ccs() == [(CC_DISPLAY_TENS, tens), (CC_DISPLAY_UNITS, units)]

    def test_display_rejects_float(self, router, sent_ccs):
        """Display needs an int."""
        router.route("/display", (1.5,))
        assert sent_ccs() == []

    def test_unknown_address(self, router, sent_ccs):
        """Unrecognized addresses are ignored."""
        assert router.route("/loop/1/state", (1,)) is False
        assert sent_ccs() == []
