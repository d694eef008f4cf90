"""Tests for MidiOutputManager hot-plug handling (mido patched)."""

from unittest.mock import Mock, patch

import mido
import pytest

from pedalbridge.midi import MidiOutputManager, list_ports, name_filter
from pedalbridge.midi.output_manager import exact_first_selector


def fake_port(name):
    port = Mock()
    port.name = name
    return port


@pytest.fixture
def ports():
    """Output port names currently 'plugged in'."""
    return ["Microsoft GS Wavetable Synth", "UM-ONE MIDI 1"]


@pytest.fixture
def manager(ports):
    """Manager looking for 'um-one' with mido's port functions patched."""
    with patch.object(mido, "get_output_names", side_effect=lambda: list(ports)), \
         patch.object(mido, "open_output", side_effect=fake_port):
        yield MidiOutputManager.for_device("um-one")


@pytest.mark.unit
class TestSelection:
    """Test device name matching."""

    def test_name_filter_is_substring_and_case_insensitive(self):
        """Partial names match anywhere."""
        matches = name_filter("fcb")
        assert matches("Behringer FCB1010")
        assert matches("fcb")
        assert not matches("UM-ONE")

    def test_exact_match_preferred(self):
        """An exact name wins over earlier partial matches."""
        select = exact_first_selector("FCB")
        assert select(["FCB Extra", "fcb"]) == "fcb"
        assert select(["FCB Extra", "FCB Other"]) == "FCB Extra"
        assert select([]) is None


@pytest.mark.unit
class TestHotPlug:
    """Test poll_once() connect/disconnect handling."""

    def test_connects_to_matching_port(self, manager):
        """A matching port is opened and reported."""
        callback = Mock()
        manager.on_connection_changed(callback)

        manager.poll_once()

        assert manager.is_connected
        assert manager.current_port == "UM-ONE MIDI 1"
        callback.assert_called_once_with(True, "UM-ONE MIDI 1")

    def test_no_matching_port(self, ports, manager, caplog):
        """Without a match nothing opens and a warning is logged once."""
        ports.remove("UM-ONE MIDI 1")
        manager.poll_once()
        manager.poll_once()

        assert not manager.is_connected
        assert caplog.text.count("No matching MIDI output device found") == 1

    def test_unplug_and_replug(self, ports, manager):
        """A vanished port is dropped, then reopened when it returns."""
        events = []
        manager.on_connection_changed(lambda connected, name: events.append((connected, name)))

        manager.poll_once()
        ports.remove("UM-ONE MIDI 1")
        manager.poll_once()
        assert not manager.is_connected

        ports.append("UM-ONE MIDI 1")
        manager.poll_once()

        assert events == [(True, "UM-ONE MIDI 1"), (False, None), (True, "UM-ONE MIDI 1")]

    def test_callback_errors_are_contained(self, manager, caplog):
        """A failing callback doesn't stop the connection."""
        manager.on_connection_changed(Mock(side_effect=RuntimeError("boom")))
        manager.poll_once()
        assert manager.is_connected
        assert "boom" in caplog.text


@pytest.mark.unit
class TestSend:
    """Test writing messages."""

    def test_send_without_port(self, manager):
        """Nothing to write to yet."""
        assert manager.send(mido.Message('control_change', control=106, value=1)) is False

    def test_send_writes_to_port(self, manager):
        """Messages go to the open port."""
        manager.poll_once()
        msg = mido.Message('control_change', control=106, value=1)

        assert manager.send(msg) is True
        manager._port.send.assert_called_once_with(msg)

    def test_send_error(self, manager):
        """A backend error is reported as False."""
        manager.poll_once()
        manager._port.send.side_effect = OSError("device busy")
        assert manager.send(mido.Message('control_change', control=106, value=1)) is False

    def test_stop_closes_port(self, manager):
        """stop() closes the open port."""
        manager.poll_once()
        port = manager._port
        manager.stop()
        port.close.assert_called_once()
        assert not manager.is_connected


@pytest.mark.unit
def test_list_ports():
    """list_ports() reports both directions."""
    with patch.object(mido, "get_input_names", return_value=["FCB In"]), \
         patch.object(mido, "get_output_names", return_value=["FCB Out"]):
        assert list_ports() == {"input": ["FCB In"], "output": ["FCB Out"]}
