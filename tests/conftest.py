"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import Mock

import pytest

from pedalbridge.core import ConnectionSupervisor, LedBank, MessageRouter
from pedalbridge.devices.fcb1010 import PedalOutput


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_midi():
    """MIDI sender whose writes always succeed."""
    mock = Mock()
    mock.send = Mock(return_value=True)
    return mock


@pytest.fixture
def output(mock_midi):
    """PedalOutput on channel 1 (wire channel 0)."""
    return PedalOutput(mock_midi, channel=0)


@pytest.fixture
def bank(output):
    """Empty LED bank."""
    return LedBank(output)


@pytest.fixture
def mock_link():
    """OSC link whose endpoints always bind."""
    link = Mock()
    link.open_sender = Mock(return_value=None)
    link.open_receiver = Mock(return_value=None)
    link.send = Mock(return_value=None)
    link.close = Mock(return_value=None)
    return link


@pytest.fixture
def supervisor(mock_link):
    """Supervisor sending to 9000 and listening on 9001."""
    return ConnectionSupervisor(mock_link, send_port=9000, receive_port=9001)


@pytest.fixture
def connected_supervisor(supervisor, mock_link):
    """Supervisor that has completed its first connect tick."""
    supervisor.tick()
    mock_link.send.reset_mock()
    return supervisor


@pytest.fixture
def router(bank, connected_supervisor, output, mock_midi):
    """Router over a connected supervisor, with MIDI history cleared."""
    mock_midi.send.reset_mock()
    return MessageRouter(bank, connected_supervisor, output)


def sent_control_changes(mock_midi):
    """(control, value) pairs written to a mock MIDI sender, in order."""
    return [(c[0][0].control, c[0][0].value) for c in mock_midi.send.call_args_list]


def sent_addresses(mock_link):
    """OSC addresses sent through a mock link, in order."""
    return [c[0][0] for c in mock_link.send.call_args_list]


@pytest.fixture
def sent_ccs(mock_midi):
    """Callable returning the control changes written so far."""
    return lambda: sent_control_changes(mock_midi)


@pytest.fixture
def sent_osc(mock_link):
    """Callable returning the OSC addresses sent so far."""
    return lambda: sent_addresses(mock_link)
