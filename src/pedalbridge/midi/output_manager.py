"""MIDI output to the pedal board, following it across unplug/replug."""

import logging
import threading
import time
from collections.abc import Callable
from typing import Optional

import mido

logger = logging.getLogger(__name__)

ConnectionCallback = Callable[[bool, Optional[str]], None]


def name_filter(device_name: str) -> Callable[[str], bool]:
    """
    Build a device filter matching ports that contain a name.

    The name doesn't have to be an exact match: any port whose name
    contains the text, irrespective of case, matches.
    """
    needle = device_name.lower()
    return lambda port_name: needle in port_name.lower()


def exact_first_selector(device_name: str) -> Callable[[list[str]], Optional[str]]:
    """Build a port selector preferring an exact (case-insensitive) name match."""

    def select(candidates: list[str]) -> Optional[str]:
        for candidate in candidates:
            if candidate.lower() == device_name.lower():
                return candidate
        return candidates[0] if candidates else None

    return select


class MidiOutputManager:
    """
    Keeps one MIDI output port open for a device, with hot-plug support.

    A daemon thread polls the port list. When the open port disappears it
    is closed and a disconnect is reported; when a matching port shows up
    it is opened and a connect is reported. Callbacks run on the polling
    thread.
    """

    def __init__(
        self,
        device_filter: Callable[[str], bool],
        poll_interval: float = 2.0,
        port_selector: Optional[Callable[[list[str]], Optional[str]]] = None,
    ):
        """
        Initialize the manager (no port is opened until start()).

        Args:
            device_filter: Returns True for port names of the wanted device
            poll_interval: Seconds between port list checks
            port_selector: Picks one port among several matches (first if None)
        """
        self._device_filter = device_filter
        self._poll_interval = poll_interval
        self._port_selector = port_selector
        self._port: Optional[mido.ports.BaseOutput] = None
        self._port_lock = threading.Lock()
        self._running = False
        self._poll_thread: Optional[threading.Thread] = None
        self._warned_missing = False
        self._on_connection_changed: Optional[ConnectionCallback] = None

    @classmethod
    def for_device(cls, device_name: str, poll_interval: float = 2.0) -> "MidiOutputManager":
        """Create a manager for the first output port containing `device_name`."""
        return cls(
            device_filter=name_filter(device_name),
            poll_interval=poll_interval,
            port_selector=exact_first_selector(device_name),
        )

    def on_connection_changed(self, callback: ConnectionCallback) -> None:
        """
        Register the connect/disconnect callback.

        The callback receives (is_connected, port_name) on the polling
        thread, so it should only hand the event over.
        """
        self._on_connection_changed = callback

    def start(self) -> None:
        """Start polling for the device."""
        if self._running:
            logger.warning("MidiOutputManager is already running")
            return

        self._running = True
        self._poll_thread = threading.Thread(target=self._poll_loop, daemon=True)
        self._poll_thread.start()
        logger.debug("MidiOutputManager started")

    def stop(self) -> None:
        """Stop polling and close the port."""
        self._running = False

        with self._port_lock:
            self._close_port()

        if self._poll_thread and self._poll_thread.is_alive():
            self._poll_thread.join(timeout=1.0)
        logger.debug("MidiOutputManager stopped")

    def send(self, message: mido.Message) -> bool:
        """
        Write a message to the open port.

        Returns:
            True if written, False if no port is open or the write failed
        """
        with self._port_lock:
            if self._port is None:
                return False
            try:
                self._port.send(message)
            except Exception as e:
                logger.error(f"Error sending MIDI message: {e}")
                return False
            return True

    @property
    def is_connected(self) -> bool:
        """Check if a port is open."""
        with self._port_lock:
            return self._port is not None

    @property
    def current_port(self) -> Optional[str]:
        """Name of the open port, if any."""
        with self._port_lock:
            return self._port.name if self._port else None

    def poll_once(self) -> None:
        """Check the port list once: drop a vanished port, open a matching one."""
        available = mido.get_output_names()

        with self._port_lock:
            if self._port is not None and self._port.name not in available:
                logger.warning(f"MIDI output disconnected: {self._port.name}")
                self._close_port()
                self._warned_missing = False
                self._notify(False, None)

            if self._port is None:
                self._open_matching(available)

    def _poll_loop(self) -> None:
        while self._running:
            try:
                self.poll_once()
            except Exception as e:
                logger.error(f"Error polling MIDI outputs: {e}")
            time.sleep(self._poll_interval)

    def _open_matching(self, available: list[str]) -> None:
        candidates = [name for name in available if self._device_filter(name)]
        if self._port_selector:
            name = self._port_selector(candidates)
        else:
            name = candidates[0] if candidates else None

        if name is None:
            if not self._warned_missing:
                logger.warning("No matching MIDI output device found")
                self._warned_missing = True
            return

        try:
            self._port = mido.open_output(name)
        except Exception as e:
            logger.error(f"Couldn't open MIDI output port \"{name}\": {e}")
            return

        logger.info(f"Connected to MIDI output: {name}")
        self._notify(True, name)

    def _close_port(self) -> None:
        # Caller holds _port_lock
        if self._port is None:
            return
        try:
            self._port.close()
        except Exception as e:
            logger.debug(f"Ignoring error closing MIDI output: {e}")
        self._port = None

    def _notify(self, is_connected: bool, port_name: Optional[str]) -> None:
        if self._on_connection_changed is None:
            return
        try:
            self._on_connection_changed(is_connected, port_name)
        except Exception as e:
            logger.error(f"Error in connection callback: {e}")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()


def list_ports() -> dict:
    """
    List all available MIDI ports.

    Returns:
        Dictionary with 'input' and 'output' lists of port names
    """
    return {
        'input': mido.get_input_names(),
        'output': mido.get_output_names()
    }
