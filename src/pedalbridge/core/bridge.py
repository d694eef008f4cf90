"""Bridge: the single owner of LED and connection state."""

import logging
import time
from queue import Empty, Queue
from typing import Any, Callable, Optional

from pedalbridge.devices.fcb1010 import PedalOutput
from pedalbridge.midi import MidiOutputManager
from pedalbridge.models import BridgeConfig
from pedalbridge.osc import OscLink
from pedalbridge.protocols import BridgeEvent, BridgeMessage

from .led_bank import LedBank
from .router import MessageRouter
from .supervisor import ConnectionSupervisor, Link

logger = logging.getLogger(__name__)


class Bridge:
    """
    Mirrors the looping engine's state onto the pedal board.

    Two sources feed the bridge: the fixed-period tick and the event queue.
    The OSC server thread and the MIDI hot-plug thread only enqueue
    BridgeMessages; run() is the one place that dequeues them, ticks, and
    mutates the LED bank and connection state.
    """

    def __init__(
        self,
        config: BridgeConfig,
        midi: MidiOutputManager,
        link: Optional[Link] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the bridge (nothing is opened yet).

        Args:
            config: Bridge configuration
            midi: MIDI output manager for the pedal board
            link: OSC link (an OscLink posting to this bridge if None)
            clock: Monotonic clock, in seconds
        """
        self.config = config
        self.midi = midi
        self._clock = clock
        self._events: Queue[BridgeMessage] = Queue()
        self._running = False
        self._next_tick: Optional[float] = None

        self.output = PedalOutput(midi, channel=config.wire_channel)
        self.bank = LedBank(self.output)
        self.link = link or OscLink(config.osc_host, self.post_osc_message)
        self.supervisor = ConnectionSupervisor(
            self.link, config.osc_send_port, config.osc_receive_port
        )
        self.router = MessageRouter(self.bank, self.supervisor, self.output)

    # Producers (any thread)

    def post_osc_message(self, address: str, args: tuple[Any, ...]) -> None:
        """Queue an inbound OSC message."""
        self._events.put(BridgeMessage.osc(address, args))

    def post_midi_connection(self, is_connected: bool, port_name: Optional[str]) -> None:
        """Queue a MIDI port connect/disconnect."""
        self._events.put(BridgeMessage.midi(is_connected, port_name))

    def stop(self) -> None:
        """Ask the loop to finish."""
        self._events.put(BridgeMessage.stop())

    # Consumer (bridge loop thread)

    @property
    def is_running(self) -> bool:
        """Check if the loop is running."""
        return self._running

    @property
    def pending_events(self) -> int:
        """Approximate number of queued events."""
        return self._events.qsize()

    def start(self) -> None:
        """Start the MIDI output manager and arm the first tick."""
        self.midi.on_connection_changed(self.post_midi_connection)
        self.midi.start()
        self._running = True
        self._next_tick = self._clock()
        logger.info(
            f"Bridge started (OSC in {self.config.osc_receive_port}, "
            f"out {self.config.osc_host}:{self.config.osc_send_port})"
        )

    def shutdown(self) -> None:
        """Release the OSC endpoints and the MIDI port."""
        self._running = False
        self.supervisor.close()
        self.midi.stop()
        logger.info("Bridge stopped")

    def run(self) -> None:
        """Run until stop() is called."""
        self.start()
        try:
            while self._running:
                self.step()
        finally:
            self.shutdown()

    def step(self) -> None:
        """Wait for one event or the next tick, whichever comes first."""
        if self._next_tick is None:
            self._next_tick = self._clock()

        timeout = max(0.0, self._next_tick - self._clock())
        try:
            message = self._events.get(timeout=timeout)
        except Empty:
            message = None

        if message is not None:
            self.process(message)

        now = self._clock()
        if now >= self._next_tick:
            self.tick()
            self._next_tick += self.config.tick_interval
            if self._next_tick < now:
                # Fell behind (suspend, slow MIDI); don't burst ticks to catch up
                self._next_tick = now + self.config.tick_interval

    def process_pending(self) -> int:
        """
        Apply every queued event without waiting.

        Returns:
            Number of events applied
        """
        applied = 0
        while True:
            try:
                message = self._events.get_nowait()
            except Empty:
                return applied
            self.process(message)
            applied += 1

    def process(self, message: BridgeMessage) -> None:
        """Apply one queued event."""
        if message.event == BridgeEvent.OSC_MESSAGE:
            self.router.route(message.address, message.args)
        elif message.event == BridgeEvent.MIDI_CONNECTED:
            logger.info(f"MIDI output ready ({message.port_name}), clearing pedal LEDs")
            self.bank.all_off()
        elif message.event == BridgeEvent.MIDI_DISCONNECTED:
            logger.warning("MIDI output lost, LED updates paused until it returns")
        elif message.event == BridgeEvent.STOP:
            self._running = False

    def tick(self) -> None:
        """Advance the connection supervisor and the LED blink timers."""
        self.supervisor.tick()
        self.bank.tick()
