"""Message router: decodes engine messages and applies them."""

import logging
from typing import Any, Callable, Sequence

from pedalbridge.devices.fcb1010 import PedalOutput
from pedalbridge.exceptions import MessageDecodeError
from pedalbridge.models import LedMode
from pedalbridge.osc import addresses
from pedalbridge.osc.schema import (
    DISPLAY_SCHEMA,
    ENGINE_STATUS_SCHEMA,
    LED_SCHEMA,
    EngineStatus,
    describe_arguments,
)

from .led_bank import LedBank
from .supervisor import ConnectionSupervisor

logger = logging.getLogger(__name__)


class MessageRouter:
    """
    Dispatches inbound OSC messages by address prefix.

    Handles the four engine messages:
    - /pingack: engine answered our ping, (re)build the LED bank
    - /heartbeat: engine is alive; detect engine restarts and new LEDs
    - /led: one LED changed
    - /display: selected loop changed

    Every recognized message counts as a sign of life for the supervisor.
    Messages whose arguments don't match the schema are logged and dropped
    without touching any state. Anything else is ignored.
    """

    def __init__(self, bank: LedBank, supervisor: ConnectionSupervisor, output: PedalOutput):
        """
        Initialize the router.

        Args:
            bank: LED bank to update
            supervisor: Connection supervisor (liveness and outbound requests)
            output: Pedal output for the display and heartbeat indicator
        """
        self.bank = bank
        self.supervisor = supervisor
        self.output = output
        self._routes: list[tuple[str, Callable[[str, Sequence[Any]], None]]] = [
            (addresses.PINGACK, self.handle_pingack),
            (addresses.LED, self.handle_led),
            (addresses.DISPLAY, self.handle_display),
            (addresses.HEARTBEAT, self.handle_heartbeat),
        ]

    @property
    def state(self):
        """Connection state shared with the supervisor."""
        return self.supervisor.state

    def route(self, address: str, args: Sequence[Any]) -> bool:
        """
        Handle one inbound message.

        Args:
            address: OSC address pattern
            args: Positional OSC arguments

        Returns:
            True if the address was recognized (whether or not it decoded)
        """
        if not address.startswith(addresses.HEARTBEAT):
            logger.debug(f"OSC message {address}, {len(args)} argument(s): {describe_arguments(args)}")

        for prefix, handler in self._routes:
            if address.startswith(prefix):
                try:
                    handler(address, args)
                except MessageDecodeError as e:
                    logger.warning(e.technical_message)
                return True

        logger.debug(f"Ignoring unrecognized OSC address {address}")
        return False

    def handle_pingack(self, address: str, args: Sequence[Any]) -> None:
        """Engine answered our ping: adopt its identity and rebuild the LEDs."""
        status: EngineStatus = ENGINE_STATUS_SCHEMA.decode(address, args)
        self._store_labels(status)
        self.state.engine_identity = status.identity

        if status.led_count > 0:
            self._rebuild(status.led_count)

        self.supervisor.mark_alive()

    def handle_heartbeat(self, address: str, args: Sequence[Any]) -> None:
        """Engine heartbeat: resync on engine change, register new LEDs, blink."""
        status: EngineStatus = ENGINE_STATUS_SCHEMA.decode(address, args)
        self._store_labels(status)

        if status.identity != self.state.engine_identity:
            if status.led_count > 0:
                logger.info(
                    f"Engine changed (identity {self.state.engine_identity} -> "
                    f"{status.identity}), reinitializing"
                )
                self._rebuild(status.led_count)
                self.state.engine_identity = status.identity
        elif status.led_count > self.bank.count:
            added = self.bank.append(status.led_count)
            for index in added:
                self._request_updates(index)
                self.output.set_led(index, False)
            self.state.led_count = self.bank.count
        elif status.led_count < self.bank.count:
            # Shrinking is never reported by the engine; leave the bank as is
            logger.debug(f"Ignoring smaller LED count {status.led_count} (have {self.bank.count})")

        self.state.heartbeat_led_on = self.output.toggle_heartbeat(self.state.heartbeat_led_on)
        self.supervisor.mark_alive()

    def handle_led(self, address: str, args: Sequence[Any]) -> None:
        """Apply one LED update."""
        update = LED_SCHEMA.decode(address, args)
        try:
            mode = LedMode(update.mode)
        except ValueError as e:
            raise MessageDecodeError(address, f"unknown LED mode {update.mode}") from e

        self.bank.set_led(update.index, update.on != 0, update.blink_timer, mode)
        self.supervisor.mark_alive()

    def handle_display(self, address: str, args: Sequence[Any]) -> None:
        """Show the selected loop on the two-digit display."""
        update = DISPLAY_SCHEMA.decode(address, args)
        self.output.show_display(update.selected_slot)
        self.supervisor.mark_alive()

    def _store_labels(self, status: EngineStatus) -> None:
        self.state.host_label = status.host_label
        self.state.version_label = status.version_label

    def _rebuild(self, count: int) -> None:
        """Replace the bank and ask the engine to resend every LED."""
        self.bank.reset(count)
        self.state.led_count = count
        for index in range(count):
            self._request_updates(index)
        self.bank.flush_all()

    def _request_updates(self, index: int) -> None:
        """
        Re-register for auto updates and query current state.

        Unregistering first makes the engine send its canonical state
        instead of assuming we already have it.
        """
        logger.debug(f"Requesting state for LED {index}")
        self.supervisor.send(addresses.UNREGISTER_AUTO_UPDATE, self.supervisor.reply_args())
        self.supervisor.send(addresses.REGISTER_AUTO_UPDATE, self.supervisor.reply_args())
        self.supervisor.send(addresses.QUERY_LEDS, self.supervisor.reply_args(addresses.LED))
        self.supervisor.send(addresses.QUERY_DISPLAY, self.supervisor.reply_args(addresses.DISPLAY))
