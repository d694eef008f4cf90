"""Connection supervisor: binds the OSC link and watches its heartbeat."""

import logging
from typing import Any, Optional, Protocol, Sequence

from pedalbridge.exceptions import OscBindError
from pedalbridge.models import (
    HEARTBEAT_LOST_THRESHOLD,
    HEARTBEAT_RESET,
    ConnectionPhase,
    ConnectionState,
)
from pedalbridge.osc import addresses

logger = logging.getLogger(__name__)


class Link(Protocol):
    """Endpoint operations the supervisor needs (see OscLink)."""

    def open_sender(self, port: int) -> None: ...

    def open_receiver(self, port: int) -> None: ...

    def send(self, address: str, args: Sequence[Any]) -> None: ...

    def close(self) -> None: ...


class ConnectionSupervisor:
    """
    Drives the link state machine: DISCONNECTED → CONNECTING → CONNECTED.

    Called once per tick. While disconnected, every tick retries whichever
    endpoint isn't bound yet; there is no backoff beyond the tick period.
    Once connected, the heartbeat countdown falls by one per tick and is
    reset by any message from the engine. At zero a liveness probe is sent;
    when the countdown drops below the loss threshold both endpoints are
    released and the next tick starts reconnecting.
    """

    def __init__(
        self,
        link: Link,
        send_port: int,
        receive_port: int,
        state: Optional[ConnectionState] = None,
    ):
        """
        Initialize the supervisor.

        Args:
            link: OSC link providing the endpoints
            send_port: UDP port the engine receives on
            receive_port: UDP port this bridge receives on
            state: Connection state to drive (a fresh one if None)
        """
        self.link = link
        self.send_port = send_port
        self.receive_port = receive_port
        self.state = state or ConnectionState()

    @property
    def phase(self) -> ConnectionPhase:
        """Current phase of the link."""
        return self.state.phase

    @property
    def is_connected(self) -> bool:
        """Check if the link is up."""
        return self.state.is_connected

    def tick(self) -> None:
        """Advance the state machine by one tick."""
        if self.state.is_connected:
            self._tick_connected()
        else:
            self._try_connect()

    def mark_alive(self) -> None:
        """Record that the engine was just heard from."""
        self.state.heartbeat_countdown = HEARTBEAT_RESET

    def send(self, address: str, args: Sequence[Any] = ()) -> bool:
        """
        Send a request to the engine, best effort.

        Returns:
            True if the datagram was handed to the socket
        """
        if self.state.send_port is None:
            logger.debug(f"Dropping {address}: not connected")
            return False

        try:
            self.link.send(address, args)
            return True
        except (OSError, RuntimeError) as e:
            logger.warning(f"Could not send {address}: {e}")
            return False

    def reply_args(self, reply_address: Optional[str] = None) -> list:
        """Arguments telling the engine where to reply."""
        args: list = [addresses.REPLY_HOST, self.state.receive_port]
        if reply_address is not None:
            args.append(reply_address)
        return args

    def close(self) -> None:
        """Release both endpoints."""
        self.link.close()
        self.state.clear_endpoints()

    def _try_connect(self) -> None:
        if self.state.send_port is None:
            try:
                self.link.open_sender(self.send_port)
                self.state.send_port = self.send_port
            except OscBindError as e:
                logger.warning(e.technical_message)

        if self.state.receive_port is None:
            try:
                self.link.open_receiver(self.receive_port)
                self.state.receive_port = self.receive_port
            except OscBindError as e:
                logger.warning(e.technical_message)

        if not self.state.is_bound:
            return

        self.state.phase = ConnectionPhase.CONNECTING
        if not self.state.pinged:
            self.send(addresses.PING, self.reply_args(addresses.PINGACK))
            self.state.pinged = True

        self.state.heartbeat_countdown = HEARTBEAT_RESET
        self.state.phase = ConnectionPhase.CONNECTED
        logger.info(
            f"Connected to OSC ports {self.state.receive_port} (in) "
            f"and {self.state.send_port} (out)"
        )

    def _tick_connected(self) -> None:
        if self.state.heartbeat_countdown == 0:
            logger.debug("Engine quiet, sending liveness probe")
            self.send(addresses.PING, self.reply_args(addresses.HEARTBEAT))

        self.state.heartbeat_countdown -= 1

        if self.state.heartbeat_countdown < HEARTBEAT_LOST_THRESHOLD:
            logger.warning("Lost heartbeat from engine, reconnecting")
            self.close()
