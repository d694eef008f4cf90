"""OSC network link to the looping engine (python-osc)."""

import logging
import threading
from typing import Any, Callable, Optional, Sequence

from pythonosc.dispatcher import Dispatcher
from pythonosc.osc_server import ThreadingOSCUDPServer
from pythonosc.udp_client import SimpleUDPClient

from pedalbridge.exceptions import OscBindError

logger = logging.getLogger(__name__)


class OscLink:
    """
    Send and receive endpoints for the engine's OSC bus.

    The receive endpoint runs a python-osc server on its own daemon thread.
    Every inbound message is handed to the `on_message` callback as
    (address, args) from that thread - the callback must only enqueue.
    """

    def __init__(
        self,
        host: str,
        on_message: Callable[[str, tuple], None],
        listen_host: str = "0.0.0.0",
        poll_interval: float = 0.1,
    ):
        """
        Initialize the link (nothing is bound yet).

        Args:
            host: Host the engine receives OSC on
            on_message: Callback receiving (address, args) for inbound messages
            listen_host: Interface the receive endpoint binds to
            poll_interval: Shutdown poll interval of the server thread (seconds)
        """
        self.host = host
        self.listen_host = listen_host
        self._on_message = on_message
        self._poll_interval = poll_interval
        self._client: Optional[SimpleUDPClient] = None
        self._server: Optional[ThreadingOSCUDPServer] = None
        self._server_thread: Optional[threading.Thread] = None

    @property
    def sender_open(self) -> bool:
        """Check if the send endpoint is bound."""
        return self._client is not None

    @property
    def receiver_open(self) -> bool:
        """Check if the receive endpoint is bound."""
        return self._server is not None

    def open_sender(self, port: int) -> None:
        """
        Bind the send endpoint.

        Raises:
            OscBindError: If the socket can't be created
        """
        try:
            self._client = SimpleUDPClient(self.host, port)
        except OSError as e:
            raise OscBindError(port, "send", str(e)) from e
        logger.info(f"Successfully connected to OSC send port {port}")

    def open_receiver(self, port: int) -> None:
        """
        Bind the receive endpoint and start serving.

        Raises:
            OscBindError: If the port is invalid or already in use
        """
        if not 0 < port < 65536:
            raise OscBindError(port, "receive", "invalid UDP port number")

        dispatcher = Dispatcher()
        dispatcher.set_default_handler(self._handle)

        try:
            self._server = ThreadingOSCUDPServer((self.listen_host, port), dispatcher)
        except OSError as e:
            raise OscBindError(port, "receive", str(e)) from e

        self._server_thread = threading.Thread(
            target=self._server.serve_forever,
            kwargs={"poll_interval": self._poll_interval},
            daemon=True,
        )
        self._server_thread.start()
        logger.info(f"Listening for OSC on port {port}")

    def send(self, address: str, args: Sequence[Any]) -> None:
        """
        Send a message to the engine.

        Raises:
            OSError: If the datagram can't be sent
            RuntimeError: If the send endpoint isn't bound
        """
        if self._client is None:
            raise RuntimeError("OSC send endpoint is not bound")
        self._client.send_message(address, list(args))

    def close_sender(self) -> None:
        """Release the send endpoint."""
        self._client = None

    def close_receiver(self) -> None:
        """Stop the server thread and release the receive endpoint."""
        if self._server is None:
            return

        self._server.shutdown()
        self._server.server_close()
        if self._server_thread and self._server_thread.is_alive():
            self._server_thread.join(timeout=1.0)

        self._server = None
        self._server_thread = None
        logger.debug("OSC receive endpoint closed")

    def close(self) -> None:
        """Release both endpoints."""
        self.close_receiver()
        self.close_sender()

    def _handle(self, address: str, *args: Any) -> None:
        try:
            self._on_message(address, args)
        except Exception as e:
            logger.error(f"Error in OSC message callback: {e}")
