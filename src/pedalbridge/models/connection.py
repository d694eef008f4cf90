"""Connection state model."""

from pydantic import BaseModel, Field

from .enums import ConnectionPhase

# Heartbeat countdown bounds, in ticks
HEARTBEAT_RESET = 5
HEARTBEAT_LOST_THRESHOLD = -5


class ConnectionState(BaseModel):
    """
    Process-wide state of the link to the looping engine.

    Owned by the ConnectionSupervisor; the message router reads and updates
    the engine-reported fields (labels, LED count, identity).
    """

    phase: ConnectionPhase = ConnectionPhase.DISCONNECTED
    receive_port: int | None = Field(default=None, description="Bound OSC receive port")
    send_port: int | None = Field(default=None, description="Bound OSC send port")
    heartbeat_countdown: int = Field(default=HEARTBEAT_RESET, description="Ticks of silence left")
    pinged: bool = Field(default=False, description="Initial ping sent for this connection")

    # Last values reported by the engine
    engine_identity: int | None = None
    led_count: int = 0
    host_label: str = ""
    version_label: str = ""

    # Board heartbeat indicator state
    heartbeat_led_on: bool = False

    @property
    def is_bound(self) -> bool:
        """Check if both endpoints are bound."""
        return self.receive_port is not None and self.send_port is not None

    @property
    def is_connected(self) -> bool:
        """Check if the link is up."""
        return self.phase == ConnectionPhase.CONNECTED

    def clear_endpoints(self) -> None:
        """Forget both endpoints and go back to the disconnected phase."""
        self.receive_port = None
        self.send_port = None
        self.pinged = False
        self.phase = ConnectionPhase.DISCONNECTED
