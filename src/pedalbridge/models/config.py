"""Bridge configuration model."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from pedalbridge.utils.persistence import PydanticPersistence

DEFAULT_CONFIG_DIR = Path.home() / ".pedalbridge"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.json"


class BridgeConfig(BaseModel):
    """Bridge configuration and settings."""

    model_config = ConfigDict(validate_assignment=True)

    # MIDI settings
    midi_output: str | None = Field(
        default=None,
        description=(
            "MIDI output port name. Doesn't have to be an exact match: the first "
            "output port containing this text (case-insensitive) is used."
        ),
    )
    midi_channel: int = Field(
        default=1,
        ge=0,
        le=16,
        description="MIDI channel for Control-Change messages (1-16, 0 = any)",
    )
    midi_poll_interval: float = Field(
        default=2.0, gt=0, description="How often to check for MIDI device changes (seconds)"
    )

    # OSC settings
    osc_host: str = Field(default="127.0.0.1", description="Host the looping engine listens on")
    osc_send_port: int = Field(
        default=9000, ge=1, le=65535, description="UDP port the engine receives OSC on"
    )
    osc_receive_port: int = Field(
        default=9001, ge=1, le=65535, description="UDP port this bridge receives OSC on"
    )

    # Timing
    tick_interval: float = Field(
        default=0.2, gt=0, description="Period of the heartbeat/blink tick (seconds)"
    )

    # Directive parsing
    hex_numbers: bool = Field(
        default=False, description="Interpret directive numbers as hexadecimal by default"
    )

    @property
    def wire_channel(self) -> int:
        """Zero-based channel for mido (channel 0 = any is sent on channel 1)."""
        return max(self.midi_channel, 1) - 1

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "BridgeConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses default location
                  (~/.pedalbridge/config.json).

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        PydanticPersistence.save_json(self, path)
