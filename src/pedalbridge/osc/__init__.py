"""OSC transport and message vocabulary."""

from . import addresses
from .link import OscLink
from .schema import (
    DISPLAY_SCHEMA,
    ENGINE_STATUS_SCHEMA,
    LED_SCHEMA,
    DisplayUpdate,
    EngineStatus,
    LedUpdate,
    MessageSchema,
)

__all__ = [
    "DISPLAY_SCHEMA",
    "DisplayUpdate",
    "ENGINE_STATUS_SCHEMA",
    "EngineStatus",
    "LED_SCHEMA",
    "LedUpdate",
    "MessageSchema",
    "OscLink",
    "addresses",
]
