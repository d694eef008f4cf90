"""Event types shared between transports and the bridge loop."""

from .events import BridgeEvent, BridgeMessage

__all__ = ["BridgeEvent", "BridgeMessage"]
