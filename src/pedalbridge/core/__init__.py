"""Core bridge logic: LED bank, connection supervisor, message router."""

from .bridge import Bridge
from .led_bank import LedBank
from .router import MessageRouter
from .supervisor import ConnectionSupervisor

__all__ = ["Bridge", "ConnectionSupervisor", "LedBank", "MessageRouter"]
