"""Root of the pedal bridge exception tree.

Every error carries two messages: a short one for the terminal and a
detailed one for the log file. Errors the user can fix also carry a hint.
"""

from typing import Optional


class PedalBridgeError(Exception):
    """
    Base exception for all pedal bridge errors.

    Attributes:
        user_message: Short message for the terminal (also what str() gives)
        technical_message: Detailed message for the log
        recoverable: False if the bridge can't carry on after this error
        recovery_hint: What the user can do about it, if anything
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message if technical_message else user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the hint, when there is one."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
