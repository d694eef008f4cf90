"""LED state model."""

from pydantic import BaseModel, Field

from .enums import LedMode

# Blink timer reload values, in ticks
TIMER_OFF = 0
TIMER_FAST_BLINK = 1
TIMER_BLINK = 3


class LedState(BaseModel):
    """State of one engine-reported indicator on the pedal board."""

    index: int = Field(ge=0, description="Logical indicator index (engine report order)")
    on: bool = Field(default=False, description="Current illumination")
    blink_timer: int = Field(default=TIMER_OFF, description="Ticks until the next blink toggle")
    mode: LedMode = Field(default=LedMode.DARK, description="Display mode")

    @classmethod
    def fresh(cls, index: int) -> "LedState":
        """Create a dark LED with a cleared timer."""
        return cls(index=index)

    @property
    def is_blinking(self) -> bool:
        """Check if this LED advances on every tick."""
        return self.mode.is_blinking

    def reload_timer(self) -> None:
        """Reset the blink timer to the mode-specific period."""
        self.blink_timer = TIMER_FAST_BLINK if self.mode == LedMode.FAST_BLINK else TIMER_BLINK
