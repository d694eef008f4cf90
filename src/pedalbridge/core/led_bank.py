"""LED bank: per-indicator state and blink timing."""

import logging

from pedalbridge.devices.fcb1010 import PedalMapper, PedalOutput
from pedalbridge.models import LedMode, LedState

logger = logging.getLogger(__name__)


class LedBank:
    """
    Owns the state of every engine-reported LED.

    Any change to an LED's illumination is flushed to the pedal board
    immediately. Blinking LEDs toggle on their own as tick() is called.
    The bank is empty until the engine reports its indicator count.
    """

    def __init__(self, output: PedalOutput, initial_count: int = 0):
        """
        Initialize the LED bank.

        Args:
            output: Pedal output used to flush LED state
            initial_count: Number of LEDs before the engine reports a count
        """
        self.output = output
        self._leds: list[LedState] = [LedState.fresh(i) for i in range(initial_count)]

    @property
    def count(self) -> int:
        """Number of LEDs currently tracked."""
        return len(self._leds)

    @property
    def states(self) -> tuple[LedState, ...]:
        """Snapshot of all LED states (copies)."""
        return tuple(led.model_copy() for led in self._leds)

    def __len__(self) -> int:
        return len(self._leds)

    def __getitem__(self, index: int) -> LedState:
        return self._leds[index]

    def reset(self, count: int) -> None:
        """
        Replace every LED with `count` fresh, dark entries.

        Nothing is flushed; the caller decides when to redraw.
        """
        self._leds = [LedState.fresh(i) for i in range(count)]
        logger.info(f"LED bank reset to {count} LEDs")

    def append(self, count: int) -> list[int]:
        """
        Grow the bank to `count` LEDs, leaving existing LEDs untouched.

        Args:
            count: New total number of LEDs

        Returns:
            Indices of the LEDs that were added (empty if count doesn't grow)
        """
        added = list(range(len(self._leds), count))
        self._leds.extend(LedState.fresh(i) for i in added)
        if added:
            logger.info(f"LED bank grew to {count} LEDs")
        return added

    def set_led(self, index: int, on: bool, blink_timer: int, mode: LedMode) -> None:
        """
        Update one LED and flush it.

        Out-of-range indices are ignored (stale or malformed update).

        Args:
            index: Logical LED index
            on: Illumination
            blink_timer: Ticks until the next blink toggle
            mode: Display mode going forward
        """
        if not 0 <= index < len(self._leds):
            return

        led = self._leds[index]
        led.on = on
        led.blink_timer = blink_timer
        led.mode = mode
        self.output.set_led(led.index, led.on)

    def tick(self) -> None:
        """Advance blink timers, toggling LEDs whose timer ran out."""
        for led in self._leds:
            if not led.is_blinking:
                continue

            if led.blink_timer <= 0:
                led.on = not led.on
                self.output.set_led(led.index, led.on)
                led.reload_timer()
            else:
                led.blink_timer -= 1

    def all_off(self) -> None:
        """Force every LED off and flush each one, plus any unreported pedals."""
        for led in self._leds:
            led.on = False
            self.output.led_off(led.index)

        self.output.all_off(PedalMapper.NUM_LED_PEDALS, start=len(self._leds))

    def flush_all(self) -> None:
        """Re-send the illumination of every LED."""
        for led in self._leds:
            self.output.set_led(led.index, led.on)
