"""Delay and sound timers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TimerPair:
    """Two 8-bit down-counters decremented once per 60 Hz tick."""

    delay: int = 0
    sound: int = 0

    def __post_init__(self) -> None:
        self.delay = int(self.delay) & 0xFF
        self.sound = int(self.sound) & 0xFF

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0

    def tick(self) -> None:
        """Advance one 60 Hz period; counters stop at zero."""

        if self.delay:
            self.delay -= 1
        if self.sound:
            self.sound -= 1

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    @property
    def sound_active(self) -> bool:
        return self.sound > 0


__all__ = ["TimerPair"]
