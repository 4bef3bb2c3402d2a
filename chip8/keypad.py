"""Hexadecimal keypad state and the key-wait suspension marker."""

from __future__ import annotations

from typing import List, Optional

from .constants import NUM_KEYS


class Keypad:
    """Sixteen key flags set by the host between scheduler steps.

    ``wait_register`` is set while the CPU is suspended on ``LD Vx, K``.  A
    0->1 transition observed by :meth:`set_key` during the wait is latched in
    ``pending_press`` for the VM to consume.
    """

    def __init__(self) -> None:
        self._keys = [False] * NUM_KEYS
        self.wait_register: Optional[int] = None
        self.pending_press: Optional[int] = None

    def reset(self) -> None:
        self._keys = [False] * NUM_KEYS
        self.wait_register = None
        self.pending_press = None

    @staticmethod
    def _validate(index: int) -> None:
        if not 0 <= index < NUM_KEYS:
            raise ValueError(f"Key index out of range: {index!r}")

    def set_key(self, index: int, pressed: bool) -> bool:
        """Update one key; returns True for a released->pressed transition."""

        self._validate(index)
        was_pressed = self._keys[index]
        self._keys[index] = bool(pressed)
        transitioned = bool(pressed) and not was_pressed
        if transitioned and self.waiting and self.pending_press is None:
            self.pending_press = index
        return transitioned

    def is_pressed(self, index: int) -> bool:
        return self._keys[index & 0xF]

    def pressed_keys(self) -> List[int]:
        return [index for index, down in enumerate(self._keys) if down]

    def release_all(self) -> None:
        self._keys = [False] * NUM_KEYS

    @property
    def waiting(self) -> bool:
        return self.wait_register is not None

    def begin_wait(self, register: int) -> None:
        self.wait_register = register
        self.pending_press = None

    def end_wait(self) -> None:
        self.wait_register = None
        self.pending_press = None


__all__ = ["Keypad"]
