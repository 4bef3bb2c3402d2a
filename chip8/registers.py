"""CHIP-8 register file and bounded return stack."""

from __future__ import annotations

from typing import List, Tuple

from .constants import FLAG_REGISTER, NUM_REGISTERS, PROGRAM_START, STACK_DEPTH
from .errors import StackOverflow, StackUnderflow


class RegisterFile:
    """V0-VF, the index register ``i``, ``pc`` and the call stack."""

    def __init__(self) -> None:
        self.v = bytearray(NUM_REGISTERS)
        self.i = 0
        self.pc = PROGRAM_START
        self._stack: List[int] = []

    def reset(self) -> None:
        self.v[:] = bytes(NUM_REGISTERS)
        self.i = 0
        self.pc = PROGRAM_START
        self._stack.clear()

    # ------------------------------------------------------------------ #
    # General purpose registers
    # ------------------------------------------------------------------ #
    def get(self, index: int) -> int:
        return self.v[index]

    def set(self, index: int, value: int) -> None:
        self.v[index] = value & 0xFF

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    # ------------------------------------------------------------------ #
    # Stack
    # ------------------------------------------------------------------ #
    @property
    def sp(self) -> int:
        """Current stack depth."""

        return len(self._stack)

    @property
    def stack(self) -> Tuple[int, ...]:
        return tuple(self._stack)

    def push(self, address: int) -> None:
        if len(self._stack) >= STACK_DEPTH:
            raise StackOverflow(f"Call stack overflow (depth {STACK_DEPTH})")
        self._stack.append(address & 0xFFFF)

    def pop(self) -> int:
        if not self._stack:
            raise StackUnderflow("Return with empty call stack")
        return self._stack.pop()

    def load_stack(self, addresses: Tuple[int, ...]) -> None:
        if len(addresses) > STACK_DEPTH:
            raise ValueError(f"Stack snapshot deeper than {STACK_DEPTH}")
        self._stack = [addr & 0xFFFF for addr in addresses]

    def to_dict(self) -> dict:
        values = {f"v{index:x}": self.v[index] for index in range(NUM_REGISTERS)}
        values["i"] = self.i
        values["pc"] = self.pc
        values["sp"] = self.sp
        return values


__all__ = ["RegisterFile"]
