"""Exception hierarchy for the CHIP-8 virtual machine."""

from __future__ import annotations

from typing import Optional


class Chip8Error(Exception):
    """Base class for every error raised by the VM core."""


class MachineFault(Chip8Error):
    """Fatal execution fault.

    ``pc`` and ``opcode`` identify the offending instruction.  They are filled
    in by :class:`chip8.vm.Chip8VM` when the fault surfaces, so lower layers
    (memory, stack, decoder) can raise without knowing where they were called
    from.
    """

    def __init__(
        self,
        message: str,
        *,
        pc: Optional[int] = None,
        opcode: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.opcode = opcode

    def attach(self, pc: int, opcode: Optional[int]) -> None:
        if self.pc is None:
            self.pc = pc
        if self.opcode is None:
            self.opcode = opcode

    def __str__(self) -> str:
        parts = [self.message]
        if self.pc is not None:
            parts.append(f"pc=0x{self.pc:03X}")
        if self.opcode is not None:
            parts.append(f"opcode=0x{self.opcode:04X}")
        return " ".join(parts)


class MemoryFault(MachineFault):
    """Access outside 0x000-0xFFF."""

    def __init__(self, address: int, *, access: str = "access") -> None:
        super().__init__(f"Memory {access} out of range: 0x{address:X}")
        self.address = address
        self.access = access


class UnknownOpcode(MachineFault):
    """Instruction word that matches no CHIP-8 encoding."""

    def __init__(self, opcode: int) -> None:
        super().__init__(f"Unknown opcode 0x{opcode:04X}", opcode=opcode)


class StackOverflow(MachineFault):
    """CALL with a full return stack."""


class StackUnderflow(MachineFault):
    """RET with an empty return stack."""


class LoadError(Chip8Error):
    """Program image rejected at load time."""


__all__ = [
    "Chip8Error",
    "MachineFault",
    "MemoryFault",
    "UnknownOpcode",
    "StackOverflow",
    "StackUnderflow",
    "LoadError",
]
