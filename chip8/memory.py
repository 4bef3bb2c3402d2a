"""Flat 4 KiB CHIP-8 memory with bounds checking."""

from __future__ import annotations

import logging
from typing import Iterable

from .constants import (
    FONT_GLYPH_SIZE,
    FONT_SPRITES,
    FONT_START,
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
)
from .errors import LoadError, MemoryFault

logger = logging.getLogger(__name__)


class Chip8Memory:
    """Byte-addressable RAM covering 0x000-0xFFF.

    The font table is installed on construction and on :meth:`clear`.  Every
    access is bounds-checked; block helpers validate the full range before
    touching anything so a faulting instruction leaves memory unchanged.
    """

    def __init__(self) -> None:
        self.data = bytearray(MEMORY_SIZE)
        self._install_font()

    def _install_font(self) -> None:
        self.data[FONT_START : FONT_START + len(FONT_SPRITES)] = FONT_SPRITES

    def clear(self) -> None:
        """Zero all memory and reinstall the font table."""

        self.data[:] = bytes(MEMORY_SIZE)
        self._install_font()

    @staticmethod
    def _check(address: int, length: int = 1, *, access: str = "access") -> None:
        if address < 0 or address + length > MEMORY_SIZE:
            bad = address if address < 0 or address >= MEMORY_SIZE else MEMORY_SIZE
            raise MemoryFault(bad, access=access)

    def read_byte(self, address: int) -> int:
        self._check(address, access="read")
        return self.data[address]

    def write_byte(self, address: int, value: int) -> None:
        self._check(address, access="write")
        self.data[address] = value & 0xFF

    def read_word(self, address: int) -> int:
        """Read a big-endian 16-bit instruction word."""

        self._check(address, 2, access="fetch")
        return (self.data[address] << 8) | self.data[address + 1]

    def read_block(self, address: int, length: int) -> bytes:
        self._check(address, length, access="read")
        return bytes(self.data[address : address + length])

    def write_block(self, address: int, values: Iterable[int]) -> None:
        payload = bytes(value & 0xFF for value in values)
        self._check(address, len(payload), access="write")
        self.data[address : address + len(payload)] = payload

    @staticmethod
    def check_program_size(program: bytes) -> None:
        if len(program) > MAX_PROGRAM_SIZE:
            raise LoadError(
                f"Program is {len(program)} bytes; at most {MAX_PROGRAM_SIZE} fit "
                f"at 0x{PROGRAM_START:03X}"
            )

    def load_program(self, program: bytes) -> None:
        """Copy a program image to ``PROGRAM_START``."""

        self.check_program_size(program)
        self.data[PROGRAM_START : PROGRAM_START + len(program)] = program
        logger.debug("Loaded %d program bytes at 0x%03X", len(program), PROGRAM_START)

    @staticmethod
    def font_address(digit: int) -> int:
        """Address of the glyph for hexadecimal ``digit`` (low nibble only)."""

        return FONT_START + (digit & 0xF) * FONT_GLYPH_SIZE

    def __len__(self) -> int:
        return MEMORY_SIZE


__all__ = ["Chip8Memory"]
