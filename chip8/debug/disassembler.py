"""Linear disassembler for CHIP-8 program images."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..constants import PROGRAM_START
from ..decoding import DecodedInstr, try_decode


@dataclass(frozen=True)
class DisassembledLine:
    address: int
    word: int
    instr: Optional[DecodedInstr]

    @property
    def text(self) -> str:
        if self.instr is None:
            return f"DW 0x{self.word:04X}"
        return self.instr.render()

    def __str__(self) -> str:
        return f"{self.address:03X}: {self.word:04X}  {self.text}"


def disassemble(program: bytes, base: int = PROGRAM_START) -> List[DisassembledLine]:
    """Decode ``program`` two bytes at a time starting at ``base``.

    Words that match no encoding (sprite data, usually) are emitted as
    ``DW`` lines.  A trailing odd byte is padded with zero.
    """

    lines: List[DisassembledLine] = []
    for offset in range(0, len(program), 2):
        hi = program[offset]
        lo = program[offset + 1] if offset + 1 < len(program) else 0
        word = (hi << 8) | lo
        lines.append(DisassembledLine(base + offset, word, try_decode(word)))
    return lines


def format_listing(program: bytes, base: int = PROGRAM_START) -> str:
    return "\n".join(str(line) for line in disassemble(program, base))


__all__ = ["DisassembledLine", "disassemble", "format_listing"]
