"""Operation tags and the decoded-instruction record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Operation(str, Enum):
    """Every CHIP-8 instruction encoding, one member per operation."""

    SYS = "SYS"
    CLS = "CLS"
    RET = "RET"
    JP = "JP"
    CALL = "CALL"
    SE_IMM = "SE_IMM"
    SNE_IMM = "SNE_IMM"
    SE_REG = "SE_REG"
    LD_IMM = "LD_IMM"
    ADD_IMM = "ADD_IMM"
    LD_REG = "LD_REG"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD_REG = "ADD_REG"
    SUB = "SUB"
    SHR = "SHR"
    SUBN = "SUBN"
    SHL = "SHL"
    SNE_REG = "SNE_REG"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND = "RND"
    DRW = "DRW"
    SKP = "SKP"
    SKNP = "SKNP"
    LD_VX_DT = "LD_VX_DT"
    LD_VX_K = "LD_VX_K"
    LD_DT_VX = "LD_DT_VX"
    LD_ST_VX = "LD_ST_VX"
    ADD_I_VX = "ADD_I_VX"
    LD_F_VX = "LD_F_VX"
    LD_B_VX = "LD_B_VX"
    LD_MEM_VX = "LD_MEM_VX"
    LD_VX_MEM = "LD_VX_MEM"


_MNEMONICS: Dict[Operation, str] = {
    Operation.SYS: "SYS 0x{nnn:03X}",
    Operation.CLS: "CLS",
    Operation.RET: "RET",
    Operation.JP: "JP 0x{nnn:03X}",
    Operation.CALL: "CALL 0x{nnn:03X}",
    Operation.SE_IMM: "SE V{x:X}, 0x{nn:02X}",
    Operation.SNE_IMM: "SNE V{x:X}, 0x{nn:02X}",
    Operation.SE_REG: "SE V{x:X}, V{y:X}",
    Operation.LD_IMM: "LD V{x:X}, 0x{nn:02X}",
    Operation.ADD_IMM: "ADD V{x:X}, 0x{nn:02X}",
    Operation.LD_REG: "LD V{x:X}, V{y:X}",
    Operation.OR: "OR V{x:X}, V{y:X}",
    Operation.AND: "AND V{x:X}, V{y:X}",
    Operation.XOR: "XOR V{x:X}, V{y:X}",
    Operation.ADD_REG: "ADD V{x:X}, V{y:X}",
    Operation.SUB: "SUB V{x:X}, V{y:X}",
    Operation.SHR: "SHR V{x:X}, V{y:X}",
    Operation.SUBN: "SUBN V{x:X}, V{y:X}",
    Operation.SHL: "SHL V{x:X}, V{y:X}",
    Operation.SNE_REG: "SNE V{x:X}, V{y:X}",
    Operation.LD_I: "LD I, 0x{nnn:03X}",
    Operation.JP_V0: "JP V0, 0x{nnn:03X}",
    Operation.RND: "RND V{x:X}, 0x{nn:02X}",
    Operation.DRW: "DRW V{x:X}, V{y:X}, {n}",
    Operation.SKP: "SKP V{x:X}",
    Operation.SKNP: "SKNP V{x:X}",
    Operation.LD_VX_DT: "LD V{x:X}, DT",
    Operation.LD_VX_K: "LD V{x:X}, K",
    Operation.LD_DT_VX: "LD DT, V{x:X}",
    Operation.LD_ST_VX: "LD ST, V{x:X}",
    Operation.ADD_I_VX: "ADD I, V{x:X}",
    Operation.LD_F_VX: "LD F, V{x:X}",
    Operation.LD_B_VX: "LD B, V{x:X}",
    Operation.LD_MEM_VX: "LD [I], V{x:X}",
    Operation.LD_VX_MEM: "LD V{x:X}, [I]",
}


@dataclass(frozen=True, slots=True)
class DecodedInstr:
    """One decoded instruction word and all of its operand fields.

    Every field is always populated from the raw word; each operation reads
    only the ones it needs.
    """

    op: Operation
    opcode: int

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.opcode & 0xF

    @property
    def nn(self) -> int:
        return self.opcode & 0xFF

    @property
    def nnn(self) -> int:
        return self.opcode & 0xFFF

    @property
    def mnemonic(self) -> str:
        return self.render()

    def render(self) -> str:
        return _MNEMONICS[self.op].format(
            x=self.x, y=self.y, n=self.n, nn=self.nn, nnn=self.nnn
        )

    def __str__(self) -> str:
        return self.render()
