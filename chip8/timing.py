"""Per-instruction execution costs of the COSMAC VIP interpreter.

Used by the scheduler's ``"vip"`` timing mode, where each instruction
consumes its measured duration instead of one period of a fixed CPU clock.
DRW includes the wait for the next vertical blank, which is why it costs
more than a whole 60 Hz frame.
"""

from __future__ import annotations

from typing import Dict

from .decoding import Operation

INSTRUCTION_COST_US: Dict[Operation, int] = {
    Operation.SYS: 100,
    Operation.CLS: 109,
    Operation.RET: 105,
    Operation.JP: 105,
    Operation.CALL: 105,
    Operation.SE_IMM: 55,
    Operation.SNE_IMM: 55,
    Operation.SE_REG: 73,
    Operation.LD_IMM: 27,
    Operation.ADD_IMM: 45,
    Operation.LD_REG: 200,
    Operation.OR: 200,
    Operation.AND: 200,
    Operation.XOR: 200,
    Operation.ADD_REG: 200,
    Operation.SUB: 200,
    Operation.SHR: 200,
    Operation.SUBN: 200,
    Operation.SHL: 200,
    Operation.SNE_REG: 73,
    Operation.LD_I: 55,
    Operation.JP_V0: 105,
    Operation.RND: 164,
    Operation.DRW: 22734,
    Operation.SKP: 73,
    Operation.SKNP: 73,
    Operation.LD_VX_DT: 45,
    Operation.LD_VX_K: 100,
    Operation.LD_DT_VX: 45,
    Operation.LD_ST_VX: 45,
    Operation.ADD_I_VX: 86,
    Operation.LD_F_VX: 91,
    Operation.LD_B_VX: 927,
    Operation.LD_MEM_VX: 605,
    Operation.LD_VX_MEM: 605,
}

# Charged for each idle slice while the CPU waits on a key press.
IDLE_COST_US = INSTRUCTION_COST_US[Operation.LD_VX_K]


def instruction_cost_ns(op: Operation) -> int:
    return INSTRUCTION_COST_US[op] * 1000


__all__ = ["INSTRUCTION_COST_US", "IDLE_COST_US", "instruction_cost_ns"]
