"""Instruction execution against a :class:`chip8.vm.Chip8VM`.

Each operation has one handler in ``HANDLERS``; :func:`execute` is the single
dispatch point.  Handlers own PC movement: ordinary instructions advance by 2,
skips by 4, and control-flow instructions assign PC directly.

Flag-producing ALU handlers compute the flag from the operand values read
before the result is written, then write the result, then VF.  VF used as an
operand therefore contributes its old value, and VF used as the destination
ends up holding the flag.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict

from .constants import ADDRESS_MASK
from .decoding import DecodedInstr, Operation

if TYPE_CHECKING:  # pragma: no cover
    from .vm import Chip8VM

logger = logging.getLogger(__name__)

Handler = Callable[["Chip8VM", DecodedInstr], None]


def _advance(vm: "Chip8VM") -> None:
    vm.regs.pc = (vm.regs.pc + 2) & 0xFFFF


def _skip_if(vm: "Chip8VM", condition: bool) -> None:
    vm.regs.pc = (vm.regs.pc + (4 if condition else 2)) & 0xFFFF


def _index_address(vm: "Chip8VM") -> int:
    return vm.regs.i & ADDRESS_MASK


# ---------------------------------------------------------------------- #
# Control flow
# ---------------------------------------------------------------------- #
def _sys(vm: "Chip8VM", instr: DecodedInstr) -> None:
    logger.debug("Ignoring machine-code call %s at 0x%03X", instr, vm.regs.pc)
    _advance(vm)


def _cls(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.display.clear()
    _advance(vm)


def _ret(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.pc = vm.regs.pop()


def _jp(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.pc = instr.nnn


def _call(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.push(vm.regs.pc + 2)
    vm.regs.pc = instr.nnn


def _jp_v0(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.pc = (vm.regs.get(0) + instr.nnn) & 0xFFFF


def _se_imm(vm: "Chip8VM", instr: DecodedInstr) -> None:
    _skip_if(vm, vm.regs.get(instr.x) == instr.nn)


def _sne_imm(vm: "Chip8VM", instr: DecodedInstr) -> None:
    _skip_if(vm, vm.regs.get(instr.x) != instr.nn)


def _se_reg(vm: "Chip8VM", instr: DecodedInstr) -> None:
    _skip_if(vm, vm.regs.get(instr.x) == vm.regs.get(instr.y))


def _sne_reg(vm: "Chip8VM", instr: DecodedInstr) -> None:
    _skip_if(vm, vm.regs.get(instr.x) != vm.regs.get(instr.y))


# ---------------------------------------------------------------------- #
# Loads and arithmetic
# ---------------------------------------------------------------------- #
def _ld_imm(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.set(instr.x, instr.nn)
    _advance(vm)


def _add_imm(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.set(instr.x, vm.regs.get(instr.x) + instr.nn)
    _advance(vm)


def _ld_reg(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.set(instr.x, vm.regs.get(instr.y))
    _advance(vm)


def _logic(combine: Callable[[int, int], int]) -> Handler:
    def handler(vm: "Chip8VM", instr: DecodedInstr) -> None:
        vm.regs.set(instr.x, combine(vm.regs.get(instr.x), vm.regs.get(instr.y)))
        if vm.quirks.logic_resets_vf:
            vm.regs.vf = 0
        _advance(vm)

    return handler


def _add_reg(vm: "Chip8VM", instr: DecodedInstr) -> None:
    total = vm.regs.get(instr.x) + vm.regs.get(instr.y)
    vm.regs.set(instr.x, total)
    vm.regs.vf = 1 if total > 0xFF else 0
    _advance(vm)


def _sub(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vx = vm.regs.get(instr.x)
    vy = vm.regs.get(instr.y)
    vm.regs.set(instr.x, vx - vy)
    vm.regs.vf = 1 if vx >= vy else 0
    _advance(vm)


def _subn(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vx = vm.regs.get(instr.x)
    vy = vm.regs.get(instr.y)
    vm.regs.set(instr.x, vy - vx)
    vm.regs.vf = 1 if vy >= vx else 0
    _advance(vm)


def _shift_source(vm: "Chip8VM", instr: DecodedInstr) -> int:
    register = instr.y if vm.quirks.shift_uses_vy else instr.x
    return vm.regs.get(register)


def _shr(vm: "Chip8VM", instr: DecodedInstr) -> None:
    value = _shift_source(vm, instr)
    vm.regs.set(instr.x, value >> 1)
    vm.regs.vf = value & 0x1
    _advance(vm)


def _shl(vm: "Chip8VM", instr: DecodedInstr) -> None:
    value = _shift_source(vm, instr)
    vm.regs.set(instr.x, value << 1)
    vm.regs.vf = (value >> 7) & 0x1
    _advance(vm)


def _rnd(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.set(instr.x, vm.rng.getrandbits(8) & instr.nn)
    _advance(vm)


# ---------------------------------------------------------------------- #
# Index register and memory
# ---------------------------------------------------------------------- #
def _ld_i(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.i = instr.nnn
    _advance(vm)


def _add_i_vx(vm: "Chip8VM", instr: DecodedInstr) -> None:
    total = vm.regs.i + vm.regs.get(instr.x)
    vm.regs.i = total & ADDRESS_MASK
    if vm.quirks.index_overflow_sets_vf:
        vm.regs.vf = 1 if total > ADDRESS_MASK else 0
    _advance(vm)


def _ld_f_vx(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.i = vm.memory.font_address(vm.regs.get(instr.x))
    _advance(vm)


def _ld_b_vx(vm: "Chip8VM", instr: DecodedInstr) -> None:
    value = vm.regs.get(instr.x)
    vm.memory.write_block(
        _index_address(vm), (value // 100, (value // 10) % 10, value % 10)
    )
    _advance(vm)


def _ld_mem_vx(vm: "Chip8VM", instr: DecodedInstr) -> None:
    count = instr.x + 1
    vm.memory.write_block(_index_address(vm), vm.regs.v[:count])
    if vm.quirks.load_store_increments_i:
        vm.regs.i = (vm.regs.i + count) & 0xFFFF
    _advance(vm)


def _ld_vx_mem(vm: "Chip8VM", instr: DecodedInstr) -> None:
    count = instr.x + 1
    vm.regs.v[:count] = vm.memory.read_block(_index_address(vm), count)
    if vm.quirks.load_store_increments_i:
        vm.regs.i = (vm.regs.i + count) & 0xFFFF
    _advance(vm)


# ---------------------------------------------------------------------- #
# Display
# ---------------------------------------------------------------------- #
def _drw(vm: "Chip8VM", instr: DecodedInstr) -> None:
    rows = vm.memory.read_block(_index_address(vm), instr.n)
    collision = vm.display.draw_sprite(
        vm.regs.get(instr.x),
        vm.regs.get(instr.y),
        rows,
        clip=vm.quirks.clip_sprites,
    )
    vm.regs.vf = 1 if collision else 0
    _advance(vm)


# ---------------------------------------------------------------------- #
# Keypad and timers
# ---------------------------------------------------------------------- #
def _skp(vm: "Chip8VM", instr: DecodedInstr) -> None:
    _skip_if(vm, vm.keypad.is_pressed(vm.regs.get(instr.x)))


def _sknp(vm: "Chip8VM", instr: DecodedInstr) -> None:
    _skip_if(vm, not vm.keypad.is_pressed(vm.regs.get(instr.x)))


def _ld_vx_k(vm: "Chip8VM", instr: DecodedInstr) -> None:
    # PC stays on this instruction until the VM resumes from the wait.
    vm.begin_key_wait(instr.x)


def _ld_vx_dt(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.regs.set(instr.x, vm.timers.delay)
    _advance(vm)


def _ld_dt_vx(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.timers.set_delay(vm.regs.get(instr.x))
    _advance(vm)


def _ld_st_vx(vm: "Chip8VM", instr: DecodedInstr) -> None:
    vm.timers.set_sound(vm.regs.get(instr.x))
    _advance(vm)


HANDLERS: Dict[Operation, Handler] = {
    Operation.SYS: _sys,
    Operation.CLS: _cls,
    Operation.RET: _ret,
    Operation.JP: _jp,
    Operation.CALL: _call,
    Operation.SE_IMM: _se_imm,
    Operation.SNE_IMM: _sne_imm,
    Operation.SE_REG: _se_reg,
    Operation.LD_IMM: _ld_imm,
    Operation.ADD_IMM: _add_imm,
    Operation.LD_REG: _ld_reg,
    Operation.OR: _logic(lambda a, b: a | b),
    Operation.AND: _logic(lambda a, b: a & b),
    Operation.XOR: _logic(lambda a, b: a ^ b),
    Operation.ADD_REG: _add_reg,
    Operation.SUB: _sub,
    Operation.SHR: _shr,
    Operation.SUBN: _subn,
    Operation.SHL: _shl,
    Operation.SNE_REG: _sne_reg,
    Operation.LD_I: _ld_i,
    Operation.JP_V0: _jp_v0,
    Operation.RND: _rnd,
    Operation.DRW: _drw,
    Operation.SKP: _skp,
    Operation.SKNP: _sknp,
    Operation.LD_VX_DT: _ld_vx_dt,
    Operation.LD_VX_K: _ld_vx_k,
    Operation.LD_DT_VX: _ld_dt_vx,
    Operation.LD_ST_VX: _ld_st_vx,
    Operation.ADD_I_VX: _add_i_vx,
    Operation.LD_F_VX: _ld_f_vx,
    Operation.LD_B_VX: _ld_b_vx,
    Operation.LD_MEM_VX: _ld_mem_vx,
    Operation.LD_VX_MEM: _ld_vx_mem,
}


def execute(vm: "Chip8VM", instr: DecodedInstr) -> None:
    """Apply one decoded instruction to ``vm``."""

    HANDLERS[instr.op](vm, instr)


__all__ = ["HANDLERS", "Handler", "execute"]
