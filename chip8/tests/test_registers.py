from __future__ import annotations

import pytest

from chip8.errors import StackOverflow, StackUnderflow
from chip8.registers import RegisterFile


def test_power_on_state() -> None:
    regs = RegisterFile()

    assert list(regs.v) == [0] * 16
    assert regs.i == 0
    assert regs.pc == 0x200
    assert regs.sp == 0


def test_set_wraps_to_8_bits() -> None:
    regs = RegisterFile()
    regs.set(3, 0x123)
    assert regs.get(3) == 0x23


def test_vf_is_plain_register_15() -> None:
    regs = RegisterFile()
    regs.set(0xF, 7)
    assert regs.vf == 7
    regs.vf = 1
    assert regs.get(0xF) == 1


def test_stack_accepts_sixteen_entries_then_overflows() -> None:
    regs = RegisterFile()
    for depth in range(16):
        regs.push(0x200 + depth * 2)
    assert regs.sp == 16

    with pytest.raises(StackOverflow):
        regs.push(0x400)
    assert regs.sp == 16


def test_pop_returns_last_pushed() -> None:
    regs = RegisterFile()
    regs.push(0x222)
    regs.push(0x444)

    assert regs.pop() == 0x444
    assert regs.pop() == 0x222
    assert regs.sp == 0


def test_pop_on_empty_stack_underflows() -> None:
    regs = RegisterFile()
    with pytest.raises(StackUnderflow):
        regs.pop()
    assert regs.sp == 0


def test_reset_clears_everything() -> None:
    regs = RegisterFile()
    regs.set(1, 9)
    regs.i = 0x300
    regs.pc = 0x456
    regs.push(0x202)
    regs.reset()

    assert regs.get(1) == 0
    assert regs.i == 0
    assert regs.pc == 0x200
    assert regs.stack == ()
