"""End-to-end VM scenarios: programs, faults, key waits and lifecycle."""

from __future__ import annotations

import logging

import pytest

from chip8.errors import LoadError, MemoryFault, StackOverflow, StackUnderflow, UnknownOpcode
from chip8.vm import Chip8VM, CPUStatus


def test_add_without_carry_program() -> None:
    vm = Chip8VM()
    vm.load_program(bytes([0x60, 0x05, 0x61, 0x03, 0x80, 0x14]))

    for _ in range(3):
        vm.step_instruction()

    assert vm.regs.get(0) == 8
    assert vm.regs.vf == 0
    assert vm.regs.pc == 0x206
    assert vm.instruction_count == 3


def test_add_with_carry_program() -> None:
    vm = Chip8VM()
    vm.load_program(bytes([0x60, 0xFF, 0x61, 0x01, 0x80, 0x14]))
    vm.run(3)

    assert vm.regs.get(0) == 0
    assert vm.regs.vf == 1


def test_single_pixel_draw_and_redraw(load_words) -> None:
    # Sprite byte 0x80 lives right after the code at 0x20A.
    vm = load_words([0x00E0, 0xA20A, 0xD011, 0xD011, 0x1208, 0x8000])
    vm.run(3)
    assert vm.display.buffer[0][0] == 1
    assert vm.regs.vf == 0

    vm.step_instruction()
    assert vm.display.buffer[0][0] == 0
    assert vm.regs.vf == 1


def test_unknown_opcode_halts_without_touching_registers(load_words) -> None:
    vm = load_words([0x6A42, 0xFFFF])
    vm.step_instruction()
    before = bytes(vm.regs.v)

    with pytest.raises(UnknownOpcode) as excinfo:
        vm.step_instruction()

    fault = excinfo.value
    assert fault.pc == 0x202
    assert fault.opcode == 0xFFFF
    assert bytes(vm.regs.v) == before
    assert vm.regs.pc == 0x202
    assert vm.status is CPUStatus.HALTED
    assert vm.fault is fault


def test_halted_machine_does_not_execute(load_words) -> None:
    vm = load_words([0xFFFF, 0x6001])
    with pytest.raises(UnknownOpcode):
        vm.step_instruction()

    assert vm.step_instruction() is None
    assert vm.regs.get(0) == 0


def test_fault_is_logged(load_words, caplog) -> None:
    vm = load_words([0x5121])
    with caplog.at_level(logging.ERROR, logger="chip8.vm"):
        with pytest.raises(UnknownOpcode):
            vm.step_instruction()
    assert "0x5121" in caplog.text


def test_sixteen_nested_calls_then_overflow() -> None:
    # Each CALL targets the next word, nesting one level per instruction.
    words = [0x2000 | (0x202 + 2 * n) for n in range(17)]
    vm = Chip8VM()
    vm.load_program(b"".join(w.to_bytes(2, "big") for w in words))

    vm.run(16)
    assert vm.regs.sp == 16

    with pytest.raises(StackOverflow) as excinfo:
        vm.step_instruction()
    assert excinfo.value.pc == 0x220
    assert vm.regs.sp == 16
    assert vm.halted


def test_return_with_empty_stack_underflows(load_words) -> None:
    vm = load_words([0x00EE])
    with pytest.raises(StackUnderflow) as excinfo:
        vm.step_instruction()
    assert excinfo.value.opcode == 0x00EE


def test_store_past_end_of_memory_faults_without_writing(load_words) -> None:
    vm = load_words([0x6011, 0xAFFE, 0xF255])
    vm.run(2)

    with pytest.raises(MemoryFault):
        vm.step_instruction()
    assert vm.memory.read_byte(0xFFE) == 0
    assert vm.memory.read_byte(0xFFF) == 0


def test_pc_running_off_memory_faults() -> None:
    vm = Chip8VM()
    vm.load_program(b"\x1F\xFF")
    vm.step_instruction()

    with pytest.raises(MemoryFault) as excinfo:
        vm.step_instruction()
    assert excinfo.value.pc == 0xFFF
    assert excinfo.value.opcode is None


def test_key_wait_suspends_until_new_press(load_words) -> None:
    vm = load_words([0xF30A, 0x6101])
    vm.set_key(2, True)

    assert vm.step_instruction() is not None
    assert vm.waiting_for_key
    assert vm.regs.pc == 0x200

    # Still waiting: held key does not count and no new instruction runs.
    assert vm.step_instruction() is None
    assert vm.regs.get(1) == 0

    vm.set_key(2, False)
    assert vm.waiting_for_key
    vm.set_key(0xC, True)

    assert vm.status is CPUStatus.RUNNING
    assert vm.regs.get(3) == 0xC
    assert vm.regs.pc == 0x202

    vm.step_instruction()
    assert vm.regs.get(1) == 1


def test_key_wait_resumes_when_keypad_updated_directly(load_words) -> None:
    vm = load_words([0xF50A, 0x6101])
    vm.step_instruction()

    vm.keypad.set_key(9, True)
    vm.step_instruction()

    assert vm.regs.get(5) == 9
    assert vm.regs.get(1) == 1
    assert vm.regs.pc == 0x204


def test_reset_restores_power_on_state_and_program(load_words) -> None:
    vm = load_words([0x6A42, 0xA300, 0x2208, 0x0000, 0x00EE])
    vm.timers.set_delay(10)
    vm.run(3)
    vm.memory.write_byte(0x202, 0x00)

    vm.reset()

    assert vm.regs.get(0xA) == 0
    assert vm.regs.i == 0
    assert vm.regs.pc == 0x200
    assert vm.regs.sp == 0
    assert vm.timers.delay == 0
    assert vm.memory.read_word(0x202) == 0xA300
    assert vm.instruction_count == 0


def test_reset_clears_fault(load_words) -> None:
    vm = load_words([0xFFFF])
    with pytest.raises(UnknownOpcode):
        vm.step_instruction()

    vm.reset()
    assert vm.status is CPUStatus.RUNNING
    assert vm.fault is None


def test_oversized_program_rejected_without_state_change(load_words) -> None:
    vm = load_words([0x6001])
    vm.step_instruction()

    with pytest.raises(LoadError):
        vm.load_program(bytes(0xE01))

    assert vm.regs.get(0) == 1
    assert vm.program == bytes([0x60, 0x01])


def test_tick_timers_counts_ticks() -> None:
    vm = Chip8VM()
    vm.timers.set_sound(2)
    vm.tick_timers()
    vm.tick_timers()
    vm.tick_timers()

    assert vm.timer_ticks == 3
    assert not vm.sound_active
