"""Canonical in-memory VM snapshots and diff utilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from .vm import Chip8VM, CPUStatus


@dataclass(frozen=True)
class CPUState:
    """Registers, stack and execution status."""

    registers: Dict[str, int]
    stack: Tuple[int, ...]
    status: str
    wait_register: Optional[int]
    instruction_count: int


@dataclass(frozen=True)
class MemoryState:
    ram: bytes


@dataclass(frozen=True)
class DisplayState:
    """Framebuffer packed to one byte per pixel, row-major."""

    pixels: bytes
    width: int
    height: int


@dataclass(frozen=True)
class KeypadState:
    pressed_keys: Tuple[int, ...]


@dataclass(frozen=True)
class TimerState:
    delay: int
    sound: int
    ticks: int


@dataclass(frozen=True)
class MachineState:
    """Composite immutable snapshot of the whole VM."""

    cpu: CPUState
    memory: MemoryState
    display: DisplayState
    keypad: KeypadState
    timers: TimerState


@dataclass(frozen=True)
class FieldDiff:
    """Difference for a single named field."""

    name: str
    before: object
    after: object


@dataclass(frozen=True)
class StateDiff:
    """Aggregated differences between two VM states."""

    cpu: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    memory: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    keypad: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    timers: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    display_changed: bool = False

    def is_empty(self) -> bool:
        """Return True when no differences were recorded."""

        return (
            not self.cpu
            and not self.memory
            and not self.keypad
            and not self.timers
            and not self.display_changed
        )


def empty_state_diff() -> StateDiff:
    return StateDiff()


def capture_state(vm: Chip8VM) -> MachineState:
    """Capture the current VM state as a canonical snapshot."""

    cpu = CPUState(
        registers=vm.regs.to_dict(),
        stack=vm.regs.stack,
        status=vm.status.name,
        wait_register=vm.keypad.wait_register,
        instruction_count=vm.instruction_count,
    )
    display = DisplayState(
        pixels=vm.display.buffer.tobytes(),
        width=vm.display.width,
        height=vm.display.height,
    )
    return MachineState(
        cpu=cpu,
        memory=MemoryState(ram=bytes(vm.memory.data)),
        display=display,
        keypad=KeypadState(pressed_keys=tuple(vm.keypad.pressed_keys())),
        timers=TimerState(
            delay=vm.timers.delay, sound=vm.timers.sound, ticks=vm.timer_ticks
        ),
    )


def restore_state(vm: Chip8VM, state: MachineState) -> None:
    """Write a snapshot back into ``vm``.

    The fault record is cleared; a snapshot taken from a halted machine
    restores as halted without its exception.
    """

    registers = state.cpu.registers
    for index in range(16):
        vm.regs.set(index, registers[f"v{index:x}"])
    vm.regs.i = registers["i"]
    vm.regs.pc = registers["pc"]
    vm.regs.load_stack(state.cpu.stack)
    vm.status = CPUStatus[state.cpu.status]
    vm.fault = None
    vm.instruction_count = state.cpu.instruction_count

    vm.memory.data[:] = state.memory.ram

    pixels = np.frombuffer(state.display.pixels, dtype=np.uint8).reshape(
        state.display.height, state.display.width
    )
    vm.display.load_buffer(pixels)

    vm.keypad.reset()
    for key in state.keypad.pressed_keys:
        vm.keypad.set_key(key, True)
    if state.cpu.wait_register is not None:
        vm.keypad.begin_wait(state.cpu.wait_register)

    vm.timers.set_delay(state.timers.delay)
    vm.timers.set_sound(state.timers.sound)
    vm.timer_ticks = state.timers.ticks


def diff_states(before: Optional[MachineState], after: MachineState) -> StateDiff:
    """Compute structured differences between two VM states."""

    if before is None:
        return empty_state_diff()

    return StateDiff(
        cpu=_diff_cpu(before.cpu, after.cpu),
        memory=_diff_memory(before.memory, after.memory),
        keypad=_diff_fields(before.keypad, after.keypad, ("pressed_keys",)),
        timers=_diff_fields(before.timers, after.timers, ("delay", "sound", "ticks")),
        display_changed=before.display != after.display,
    )


def _diff_cpu(before: CPUState, after: CPUState) -> Tuple[FieldDiff, ...]:
    diffs: list[FieldDiff] = []
    diffs.extend(_diff_mapping("registers", before.registers, after.registers))
    diffs.extend(
        _diff_fields(
            before, after, ("stack", "status", "wait_register", "instruction_count")
        )
    )
    return tuple(diffs)


def _diff_memory(before: MemoryState, after: MemoryState) -> Tuple[FieldDiff, ...]:
    diffs: list[FieldDiff] = []
    if before.ram == after.ram:
        return ()
    for address, (old, new) in enumerate(zip(before.ram, after.ram)):
        if old != new:
            diffs.append(FieldDiff(f"ram[0x{address:03X}]", old, new))
    return tuple(diffs)


def _diff_fields(before: object, after: object, names: Iterable[str]) -> Tuple[FieldDiff, ...]:
    diffs: list[FieldDiff] = []
    for name in names:
        previous = getattr(before, name)
        current = getattr(after, name)
        if previous != current:
            diffs.append(FieldDiff(name, previous, current))
    return tuple(diffs)


def _diff_mapping(
    prefix: str, before: Dict[str, int], after: Dict[str, int]
) -> Iterable[FieldDiff]:
    for key in sorted(set(before.keys()) | set(after.keys())):
        previous = before.get(key)
        current = after.get(key)
        if previous != current:
            yield FieldDiff(f"{prefix}.{key}", previous, current)


__all__ = [
    "CPUState",
    "MemoryState",
    "DisplayState",
    "KeypadState",
    "TimerState",
    "MachineState",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "restore_state",
    "diff_states",
    "empty_state_diff",
]
