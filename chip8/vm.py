"""The CHIP-8 machine context.

:class:`Chip8VM` owns every piece of machine state (memory, registers,
display, keypad, timers) and exposes the three operations the scheduler and
host drive it with: execute one instruction, tick the 60 Hz timers, and
update a key.
"""

from __future__ import annotations

import logging
import random
from enum import Enum, auto
from typing import Optional

from .decoding import DecodedInstr, decode_opcode
from .display import DisplayBuffer
from .errors import MachineFault
from .executor import execute
from .keypad import Keypad
from .memory import Chip8Memory
from .quirks import Quirks
from .registers import RegisterFile
from .timers import TimerPair

logger = logging.getLogger(__name__)


class CPUStatus(Enum):
    """Execution status of the CPU."""

    RUNNING = auto()
    WAITING_KEY = auto()
    HALTED = auto()


class Chip8VM:
    """Single owner of all CHIP-8 machine state."""

    def __init__(
        self,
        *,
        quirks: Optional[Quirks] = None,
        rng_seed: Optional[int] = None,
    ) -> None:
        self.memory = Chip8Memory()
        self.regs = RegisterFile()
        self.display = DisplayBuffer()
        self.keypad = Keypad()
        self.timers = TimerPair()
        self.quirks = quirks or Quirks()
        self.rng_seed = rng_seed
        self.rng = random.Random(rng_seed)

        self.status = CPUStatus.RUNNING
        self.fault: Optional[MachineFault] = None
        self.instruction_count = 0
        self.timer_ticks = 0
        self._program = b""

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def reset(self) -> None:
        """Return to power-on state and re-copy the loaded program."""

        self.memory.clear()
        self.regs.reset()
        self.display.clear()
        self.keypad.reset()
        self.timers.reset()
        self.rng.seed(self.rng_seed)
        self.status = CPUStatus.RUNNING
        self.fault = None
        self.instruction_count = 0
        self.timer_ticks = 0
        if self._program:
            self.memory.load_program(self._program)
        logger.debug("VM reset (program %d bytes)", len(self._program))

    def load_program(self, program: bytes) -> None:
        """Reset the machine and copy ``program`` to 0x200.

        Raises :class:`chip8.errors.LoadError` for images larger than 0xE00
        bytes; the machine is left untouched in that case.
        """

        image = bytes(program)
        Chip8Memory.check_program_size(image)
        self._program = image
        self.reset()

    @property
    def program(self) -> bytes:
        return self._program

    # ------------------------------------------------------------------ #
    # Status
    # ------------------------------------------------------------------ #
    @property
    def halted(self) -> bool:
        return self.status is CPUStatus.HALTED

    @property
    def waiting_for_key(self) -> bool:
        return self.status is CPUStatus.WAITING_KEY

    @property
    def sound_active(self) -> bool:
        return self.timers.sound_active

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #
    def fetch(self) -> int:
        return self.memory.read_word(self.regs.pc)

    def step_instruction(self) -> Optional[DecodedInstr]:
        """Fetch, decode and execute one instruction.

        Returns the executed instruction, or None when the CPU is halted or
        still waiting for a key.  A :class:`MachineFault` halts the machine
        and is re-raised with the offending PC and opcode attached.
        """

        if self.status is CPUStatus.HALTED:
            return None
        if self.status is CPUStatus.WAITING_KEY:
            self._poll_key_wait()
            if self.status is CPUStatus.WAITING_KEY:
                return None

        pc = self.regs.pc
        opcode: Optional[int] = None
        try:
            opcode = self.fetch()
            instr = decode_opcode(opcode)
            execute(self, instr)
        except MachineFault as fault:
            self._halt(fault, pc, opcode)
            raise
        self.instruction_count += 1
        return instr

    def run(self, max_instructions: int) -> int:
        """Execute up to ``max_instructions``; stops early on a key wait."""

        executed = 0
        while executed < max_instructions:
            if self.step_instruction() is None:
                break
            executed += 1
        return executed

    def _halt(self, fault: MachineFault, pc: int, opcode: Optional[int]) -> None:
        fault.attach(pc, opcode)
        self.fault = fault
        self.status = CPUStatus.HALTED
        logger.error("Machine halted: %s", fault)

    # ------------------------------------------------------------------ #
    # Timers
    # ------------------------------------------------------------------ #
    def tick_timers(self) -> None:
        """One 60 Hz period: decrement delay and sound timers."""

        self.timers.tick()
        self.timer_ticks += 1

    # ------------------------------------------------------------------ #
    # Keypad
    # ------------------------------------------------------------------ #
    def set_key(self, index: int, pressed: bool) -> None:
        """Host entry point for key state; may resume a pending key wait."""

        self.keypad.set_key(index, pressed)
        if self.status is CPUStatus.WAITING_KEY:
            self._poll_key_wait()

    def begin_key_wait(self, register: int) -> None:
        self.keypad.begin_wait(register)
        self.status = CPUStatus.WAITING_KEY
        logger.debug("Waiting for key into V%X at 0x%03X", register, self.regs.pc)

    def _poll_key_wait(self) -> None:
        key = self.keypad.pending_press
        register = self.keypad.wait_register
        if key is None or register is None:
            return
        self.regs.set(register, key)
        self.regs.pc = (self.regs.pc + 2) & 0xFFFF
        self.keypad.end_wait()
        self.status = CPUStatus.RUNNING
        logger.debug("Key %X pressed; resuming at 0x%03X", key, self.regs.pc)


__all__ = ["CPUStatus", "Chip8VM"]
