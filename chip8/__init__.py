"""CHIP-8 virtual machine core package."""

from .config import MachineConfig, create_machine
from .decoding import DecodedInstr, Operation, decode_opcode
from .display import DisplayBuffer
from .errors import (
    Chip8Error,
    LoadError,
    MachineFault,
    MemoryFault,
    StackOverflow,
    StackUnderflow,
    UnknownOpcode,
)
from .keypad import Keypad
from .memory import Chip8Memory
from .quirks import Quirks
from .registers import RegisterFile
from .scheduler import Scheduler, StepResult
from .state_model import (
    FieldDiff,
    MachineState,
    StateDiff,
    capture_state,
    diff_states,
    empty_state_diff,
    restore_state,
)
from .timers import TimerPair
from .vm import Chip8VM, CPUStatus

__all__ = [
    "Chip8VM",
    "CPUStatus",
    "Scheduler",
    "StepResult",
    "MachineConfig",
    "create_machine",
    "Quirks",
    "Chip8Memory",
    "RegisterFile",
    "DisplayBuffer",
    "Keypad",
    "TimerPair",
    "DecodedInstr",
    "Operation",
    "decode_opcode",
    "Chip8Error",
    "MachineFault",
    "MemoryFault",
    "UnknownOpcode",
    "StackOverflow",
    "StackUnderflow",
    "LoadError",
    "MachineState",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "restore_state",
    "diff_states",
    "empty_state_diff",
]
