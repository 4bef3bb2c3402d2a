"""Wall-clock pacing of CPU cycles against the fixed 60 Hz tick.

The scheduler keeps two integer credit accumulators so no rounding error
builds up across calls:

* CPU credit, in ``ns * cpu_hz`` units (``"fixed"`` mode, one cycle per
  ``NS_PER_SECOND``) or plain nanoseconds (``"vip"`` mode, each instruction
  pays its COSMAC VIP cost).
* Timer credit, in ``ns * TIMER_HZ * cpu_hz`` units; one tick per
  ``NS_PER_SECOND * cpu_hz``.

Elapsed time is split at tick boundaries, so CPU cycles and timer ticks are
interleaved in chronological order within a single call, and the number of
timer ticks depends only on elapsed time, never on the CPU rate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Literal, Optional

from .constants import (
    DEFAULT_CPU_HZ,
    MAX_CPU_HZ,
    MIN_CPU_HZ,
    NS_PER_SECOND,
    TIMER_HZ,
)
from .decoding import DecodedInstr
from .errors import MachineFault
from .timing import IDLE_COST_US, instruction_cost_ns
from .vm import Chip8VM

logger = logging.getLogger(__name__)

TimingMode = Literal["fixed", "vip"]
TIMING_MODES = ("fixed", "vip")
FrameListener = Callable[[Chip8VM], None]


@dataclass
class StepResult:
    """What happened during one scheduler call."""

    instructions: int = 0
    timer_ticks: int = 0
    frames: int = 0
    display_changed: bool = False
    waiting_for_key: bool = False
    halted: bool = False
    fault: Optional[MachineFault] = None


class Scheduler:
    """Drives a :class:`Chip8VM` from host-supplied time or cycle budgets."""

    def __init__(
        self,
        vm: Chip8VM,
        *,
        cpu_hz: int = DEFAULT_CPU_HZ,
        timing: TimingMode = "fixed",
        max_catchup_seconds: float = 0.25,
    ) -> None:
        if timing not in TIMING_MODES:
            raise ValueError(f"Unknown timing mode: {timing!r}")
        if max_catchup_seconds <= 0:
            raise ValueError("max_catchup_seconds must be positive")
        self.vm = vm
        self.timing: TimingMode = timing
        self.max_catchup_seconds = float(max_catchup_seconds)
        self._cpu_hz = self._validate_hz(cpu_hz)
        self._cpu_credit = 0
        self._timer_credit = 0
        self._frame_listeners: List[FrameListener] = []

    @staticmethod
    def _validate_hz(value: int) -> int:
        hz = int(value)
        if not MIN_CPU_HZ <= hz <= MAX_CPU_HZ:
            raise ValueError(
                f"cpu_hz must be between {MIN_CPU_HZ} and {MAX_CPU_HZ}, got {value!r}"
            )
        return hz

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #
    @property
    def cpu_hz(self) -> int:
        return self._cpu_hz

    @cpu_hz.setter
    def cpu_hz(self, value: int) -> None:
        hz = self._validate_hz(value)
        # Keep the elapsed fraction of the current 60 Hz period.
        self._timer_credit = self._timer_credit * hz // self._cpu_hz
        self._cpu_hz = hz

    @property
    def _tick_threshold(self) -> int:
        return NS_PER_SECOND * self._cpu_hz

    @property
    def _timer_rate(self) -> int:
        return TIMER_HZ * self._cpu_hz

    def reset(self) -> None:
        self._cpu_credit = 0
        self._timer_credit = 0

    def add_frame_listener(self, listener: FrameListener) -> None:
        self._frame_listeners.append(listener)

    def remove_frame_listener(self, listener: FrameListener) -> None:
        self._frame_listeners.remove(listener)

    # ------------------------------------------------------------------ #
    # Host entry points
    # ------------------------------------------------------------------ #
    def advance(self, elapsed_seconds: float) -> StepResult:
        """Run the machine for ``elapsed_seconds`` of wall-clock time."""

        if elapsed_seconds < 0:
            raise ValueError("elapsed_seconds must not be negative")
        elapsed_ns = round(elapsed_seconds * NS_PER_SECOND)
        limit_ns = round(self.max_catchup_seconds * NS_PER_SECOND)
        if elapsed_ns > limit_ns:
            logger.debug(
                "Dropping %.3f s of catch-up time", (elapsed_ns - limit_ns) / NS_PER_SECOND
            )
            elapsed_ns = limit_ns
        return self.advance_ns(elapsed_ns)

    def advance_ns(self, elapsed_ns: int) -> StepResult:
        result = StepResult()
        generation = self.vm.display.generation
        if self.vm.halted:
            return self._finish(result, generation)

        remaining = int(elapsed_ns)
        while remaining > 0:
            # Ceiling division: nanoseconds until the timer credit crosses a tick.
            to_tick = -(-(self._tick_threshold - self._timer_credit) // self._timer_rate)
            span = min(remaining, to_tick)
            self._run_cpu_for(span, result)
            if result.fault is not None:
                break
            remaining -= span
            self._timer_credit += span * self._timer_rate
            self._drain_timer_credit(result)
        return self._finish(result, generation)

    def run_cycles(self, count: int) -> StepResult:
        """Run ``count`` CPU cycles; timers advance by the equivalent time.

        In ``"fixed"`` mode a cycle lasts ``1 / cpu_hz`` seconds.  In
        ``"vip"`` mode it lasts as long as the executed instruction costs.
        """

        if count < 0:
            raise ValueError("count must not be negative")
        result = StepResult()
        generation = self.vm.display.generation
        if self.vm.halted:
            return self._finish(result, generation)

        for _ in range(count):
            instr = self._execute_one(result)
            if result.fault is not None:
                break
            if self.timing == "vip":
                delta = self._cost_ns(instr) * self._timer_rate
            else:
                delta = NS_PER_SECOND * TIMER_HZ
            self._timer_credit += delta
            self._drain_timer_credit(result)
        return self._finish(result, generation)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #
    @staticmethod
    def _cost_ns(instr: Optional[DecodedInstr]) -> int:
        if instr is None:
            return IDLE_COST_US * 1000
        return instruction_cost_ns(instr.op)

    def _run_cpu_for(self, span_ns: int, result: StepResult) -> None:
        if self.timing == "vip":
            self._cpu_credit += span_ns
            while self._cpu_credit > 0:
                instr = self._execute_one(result)
                if result.fault is not None:
                    return
                self._cpu_credit -= self._cost_ns(instr)
            return

        self._cpu_credit += span_ns * self._cpu_hz
        cycles, self._cpu_credit = divmod(self._cpu_credit, NS_PER_SECOND)
        for _ in range(cycles):
            self._execute_one(result)
            if result.fault is not None:
                return

    def _execute_one(self, result: StepResult) -> Optional[DecodedInstr]:
        try:
            instr = self.vm.step_instruction()
        except MachineFault as fault:
            result.fault = fault
            return None
        if instr is not None:
            result.instructions += 1
        return instr

    def _drain_timer_credit(self, result: StepResult) -> None:
        while self._timer_credit >= self._tick_threshold:
            self._timer_credit -= self._tick_threshold
            self.vm.tick_timers()
            result.timer_ticks += 1
            result.frames += 1
            for listener in list(self._frame_listeners):
                listener(self.vm)

    def _finish(self, result: StepResult, generation: int) -> StepResult:
        result.display_changed = self.vm.display.generation != generation
        result.waiting_for_key = self.vm.waiting_for_key
        result.halted = self.vm.halted
        if result.fault is None:
            result.fault = self.vm.fault
        return result


__all__ = ["FrameListener", "Scheduler", "StepResult", "TimingMode", "TIMING_MODES"]
