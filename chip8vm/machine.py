"""Fetch-decode-execute run loop and its timing.

A ``Machine`` owns the emulator state and drives one instruction per cycle.
It pulls at most one key from the input collaborator, pushes the framebuffer
to the display collaborator after instructions that change it, and advances a
separate 60 Hz clock for the delay and sound timers.
"""

import enum
import itertools
import time
from typing import Callable, NamedTuple, Optional

import jax.numpy as jnp
from tqdm import tqdm

from chip8vm.constants import CYCLE_DELAY, TIMER_HZ
from chip8vm.decode import Operation, decode
from chip8vm.emulator import execute, fetch, step_timers
from chip8vm.logging import get_logger
from chip8vm.state import EmulatorState

logger = get_logger("chip8vm.machine")

_DISPLAY_OPERATIONS = (Operation.DRAW, Operation.CLEAR_SCREEN)


class CycleResult(enum.Enum):
    """Whether the run loop should keep going."""
    CONTINUE = "continue"
    TERMINATE = "terminate"


class InputSample(NamedTuple):
    """One poll of the input collaborator."""
    key: Optional[int] = None
    quit: bool = False


class NullDisplay:
    """Display that keeps the last frame and draws nothing."""

    def __init__(self):
        self.frame = None
        self.draw_count = 0

    def draw(self, framebuffer: jnp.ndarray):
        self.frame = framebuffer
        self.draw_count += 1


class NullInput:
    """Input source that never reports a key."""

    def poll(self) -> InputSample:
        return InputSample()


class TimerClock:
    """Converts emulated cycle time into 60 Hz timer ticks.

    Each cycle stands for ``cycle_delay`` seconds of machine time whether or
    not the host actually slept that long, so the delay must be positive for
    the timers to run at all.
    """

    def __init__(self, cycle_delay: float = CYCLE_DELAY, timer_hz: float = TIMER_HZ):
        if cycle_delay <= 0:
            raise ValueError(f"cycle_delay must be positive, got {cycle_delay}")
        if timer_hz <= 0:
            raise ValueError(f"timer_hz must be positive, got {timer_hz}")
        self.cycle_delay = cycle_delay
        self.period = 1.0 / timer_hz
        self.elapsed = 0.0

    def advance(self) -> int:
        """Advance one cycle and return how many timer ticks elapsed."""
        self.elapsed += self.cycle_delay
        # Tolerance absorbs float drift so 60 cycles of 1/60 s give 60 ticks
        ticks = int((self.elapsed + 1e-9) // self.period)
        self.elapsed -= ticks * self.period
        return ticks


class Machine:
    """Drives the CHIP-8 cycle against display and input collaborators."""

    def __init__(
        self,
        state: EmulatorState,
        display=None,
        input_source=None,
        cycle_delay: float = CYCLE_DELAY,
        timer_hz: float = TIMER_HZ,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.state = state
        self.display = display if display is not None else NullDisplay()
        self.input_source = input_source if input_source is not None else NullInput()
        self.cycle_delay = cycle_delay
        self.clock = TimerClock(cycle_delay, timer_hz)
        self.sleep = sleep
        self.cycles = 0

    def cycle(self) -> CycleResult:
        """Run a single fetch-decode-execute cycle."""
        sample = self.input_source.poll()
        if sample.quit:
            logger.info("Quit requested")
            return CycleResult.TERMINATE

        state, instruction = fetch(self.state)
        decoded = decode(instruction)
        state = execute(state, decoded, sample.key)

        if decoded.operation in _DISPLAY_OPERATIONS:
            self.display.draw(state.display)

        self.state = step_timers(state, self.clock.advance())
        self.cycles += 1

        self.sleep(self.cycle_delay)
        return CycleResult.CONTINUE

    def run(self, max_cycles: Optional[int] = None, progress: bool = False) -> CycleResult:
        """Run cycles until quit or until ``max_cycles`` have executed."""
        counter = itertools.count() if max_cycles is None else range(max_cycles)
        if progress:
            counter = tqdm(counter, total=max_cycles, desc="Emulating", unit="cycle")

        result = CycleResult.CONTINUE
        try:
            for _ in counter:
                result = self.cycle()
                if result is CycleResult.TERMINATE:
                    break
        finally:
            if progress:
                counter.close()
        logger.debug(f"Stopped after {self.cycles} cycles at pc=0x{int(self.state.pc):03X}")
        return result
