"""CHIP-8 emulator package."""

from chip8vm.state import EmulatorState, create_state, load_program
from chip8vm.emulator import execute, fetch, load_rom, step_timers
from chip8vm.decode import DecodedInstruction, Operation, decode
from chip8vm.machine import Machine, CycleResult, InputSample, TimerClock
from chip8vm.errors import (
    Chip8Error, ProgramTooLargeError, RomLoadError, StackOverflowError,
    StackUnderflowError, MemoryAccessError,
)
from chip8vm.constants import *
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "create_state",
    "load_program",
    "fetch",
    "execute",
    "load_rom",
    "step_timers",
    "DecodedInstruction",
    "Operation",
    "decode",
    "Machine",
    "CycleResult",
    "InputSample",
    "TimerClock",
    "Chip8Error",
    "ProgramTooLargeError",
    "RomLoadError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
    "FONT_START",
    "FONT_DATA",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
]
