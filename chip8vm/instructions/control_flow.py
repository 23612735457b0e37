"""CHIP-8 control flow instructions."""

from typing import Optional

import jax.numpy as jnp
from chip8vm.constants import MEMORY_SIZE
from chip8vm.errors import MemoryAccessError
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.stack import push


def _skip(state: EmulatorState) -> EmulatorState:
    return state.replace(pc=state.pc + 2)


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.asarray(instruction.nnn, dtype=jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return _skip(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to NNN + V0 (classic) or BXNN - NNN + VX (modern)."""
    offset_register = instruction.x if state.modern_mode else 0
    jump_address = instruction.nnn + int(state.V[offset_register])
    if jump_address >= MEMORY_SIZE:
        raise MemoryAccessError(f"Jump target 0x{jump_address:04X} outside memory")
    return state.replace(pc=jnp.asarray(jump_address, dtype=jnp.uint16))


def execute_skip_if_key(state: EmulatorState, instruction: DecodedInstruction,
                        key: Optional[int]) -> EmulatorState:
    """EX9E - Skip if the sampled key equals VX."""
    if key is not None and int(state.V[instruction.x]) == key:
        return _skip(state)
    return state


def execute_skip_if_not_key(state: EmulatorState, instruction: DecodedInstruction,
                            key: Optional[int]) -> EmulatorState:
    """EXA1 - Skip if the sampled key differs from VX.

    Without a sampled key the instruction does nothing.
    """
    if key is not None and int(state.V[instruction.x]) != key:
        return _skip(state)
    return state
