"""CHIP-8 miscellaneous instructions (Fxxx)."""

from typing import Optional

import jax.numpy as jnp
from chip8vm.state import EmulatorState, check_address
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import FONT_START, FONT_GLYPH_SIZE


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & 0xFFFF
    return state.replace(I=jnp.asarray(new_i, dtype=jnp.uint16))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction,
                         key: Optional[int]) -> EmulatorState:
    """FX0A - Wait for key press.

    Without a key the program counter is rewound so the instruction runs again
    next cycle.
    """
    if key is None:
        return state.replace(pc=state.pc - 2)
    return state.replace(V=state.V.at[instruction.x].set(key & 0xF))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    font_address = FONT_START + digit * FONT_GLYPH_SIZE
    return state.replace(I=jnp.asarray(font_address, dtype=jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    check_address(state.I, 3)
    value = int(state.V[instruction.x])
    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)

    start = int(state.I)
    new_memory = state.memory.at[start:start + 3].set(digits)
    return state.replace(memory=new_memory)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    check_address(state.I, count)

    start = int(state.I)
    new_memory = state.memory.at[start:start + count].set(state.V[:count])

    if state.modern_mode:
        return state.replace(memory=new_memory)
    return state.replace(memory=new_memory, I=jnp.asarray(start + count, dtype=jnp.uint16))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    check_address(state.I, count)

    start = int(state.I)
    new_V = state.V.at[:count].set(state.memory[start:start + count])

    if state.modern_mode:
        return state.replace(V=new_V)
    return state.replace(V=new_V, I=jnp.asarray(start + count, dtype=jnp.uint16))
