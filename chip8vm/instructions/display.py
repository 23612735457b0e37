"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState, check_address
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER

# Bit shifts for the 8 sprite columns, most significant bit first
_COLUMN_SHIFTS = 7 - jnp.arange(8)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Pixels past the right or bottom edge wrap around to the opposite side.
    VF is set when any set sprite bit lands on a set pixel.
    """
    height = instruction.n
    check_address(state.I, height)

    col = int(state.V[instruction.x])
    row = int(state.V[instruction.y])

    sprite_bytes = state.memory[int(state.I) + jnp.arange(height)]
    sprite = ((sprite_bytes[:, None] >> _COLUMN_SHIFTS) & 1).astype(jnp.uint8)

    rows = ((row + jnp.arange(height)) % SCREEN_HEIGHT)[:, None]
    cols = ((col + jnp.arange(8)) % SCREEN_WIDTH)[None, :]

    current = state.display[rows, cols]
    collision = jnp.any((current & sprite) == 1)

    return state.replace(
        display=state.display.at[rows, cols].set(current ^ sprite),
        V=state.V.at[FLAG_REGISTER].set(collision.astype(jnp.uint8)),
    )
