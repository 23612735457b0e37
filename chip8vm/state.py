"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8vm.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, SCREEN_WIDTH,
    SCREEN_HEIGHT, STACK_SIZE, NUM_REGISTERS,
)
from chip8vm.errors import ProgramTooLargeError, MemoryAccessError
from chip8vm.logging import get_logger

logger = get_logger("chip8vm.state")


@dataclass
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(
        default_factory=lambda: jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.uint8)
    )
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    modern_mode: bool = field(pytree_node=False, default=False)


def create_state(rng: jax.Array = None, modern_mode: bool = False) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    state = EmulatorState(rng, modern_mode=modern_mode)
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))


def check_address(address: int, length: int = 1) -> None:
    """Raise MemoryAccessError unless [address, address + length) lies in memory."""
    address = int(address)
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(
            f"Address range 0x{address:04X}-0x{address + length - 1:04X} outside memory"
        )


def load_program(state: EmulatorState, program: bytes) -> EmulatorState:
    """Copy program bytes into memory starting at 0x200."""
    if PROGRAM_START + len(program) > MEMORY_SIZE:
        raise ProgramTooLargeError(
            f"Program of {len(program)} bytes does not fit in "
            f"{MEMORY_SIZE - PROGRAM_START} bytes of program memory"
        )
    if not program:
        return state
    data = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(data)
    logger.info(f"Loaded {len(program)} bytes at 0x{PROGRAM_START:03X}")
    return state.replace(memory=new_memory)
