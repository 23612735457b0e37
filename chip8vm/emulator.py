"""Main CHIP-8 emulator execution engine."""

from typing import Optional, Union

import jax.numpy as jnp
from chip8vm.state import EmulatorState, check_address, load_program
from chip8vm.decode import DecodedInstruction, Operation, decode
from chip8vm.errors import RomLoadError
from chip8vm.logging import get_logger
from chip8vm.instructions.system import execute_clear_screen, execute_return
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chip8vm.instructions.alu import ALU_OPERATIONS, execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_set_delay_timer, execute_set_sound_timer,
    execute_add_to_index, execute_wait_for_key, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

logger = get_logger("chip8vm.emulator")

_HANDLERS = {
    Operation.CLEAR_SCREEN: execute_clear_screen,
    Operation.RETURN: execute_return,
    Operation.JUMP: execute_jump,
    Operation.CALL: execute_call,
    Operation.SKIP_IF_EQUAL_IMMEDIATE: execute_skip_if_equal_immediate,
    Operation.SKIP_IF_NOT_EQUAL_IMMEDIATE: execute_skip_if_not_equal_immediate,
    Operation.SKIP_IF_EQUAL_REGISTER: execute_skip_if_equal_register,
    Operation.SET: execute_set,
    Operation.ADD: execute_add,
    **{operation: execute_alu_operation for operation in ALU_OPERATIONS},
    Operation.SKIP_IF_NOT_EQUAL_REGISTER: execute_skip_if_not_equal_register,
    Operation.SET_INDEX: execute_set_index,
    Operation.JUMP_WITH_OFFSET: execute_jump_with_offset,
    Operation.RANDOM: execute_random,
    Operation.DRAW: execute_display,
    Operation.GET_DELAY_TIMER: execute_get_delay_timer,
    Operation.SET_DELAY_TIMER: execute_set_delay_timer,
    Operation.SET_SOUND_TIMER: execute_set_sound_timer,
    Operation.ADD_TO_INDEX: execute_add_to_index,
    Operation.FONT_CHARACTER: execute_font_character,
    Operation.BCD_CONVERSION: execute_bcd_conversion,
    Operation.STORE_REGISTERS: execute_store_registers,
    Operation.LOAD_REGISTERS: execute_load_registers,
}

# Operations that also receive the key sampled this cycle
_KEY_HANDLERS = {
    Operation.SKIP_IF_KEY: execute_skip_if_key,
    Operation.SKIP_IF_NOT_KEY: execute_skip_if_not_key,
    Operation.WAIT_FOR_KEY: execute_wait_for_key,
}


def execute(
    state: EmulatorState,
    instruction: Union[int, DecodedInstruction],
    key: Optional[int] = None,
) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Args:
        state: Current emulator state, with pc already past ``instruction``.
        instruction: Raw 16-bit instruction, or one already decoded.
        key: CHIP-8 key code (0x0-0xF) sampled this cycle, if any.

    Returns:
        The new emulator state. Unsupported instructions are logged and leave
        the state unchanged.
    """
    if isinstance(instruction, DecodedInstruction):
        decoded = instruction
    else:
        decoded = decode(instruction)

    if decoded.operation in _KEY_HANDLERS:
        return _KEY_HANDLERS[decoded.operation](state, decoded, key)
    if decoded.operation is Operation.UNSUPPORTED:
        logger.warning(f"0x{decoded.raw:04X} not supported, skipping")
        return state
    return _HANDLERS[decoded.operation](state, decoded)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a 16-bit instruction."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance pc by 2."""
    pc = int(state.pc)
    check_address(pc, 2)
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def step_timers(state: EmulatorState, ticks: int = 1) -> EmulatorState:
    """Decrement delay and sound timers by ``ticks``, stopping at zero."""
    if ticks <= 0:
        return state
    delay = max(int(state.delay_timer) - ticks, 0)
    sound = max(int(state.sound_timer) - ticks, 0)
    return state.replace(
        delay_timer=jnp.asarray(delay, dtype=jnp.uint8),
        sound_timer=jnp.asarray(sound, dtype=jnp.uint8),
    )


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    try:
        with open(filename, 'rb') as f:
            rom_data = f.read()
    except OSError as e:
        raise RomLoadError(f"Could not read ROM '{filename}': {e}") from e
    if not rom_data:
        raise RomLoadError(f"ROM '{filename}' is empty")
    logger.info(f"Read {len(rom_data)} bytes from {filename}")
    return load_program(state, rom_data)
