"""CHIP-8 stack operations."""

import jax.numpy as jnp
from chip8vm.constants import MEMORY_SIZE, STACK_SIZE
from chip8vm.errors import MemoryAccessError, StackOverflowError, StackUnderflowError
from chip8vm.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    if stack.pointer >= STACK_SIZE:
        raise StackOverflowError(f"Call stack full ({STACK_SIZE} return addresses)")
    if int(address) >= MEMORY_SIZE:
        raise MemoryAccessError(f"Return address 0x{int(address):04X} outside memory")
    new_data = stack.data.at[stack.pointer].set(address)
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    if stack.pointer <= 0:
        raise StackUnderflowError("Return with empty call stack")
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
