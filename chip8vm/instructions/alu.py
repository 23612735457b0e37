"""CHIP-8 ALU operations (8xxx).

Each operation takes the current VX and VY values and returns the new VX and
the new VF. A flag of ``None`` leaves VF as it was.
"""

from typing import Optional

from chip8vm.constants import FLAG_REGISTER
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction, Operation


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when there is no borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when there is no borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1, VF = bit shifted out."""
    return vx >> 1, vx & 0x01


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1, VF = bit shifted out."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


ALU_OPERATIONS = {
    Operation.ALU_SET: alu_set,
    Operation.ALU_OR: alu_or,
    Operation.ALU_AND: alu_and,
    Operation.ALU_XOR: alu_xor,
    Operation.ALU_ADD: alu_add,
    Operation.ALU_SUB_XY: alu_sub_xy,
    Operation.ALU_SHIFT_RIGHT: alu_shift_right,
    Operation.ALU_SUB_YX: alu_sub_yx,
    Operation.ALU_SHIFT_LEFT: alu_shift_left,
}

_SHIFTS = (Operation.ALU_SHIFT_RIGHT, Operation.ALU_SHIFT_LEFT)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    # Classic CHIP-8 shifts VY into VX; modern interpreters shift VX in place
    if instruction.operation in _SHIFTS and not state.modern_mode:
        vx = vy

    result, vf = ALU_OPERATIONS[instruction.operation](vx, vy)

    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)
