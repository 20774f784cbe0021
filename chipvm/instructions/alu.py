"""CHIP-8 ALU operations (8xxx).

Each operation maps ``(vx, vy)`` to ``(result, flag)``. ``flag`` is ``None``
for operations that leave VF alone; otherwise it is written to VF after the
result, so a flag always wins when X is F.
"""

from typing import Optional

from chipvm.constants import BYTE_MASK, FLAG_REGISTER
from chipvm.state import MachineState
from chipvm.decode import DecodedInstruction


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
    return result & BYTE_MASK, int(result > BYTE_MASK)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when no borrow."""
    return (vx - vy) & BYTE_MASK, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX = VY >> 1, VF = old LSB of VY."""
    return vy >> 1, vy & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when no borrow."""
    return (vy - vx) & BYTE_MASK, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX = VY << 1, VF = old MSB of VY."""
    return (vy << 1) & BYTE_MASK, (vy & 0x80) >> 7


ALU_OPERATIONS = {
    0x0: alu_set,
    0x1: alu_or,
    0x2: alu_and,
    0x3: alu_xor,
    0x4: alu_add,
    0x5: alu_sub_xy,
    0x6: alu_shift_right,
    0x7: alu_sub_yx,
    0xE: alu_shift_left,
}


def execute_alu_operation(state: MachineState, instruction: DecodedInstruction) -> None:
    """8XYN - ALU operations dispatcher. Undefined N values are ignored."""
    operation = ALU_OPERATIONS.get(instruction.n)
    if operation is None:
        return

    result, vf = operation(int(state.V[instruction.x]), int(state.V[instruction.y]))

    state.V[instruction.x] = result
    if vf is not None:
        state.V[FLAG_REGISTER] = vf
