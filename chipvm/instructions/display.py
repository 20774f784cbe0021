"""CHIP-8 display operations."""

from chipvm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER
from chipvm.state import MachineState
from chipvm.decode import DecodedInstruction
from chipvm.instructions.memory import check_memory_range


def draw_sprite(state: MachineState, x_start: int, y_start: int, sprite: bytes) -> bool:
    """XOR ``sprite`` onto the display with its top-left corner at (x_start, y_start).

    Columns past the right edge are dropped row by row. Rows are not clipped,
    so cells below the bottom edge stay in the lit set.

    Returns:
        True if any lit pixel was turned off.
    """
    turned_off = False
    for row_offset, row in enumerate(sprite):
        y = y_start + row_offset
        for col_offset in range(8):
            x = x_start + col_offset
            if x >= SCREEN_WIDTH:
                break
            if not (row >> (7 - col_offset)) & 1:
                continue
            if (x, y) in state.display:
                state.display.remove((x, y))
                turned_off = True
            else:
                state.display.add((x, y))
    return turned_off


def execute_display(state: MachineState, instruction: DecodedInstruction) -> None:
    """DXYN - Draw sprite at (VX, VY) with height N."""
    check_memory_range(state.I, instruction.n)

    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT
    sprite = state.memory[state.I:state.I + instruction.n].tobytes()

    state.V[FLAG_REGISTER] = int(draw_sprite(state, sprite_x, sprite_y, sprite))
