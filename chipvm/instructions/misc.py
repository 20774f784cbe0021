"""CHIP-8 miscellaneous instructions (Fxxx)."""

from chipvm.constants import FONT_START, FONT_SPRITE_HEIGHT, FLAG_REGISTER, WORD_MASK
from chipvm.state import MachineState
from chipvm.decode import DecodedInstruction
from chipvm.instructions.system import no_op
from chipvm.instructions.memory import check_memory_range


def execute_get_delay_timer(state: MachineState, instruction: DecodedInstruction) -> None:
    """FX07 - Set VX to delay timer value."""
    state.V[instruction.x] = state.delay_timer


def execute_set_delay_timer(state: MachineState, instruction: DecodedInstruction) -> None:
    """FX15 - Set delay timer to VX."""
    state.delay_timer = int(state.V[instruction.x])


def execute_set_sound_timer(state: MachineState, instruction: DecodedInstruction) -> None:
    """FX18 - Set sound timer to VX."""
    state.sound_timer = int(state.V[instruction.x])


def execute_add_to_index(state: MachineState, instruction: DecodedInstruction) -> None:
    """FX1E - Add VX to I register, VF = carry out of 16 bits."""
    new_i = state.I + int(state.V[instruction.x])
    state.I = new_i & WORD_MASK
    state.V[FLAG_REGISTER] = int(new_i > WORD_MASK)


def execute_wait_for_key(state: MachineState, instruction: DecodedInstruction) -> None:
    """FX0A - Wait for key press.

    With no key held the program counter is rewound so the same instruction
    runs again next cycle. The lowest held key wins.
    """
    if state.keypad:
        state.V[instruction.x] = min(state.keypad)
    else:
        state.pc -= 2


def execute_font_character(state: MachineState, instruction: DecodedInstruction) -> None:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    state.I = FONT_START + digit * FONT_SPRITE_HEIGHT


def execute_bcd_conversion(state: MachineState, instruction: DecodedInstruction) -> None:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    check_memory_range(state.I, 3)
    value = int(state.V[instruction.x])
    state.memory[state.I:state.I + 3] = (value // 100, (value // 10) % 10, value % 10)


def execute_store_registers(state: MachineState, instruction: DecodedInstruction) -> None:
    """FX55 - Store V0 through VX in memory starting at I, then I += X + 1."""
    count = instruction.x + 1
    check_memory_range(state.I, count)
    state.memory[state.I:state.I + count] = state.V[:count]
    state.I += count


def execute_load_registers(state: MachineState, instruction: DecodedInstruction) -> None:
    """FX65 - Load V0 through VX from memory starting at I, then I += X + 1."""
    count = instruction.x + 1
    check_memory_range(state.I, count)
    state.V[:count] = state.memory[state.I:state.I + count]
    state.I += count


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: MachineState, instruction: DecodedInstruction) -> None:
    """Dispatch misc instructions on the low byte."""
    MISC_INSTRUCTIONS.get(instruction.nn, no_op)(state, instruction)
