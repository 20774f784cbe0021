"""CHIP-8 control flow instructions."""

from chipvm.state import MachineState
from chipvm.decode import DecodedInstruction
from chipvm.stack import push


def execute_jump(state: MachineState, instruction: DecodedInstruction) -> None:
    """1NNN - Jump to address NNN."""
    state.pc = instruction.nnn


def execute_call(state: MachineState, instruction: DecodedInstruction) -> None:
    """2NNN - Call subroutine at NNN."""
    push(state, state.pc)
    execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: MachineState, instruction: DecodedInstruction) -> None:
        if condition_fn(state, instruction):
            state.pc += 2
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: inst.n == 0 and state.V[inst.x] == state.V[inst.y]
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: inst.n == 0 and state.V[inst.x] != state.V[inst.y]
)

execute_skip_if_key_pressed = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) in state.keypad
)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) not in state.keypad
)


def execute_jump_with_offset(state: MachineState, instruction: DecodedInstruction) -> None:
    """BNNN - Jump to address NNN + V0."""
    state.pc = instruction.nnn + int(state.V[0])


KEY_INSTRUCTIONS = {
    0x9E: execute_skip_if_key_pressed,
    0xA1: execute_skip_if_key_not_pressed,
}


def execute_skip_if_key(state: MachineState, instruction: DecodedInstruction) -> None:
    """EX9E/EXA1 - Skip if key pressed/not pressed."""
    handler = KEY_INSTRUCTIONS.get(instruction.nn)
    if handler is not None:
        handler(state, instruction)
