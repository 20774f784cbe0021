"""CHIP-8 system instructions (0x0xxx)."""

from chipvm.state import MachineState
from chipvm.decode import DecodedInstruction
from chipvm.stack import pop


def no_op(state: MachineState, instruction: DecodedInstruction) -> None:
    """No operation."""


def execute_clear_screen(state: MachineState, instruction: DecodedInstruction) -> None:
    """00E0 - Clear display."""
    state.display.clear()


def execute_return(state: MachineState, instruction: DecodedInstruction) -> None:
    """00EE - Return from subroutine."""
    state.pc = pop(state)


SYSTEM_INSTRUCTIONS = {
    0x00E0: execute_clear_screen,
    0x00EE: execute_return,
}


def execute_system_instruction(state: MachineState, instruction: DecodedInstruction) -> None:
    """Dispatch system instructions. 0NNN machine-code calls are ignored."""
    SYSTEM_INSTRUCTIONS.get(instruction.raw, no_op)(state, instruction)
