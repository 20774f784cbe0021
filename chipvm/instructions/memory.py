"""CHIP-8 memory and register operations."""

from chipvm.constants import MEMORY_SIZE, BYTE_MASK
from chipvm.errors import MemoryAccessError
from chipvm.state import MachineState
from chipvm.decode import DecodedInstruction


def check_memory_range(start: int, length: int) -> None:
    """Raise MemoryAccessError unless [start, start + length) lies in memory."""
    if length > 0 and (start < 0 or start + length > MEMORY_SIZE):
        raise MemoryAccessError(
            f"access to 0x{start:04X}-0x{start + length - 1:04X} outside memory"
        )


def execute_set(state: MachineState, instruction: DecodedInstruction) -> None:
    """6XNN - Set VX = NN."""
    state.V[instruction.x] = instruction.nn


def execute_add(state: MachineState, instruction: DecodedInstruction) -> None:
    """7XNN - Add NN to VX, wrapping, VF untouched."""
    state.V[instruction.x] = (int(state.V[instruction.x]) + instruction.nn) & BYTE_MASK


def execute_set_index(state: MachineState, instruction: DecodedInstruction) -> None:
    """ANNN - Set I = NNN."""
    state.I = instruction.nnn


def execute_random(state: MachineState, instruction: DecodedInstruction) -> None:
    """CXNN - Set VX = random & NN."""
    random_value = state.rng.next_byte() & BYTE_MASK
    state.V[instruction.x] = random_value & instruction.nn
