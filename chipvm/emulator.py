"""Main CHIP-8 emulator execution engine."""

import os
from typing import Iterable, Optional, Union

import numpy as np

from chipvm.state import MachineState
from chipvm.decode import decode
from chipvm.constants import PROGRAM_START, MEMORY_SIZE
from chipvm.errors import MachineFault, MemoryAccessError
from chipvm.instructions.system import execute_system_instruction
from chipvm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key
)
from chipvm.instructions.alu import execute_alu_operation
from chipvm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipvm.instructions.display import execute_display
from chipvm.instructions.misc import execute_misc_instruction

# Indexed by the top nibble of the instruction word.
INSTRUCTION_GROUPS = (
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
)


def execute(state: MachineState, instruction: int,
            held_keys: Optional[Iterable[int]] = None) -> MachineState:
    """Execute single CHIP-8 instruction.

    The program counter is expected to already point past ``instruction``.
    The state is mutated in place and returned for chaining.
    """
    if held_keys is not None:
        state.keypad = frozenset(held_keys)
    decoded_instruction = decode(instruction)
    INSTRUCTION_GROUPS[decoded_instruction.opcode](state, decoded_instruction)
    return state


def _pack_u16(high: int, low: int) -> int:
    """Pack two bytes into uint16."""
    return (int(high) << 8) | int(low)


def fetch(state: MachineState) -> tuple[MachineState, int]:
    """Fetch next instruction from memory and advance the program counter."""
    if state.pc < 0 or state.pc + 1 >= MEMORY_SIZE:
        raise MemoryAccessError("instruction fetch outside memory", address=state.pc)
    instruction = _pack_u16(state.memory[state.pc], state.memory[state.pc + 1])
    state.pc += 2
    return state, instruction


def run_cycle(state: MachineState, held_keys: Iterable[int] = ()) -> MachineState:
    """Fetch and execute exactly one instruction.

    On a fault the program counter and keypad are put back, so the machine
    is left as it was before the cycle.
    """
    address = state.pc
    keypad = state.keypad
    state, instruction = fetch(state)
    try:
        return execute(state, instruction, held_keys)
    except MachineFault as fault:
        state.pc = address
        state.keypad = keypad
        fault.address = address
        fault.instruction = instruction
        raise


def load_rom_bytes(state: MachineState, rom_data: Union[bytes, bytearray]) -> MachineState:
    """Copy ROM data into CHIP-8 memory starting at 0x200."""
    if PROGRAM_START + len(rom_data) > MEMORY_SIZE:
        raise ValueError(
            f"ROM is {len(rom_data)} bytes, at most {MEMORY_SIZE - PROGRAM_START} fit in memory"
        )
    state.memory[PROGRAM_START:PROGRAM_START + len(rom_data)] = np.frombuffer(bytes(rom_data), dtype=np.uint8)
    return state


def load_rom(state: MachineState, filename: Union[str, os.PathLike]) -> MachineState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_rom_bytes(state, rom_data)
