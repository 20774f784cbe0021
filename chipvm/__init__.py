"""CHIP-8 virtual machine package."""

from chipvm.state import MachineState, create_state, decrement_timers, snapshot_display
from chipvm.emulator import execute, fetch, run_cycle, load_rom, load_rom_bytes
from chipvm.decode import DecodedInstruction, decode
from chipvm.errors import MachineFault, StackUnderflowError, StackOverflowError, MemoryAccessError
from chipvm.rng import RandomSource, JaxRandomSource, SequenceRandomSource
from chipvm.constants import *

__all__ = [
    "MachineState",
    "create_state",
    "decrement_timers",
    "snapshot_display",
    "fetch",
    "execute",
    "run_cycle",
    "load_rom",
    "load_rom_bytes",
    "DecodedInstruction",
    "decode",
    "MachineFault",
    "StackUnderflowError",
    "StackOverflowError",
    "MemoryAccessError",
    "RandomSource",
    "JaxRandomSource",
    "SequenceRandomSource",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
