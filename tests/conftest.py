"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
from chipvm import create_state, SequenceRandomSource, PROGRAM_START


@pytest.fixture
def fresh_state():
    """Provide a fresh machine state for each test."""
    return create_state()


@pytest.fixture
def seeded_state():
    """Provide a state whose random source replays 0xAB, 0x5C, 0xFF."""
    return create_state(rng=SequenceRandomSource([0xAB, 0x5C, 0xFF]))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    state.memory[address:address + len(sprite_bytes)] = sprite_bytes
    return state


def load_program(state, instructions, address=PROGRAM_START):
    """Helper to write 16-bit instruction words into memory."""
    for offset, instruction in enumerate(instructions):
        state.memory[address + 2 * offset] = instruction >> 8
        state.memory[address + 2 * offset + 1] = instruction & 0xFF
    return state
