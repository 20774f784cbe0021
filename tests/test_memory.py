"""Tests for memory and register operations."""

import pytest
from chipvm import execute


class TestBasicMemory:
    """Test basic register operations."""

    def test_set_basic(self, fresh_state):
        """6XNN - Set VX = NN."""
        state = execute(fresh_state, 0x600A)  # V0 = 0xA
        assert state.V[0] == 0xA

    def test_set_flag_register(self, fresh_state):
        """6XNN - VF can be written like any register."""
        state = execute(fresh_state, 0x6F01)
        assert state.V[0xF] == 0x01

    def test_add_basic(self, fresh_state):
        """7XNN - Add NN to VX."""
        state = fresh_state
        state.V[1] = 0x10
        state = execute(state, 0x7105)  # V1 += 5
        assert state.V[1] == 0x15

    def test_add_wraps_without_flag(self, fresh_state):
        """7XNN - Overflow wraps and leaves VF alone."""
        state = fresh_state
        state.V[2] = 0xF0
        state.V[0xF] = 0x42

        state = execute(state, 0x7220)

        assert state.V[2] == 0x10
        assert state.V[0xF] == 0x42

    @pytest.mark.parametrize("x", [0x0, 0x7, 0xE])
    @pytest.mark.parametrize("nn", [0x00, 0x01, 0x55, 0x80, 0xFF])
    def test_set_then_add_twice_wraps(self, fresh_state, x, nn):
        """6XNN then 7XNN twice leaves 3 * NN mod 256."""
        state = fresh_state
        state = execute(state, 0x6000 | (x << 8) | nn)
        state = execute(state, 0x7000 | (x << 8) | nn)
        state = execute(state, 0x7000 | (x << 8) | nn)

        assert state.V[x] == (3 * nn) % 256


class TestIndexRegister:
    """Test I register operations."""

    def test_set_index_basic(self, fresh_state):
        """ANNN - Set I register to NNN."""
        state = execute(fresh_state, 0xA123)  # I = 0x123
        assert state.I == 0x123

    def test_set_index_zero(self, fresh_state):
        """ANNN - Set I register to zero."""
        state = execute(fresh_state, 0xA123)
        state = execute(state, 0xA000)
        assert state.I == 0x000

    def test_set_index_maximum(self, fresh_state):
        """ANNN - Set I register to maximum 12-bit value."""
        state = execute(fresh_state, 0xAFFF)
        assert state.I == 0xFFF

    def test_set_index_common_values(self, fresh_state):
        """ANNN - Test common memory addresses."""
        for value in [0x200, 0x300, 0x500, 0x600, 0xA00, 0xEA0]:
            state = execute(fresh_state, 0xA000 | value)
            assert state.I == value, f"Failed to set I to 0x{value:03X}"


class TestRandom:
    """Test CXNN with a deterministic source."""

    def test_random_masked(self, seeded_state):
        """CXNN - VX = random byte & NN."""
        state = execute(seeded_state, 0xC00F)  # 0xAB & 0x0F
        assert state.V[0] == 0x0B

        state = execute(state, 0xC1F0)  # 0x5C & 0xF0
        assert state.V[1] == 0x50

        state = execute(state, 0xC2FF)  # 0xFF & 0xFF
        assert state.V[2] == 0xFF

    def test_random_zero_mask(self, seeded_state):
        """CXNN - A zero mask always yields zero."""
        state = seeded_state
        state.V[3] = 0x99
        state = execute(state, 0xC300)
        assert state.V[3] == 0

    def test_random_default_source_in_range(self, fresh_state):
        """CXNN - The default source produces bytes."""
        state = fresh_state
        for _ in range(20):
            state = execute(state, 0xC5FF)
            assert 0 <= int(state.V[5]) <= 0xFF
