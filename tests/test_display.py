"""Tests for display operations (DXYN)."""

import pytest
from chipvm import execute, snapshot_display, MemoryAccessError, FONT_START
from conftest import setup_sprite_in_memory


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        state = fresh_state

        # Simple 2x2 box sprite
        sprite = [0xC0, 0xC0]  # 11000000, 11000000
        state = setup_sprite_in_memory(state, 0x300, sprite)

        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6105)  # V1 = 5
        state = execute(state, 0xA300)  # I = 0x300

        state = execute(state, 0xD012)

        assert state.display == {(10, 5), (11, 5), (10, 6), (11, 6)}
        assert state.V[15] == 0

    def test_collision_detection(self, fresh_state):
        """Test collision flag when sprite overlaps existing pixels."""
        state = fresh_state

        sprite = [0x80]  # 10000000
        state = setup_sprite_in_memory(state, 0x400, sprite)

        state = execute(state, 0x6014)  # V0 = 20
        state = execute(state, 0x610A)  # V1 = 10
        state = execute(state, 0xA400)  # I = 0x400

        state = execute(state, 0xD011)
        assert (20, 10) in state.display
        assert state.V[15] == 0

        state = execute(state, 0xD011)
        assert (20, 10) not in state.display  # Pixel erased by XOR
        assert state.V[15] == 1

    def test_xor_is_self_inverse(self, fresh_state):
        """Drawing over a lit pixel clears it; drawing again restores the display."""
        state = fresh_state
        state.display.update({(10, 5), (40, 20)})
        before = snapshot_display(state)

        state = setup_sprite_in_memory(state, 0x500, [0xC0, 0x40])
        state.V[0] = 10
        state.V[1] = 5
        state.I = 0x500

        state = execute(state, 0xD012)
        assert (10, 5) not in state.display
        assert (11, 5) in state.display
        assert (11, 6) in state.display
        assert state.V[15] == 1

        state = execute(state, 0xD012)
        assert state.display == before
        assert state.V[15] == 1

    def test_draw_font_digit(self, fresh_state):
        """Built-in font sprites draw through FX29 + DXY5."""
        state = fresh_state
        state.V[2] = 0x0
        state = execute(state, 0xF229)
        assert state.I == FONT_START

        state = execute(state, 0xD005)  # V0 = V0 = 0

        # "0" is F0 90 90 90 F0
        expected = {(x, 0) for x in range(4)} | {(x, 4) for x in range(4)}
        expected |= {(0, y) for y in range(1, 4)} | {(3, y) for y in range(1, 4)}
        assert state.display == expected

    def test_zero_height_sprite(self, fresh_state):
        """DXY0 draws nothing and clears VF."""
        state = fresh_state
        state.V[15] = 1
        state = execute(state, 0xD010)
        assert state.display == set()
        assert state.V[15] == 0


class TestScreenBoundaries:
    """Test sprite clipping and position wrapping."""

    def test_right_edge_clipping(self, fresh_state):
        """Columns past x = 63 are dropped."""
        state = fresh_state

        state = setup_sprite_in_memory(state, 0x600, [0xFF])
        state = execute(state, 0x603C)  # V0 = 60
        state = execute(state, 0x6100)  # V1 = 0
        state = execute(state, 0xA600)

        state = execute(state, 0xD011)

        assert state.display == {(60, 0), (61, 0), (62, 0), (63, 0)}

    def test_clipping_does_not_abort_later_rows(self, fresh_state):
        """Clipping one row still draws the following rows."""
        state = fresh_state

        state = setup_sprite_in_memory(state, 0x600, [0x81, 0x80, 0x03])
        state.V[0] = 62
        state.V[1] = 3
        state.I = 0x600

        state = execute(state, 0xD013)

        # Row 0 loses column 7 (x = 69), row 2 loses columns 6-7 (x = 68, 69)
        assert state.display == {(62, 3), (62, 4)}

    def test_bottom_edge_not_clipped(self, fresh_state):
        """Rows past y = 31 stay in the lit set, off screen."""
        state = fresh_state

        state = setup_sprite_in_memory(state, 0x700, [0x80, 0x80, 0x80])
        state = execute(state, 0x6000)  # V0 = 0
        state = execute(state, 0x611E)  # V1 = 30
        state = execute(state, 0xA700)

        state = execute(state, 0xD013)

        assert state.display == {(0, 30), (0, 31), (0, 32)}

    def test_coordinate_wrapping(self, fresh_state):
        """The start position wraps modulo the screen size."""
        state = fresh_state

        state = setup_sprite_in_memory(state, 0x800, [0x80])
        state = execute(state, 0x6046)  # V0 = 70 (70 % 64 = 6)
        state = execute(state, 0x6125)  # V1 = 37 (37 % 32 = 5)
        state = execute(state, 0xA800)

        state = execute(state, 0xD011)

        assert state.display == {(6, 5)}


class TestSpriteVariations:
    """Test different sprite configurations."""

    def test_different_sprite_heights(self, fresh_state):
        """Only N rows are read."""
        state = fresh_state

        sprite = [0x80, 0x40, 0x20, 0x10, 0x08]  # Diagonal line
        state = setup_sprite_in_memory(state, 0x900, sprite)

        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6108)  # V1 = 8
        state = execute(state, 0xA900)

        state = execute(state, 0xD013)

        assert state.display == {(10, 8), (11, 9), (12, 10)}

    def test_vf_register_preservation(self, fresh_state):
        """VF is cleared when nothing collides."""
        state = fresh_state

        state = setup_sprite_in_memory(state, 0xB00, [0x80])
        state = execute(state, 0x6F01)  # VF = 1
        state = execute(state, 0x6005)
        state = execute(state, 0x6105)
        state = execute(state, 0xAB00)
        state = execute(state, 0xD011)

        assert state.V[15] == 0

    def test_sprite_read_past_memory(self, fresh_state):
        """Sprite data running past 0xFFF is a fault and draws nothing."""
        state = fresh_state
        state.I = 0xFFE
        state.V[15] = 0x55

        with pytest.raises(MemoryAccessError):
            execute(state, 0xD013)
        assert state.display == set()
        assert state.V[15] == 0x55

    def test_sprite_ending_at_last_byte(self, fresh_state):
        """A sprite whose last row is at 0xFFF is fine."""
        state = setup_sprite_in_memory(fresh_state, 0xFFD, [0x80, 0x80, 0x80])
        state.I = 0xFFD
        state = execute(state, 0xD013)
        assert state.display == {(0, 0), (0, 1), (0, 2)}
