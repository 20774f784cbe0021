"""Front-end contract used by the frame loop."""

from typing import AbstractSet, FrozenSet, Optional, Tuple

Pixel = Tuple[int, int]

# Physical keyboard layout mapped onto the 4x4 CHIP-8 keypad:
#   1 2 3 4      1 2 3 C
#   Q W E R  ->  4 5 6 D
#   A S D F      7 8 9 E
#   Z X C V      A 0 B F
KEYBOARD_LAYOUT = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


class Interface:
    """A terminal or windowed front-end for the emulator."""

    def setup(self) -> None:
        """Prepare the output device. Called once before the first frame."""

    def read_keys(self) -> Optional[FrozenSet[int]]:
        """Return the held CHIP-8 key codes, or None to stop the run."""
        raise NotImplementedError

    def draw(self, display: AbstractSet[Pixel]) -> None:
        """Present the lit-pixel set for the frame that just ran."""
        raise NotImplementedError

    def cleanup(self) -> None:
        """Release the output device. Always called, even after a fault."""
