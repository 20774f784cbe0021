"""Terminal front-end: paints the display with block characters.

Only cells that changed since the previous frame are repainted. Keys are
read from raw stdin; since terminals report no key releases, a key counts
as held for ``hold_frames`` frames after its last keystroke.
"""

import os
import select
import sys
from typing import AbstractSet, Dict, FrozenSet, Optional

from chipvm.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chipvm.rendering import display_diff
from chipvm.interfaces.base import Interface, KEYBOARD_LAYOUT, Pixel

LIT = "█"
UNLIT = " "

ENTER_ALTERNATE_SCREEN = "\033[?1049h"
LEAVE_ALTERNATE_SCREEN = "\033[?1049l"
CLEAR_SCREEN = "\033[2J"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"

ESCAPE = "\x1b"
CTRL_C = "\x03"


def move_to(x: int, y: int) -> str:
    return f"\033[{y + 1};{x + 1}H"


def _skip_escape_sequence(text: str, position: int) -> int:
    """Index just past the ``ESC [`` or ``ESC O`` sequence starting at ``position``.

    SS3 (``ESC O``) carries one final character. CSI (``ESC [``) carries
    parameter and intermediate bytes in 0x20-0x3F, then a final byte in
    0x40-0x7E. A sequence cut off by the end of the read is dropped whole.
    """
    if text[position + 1] == "O":
        return min(position + 3, len(text))
    position += 2
    while position < len(text) and 0x20 <= ord(text[position]) <= 0x3F:
        position += 1
    if position < len(text) and 0x40 <= ord(text[position]) <= 0x7E:
        position += 1
    return position


def _visible(pixel: Pixel) -> bool:
    x, y = pixel
    return 0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT


class TerminalInterface(Interface):

    def __init__(self, output=None, input_stream=None, hold_frames: int = 4):
        if hold_frames < 1:
            raise ValueError(f"hold_frames must be at least 1, got {hold_frames}")
        self.output = output if output is not None else sys.stdout
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.hold_frames = hold_frames
        self.last_frame: FrozenSet[Pixel] = frozenset()
        self._held: Dict[int, int] = {}
        self._saved_attributes = None

    def _input_fd(self) -> Optional[int]:
        try:
            fd = self.input_stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None
        return fd if os.isatty(fd) else None

    def setup(self) -> None:
        fd = self._input_fd()
        if fd is not None:
            import termios
            import tty
            self._saved_attributes = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        self.output.write(ENTER_ALTERNATE_SCREEN + CLEAR_SCREEN + HIDE_CURSOR)
        self.output.flush()
        self.last_frame = frozenset()

    def _read_pending(self) -> str:
        fd = self._input_fd()
        if fd is None:
            return ""
        chunks = []
        while select.select([fd], [], [], 0)[0]:
            data = os.read(fd, 64)
            if not data:
                break
            chunks.append(data.decode("latin-1"))
        return "".join(chunks)

    def feed(self, text: str) -> bool:
        """Register keystrokes. Returns False when a quit key was seen."""
        position = 0
        while position < len(text):
            char = text[position]
            if char == CTRL_C:
                return False
            if char == ESCAPE:
                # Bare escape quits, escape sequences (arrow keys etc.) are skipped.
                if position + 1 < len(text) and text[position + 1] in "[O":
                    position = _skip_escape_sequence(text, position)
                    continue
                return False
            key = KEYBOARD_LAYOUT.get(char.lower())
            if key is not None:
                self._held[key] = self.hold_frames
            position += 1
        return True

    def read_keys(self) -> Optional[FrozenSet[int]]:
        if not self.feed(self._read_pending()):
            return None
        held = frozenset(self._held)
        self._held = {key: frames - 1 for key, frames in self._held.items() if frames > 1}
        return held

    def draw(self, display: AbstractSet[Pixel]) -> None:
        current = frozenset(display)
        added, removed = display_diff(self.last_frame, current)
        ops = [(pixel, LIT) for pixel in added if _visible(pixel)]
        ops += [(pixel, UNLIT) for pixel in removed if _visible(pixel)]
        ops.sort(key=lambda op: (op[0][1], op[0][0]))

        self.output.write("".join(move_to(x, y) + char for (x, y), char in ops))
        self.output.flush()
        self.last_frame = current

    def cleanup(self) -> None:
        self.output.write(SHOW_CURSOR + LEAVE_ALTERNATE_SCREEN)
        self.output.flush()
        if self._saved_attributes is not None:
            import termios
            termios.tcsetattr(self._input_fd(), termios.TCSADRAIN, self._saved_attributes)
            self._saved_attributes = None
