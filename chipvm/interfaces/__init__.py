"""Front-ends that drive the emulator."""

from chipvm.interfaces.base import Interface, KEYBOARD_LAYOUT
from chipvm.interfaces.headless import HeadlessInterface
from chipvm.interfaces.terminal import TerminalInterface

__all__ = [
    "Interface",
    "KEYBOARD_LAYOUT",
    "HeadlessInterface",
    "TerminalInterface",
]
