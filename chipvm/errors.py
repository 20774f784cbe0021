"""Faults raised by the CHIP-8 engine.

A fault aborts the current cycle and leaves the machine exactly as it was
before the faulting instruction was fetched. The driving loop decides whether
to halt or to carry on.
"""

from typing import Optional


class MachineFault(Exception):
    """Base class for recoverable machine faults."""

    def __init__(self, message: str, address: Optional[int] = None, instruction: Optional[int] = None):
        self.address = address
        self.instruction = instruction
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.instruction is not None and self.address is not None:
            return f"{message} (instruction 0x{self.instruction:04X} at 0x{self.address:03X})"
        if self.address is not None:
            return f"{message} (at 0x{self.address:03X})"
        return message


class StackUnderflowError(MachineFault):
    """Return (00EE) executed with an empty call stack."""


class StackOverflowError(MachineFault):
    """Call (2NNN) executed with the call stack at its configured limit."""


class MemoryAccessError(MachineFault):
    """Fetch, load or store outside the 4 KiB address space."""
