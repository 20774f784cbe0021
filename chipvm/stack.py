"""CHIP-8 stack operations."""

from chipvm.constants import WORD_MASK
from chipvm.errors import StackOverflowError, StackUnderflowError
from chipvm.state import MachineState


def push(state: MachineState, address: int) -> None:
    """Push return address onto the call stack."""
    if state.stack_limit is not None and len(state.stack) >= state.stack_limit:
        raise StackOverflowError(f"call stack full ({state.stack_limit} entries)")
    state.stack.append(address & WORD_MASK)


def pop(state: MachineState) -> int:
    """Pop return address from the call stack."""
    if not state.stack:
        raise StackUnderflowError("return with empty call stack")
    return state.stack.pop()
