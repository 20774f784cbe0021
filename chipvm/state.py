"""CHIP-8 machine state structures."""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Set, Tuple

import numpy as np

from chipvm.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, NUM_REGISTERS
)
from chipvm.rng import RandomSource, JaxRandomSource

Pixel = Tuple[int, int]


@dataclass(eq=False)
class MachineState:
    """Main CHIP-8 machine state.

    ``display`` is the set of lit ``(x, y)`` cells. ``keypad`` holds the key
    codes that are down for the cycle being executed.
    """
    rng: RandomSource
    memory: np.ndarray = field(default_factory=lambda: np.zeros(MEMORY_SIZE, dtype=np.uint8))
    V: np.ndarray = field(default_factory=lambda: np.zeros(NUM_REGISTERS, dtype=np.uint8))
    pc: int = PROGRAM_START
    I: int = 0
    stack: List[int] = field(default_factory=list)
    stack_limit: Optional[int] = None
    delay_timer: int = 0
    sound_timer: int = 0
    display: Set[Pixel] = field(default_factory=set)
    keypad: FrozenSet[int] = frozenset()


def create_state(rng: Optional[RandomSource] = None, seed: int = 0,
                 stack_limit: Optional[int] = None) -> MachineState:
    """Create initial machine state with font data loaded."""
    if stack_limit is not None and stack_limit < 1:
        raise ValueError(f"stack_limit must be positive or None, got {stack_limit}")
    state = MachineState(rng=rng if rng is not None else JaxRandomSource(seed=seed), stack_limit=stack_limit)
    state.memory[FONT_START:FONT_START + len(FONT_DATA)] = FONT_DATA
    return state


def decrement_timers(state: MachineState) -> MachineState:
    """Count both timers down by one frame, stopping at zero."""
    state.delay_timer = max(state.delay_timer - 1, 0)
    state.sound_timer = max(state.sound_timer - 1, 0)
    return state


def snapshot_display(state: MachineState) -> FrozenSet[Pixel]:
    """Immutable copy of the lit-pixel set, for diffing against later frames."""
    return frozenset(state.display)
