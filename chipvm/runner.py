"""Fixed-rate frame loop driving the engine."""

import time
from itertools import count
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence

from chipvm.config import RunnerConfig, config_to_dict
from chipvm.emulator import run_cycle
from chipvm.errors import MachineFault
from chipvm.interfaces.base import Interface, Pixel
from chipvm.interfaces.headless import HeadlessInterface, KeySchedule
from chipvm.logging import RunnerCallback, frames_with_progress
from chipvm.state import MachineState, decrement_timers


@dataclass
class RunStats:
    """Counters for a run. Only the first and last fault are kept."""
    frames: int = 0
    instructions: int = 0
    fault_count: int = 0
    first_fault: Optional[MachineFault] = None
    last_fault: Optional[MachineFault] = None
    elapsed: float = 0.0
    halted: bool = False

    @property
    def instructions_per_second(self) -> float:
        return self.instructions / self.elapsed if self.elapsed > 0 else 0.0

    def record_fault(self, fault: MachineFault) -> None:
        # A stored traceback pins every frame of the faulting cycle.
        fault.__traceback__ = None
        self.fault_count += 1
        if self.first_fault is None:
            self.first_fault = fault
        self.last_fault = fault


class Runner:
    """Runs frames of ``instructions_per_frame`` cycles at ``fps`` frames per second.

    Each frame: read keys, count the timers down, execute the cycles, draw.
    A machine fault is reported to the callbacks; the run then halts, or with
    ``halt_on_fault`` disabled the faulting instruction is stepped over.
    """

    def __init__(
        self,
        state: MachineState,
        interface: Interface,
        config: Optional[RunnerConfig] = None,
        callbacks: Sequence[RunnerCallback] = (),
        sleep=time.sleep,
        clock=time.monotonic,
    ):
        self.state = state
        self.interface = interface
        self.config = config if config is not None else RunnerConfig()
        self.callbacks = list(callbacks)
        self.sleep = sleep
        self.clock = clock
        self.stats = RunStats()

    def _metrics(self) -> dict:
        return {
            "instructions": self.stats.instructions,
            "instructions_per_second": self.stats.instructions_per_second,
            "lit_pixels": len(self.state.display),
            "faults": self.stats.fault_count,
        }

    def _fault(self, fault: MachineFault) -> bool:
        """Record a fault. Returns True when the run should continue."""
        self.stats.record_fault(fault)
        for callback in self.callbacks:
            callback.on_fault(self.stats.frames, fault)
        if self.config.halt_on_fault:
            self.stats.halted = True
            return False
        self.state.pc += 2
        return True

    def step_frame(self, held_keys: FrozenSet[int]) -> bool:
        """Run one frame's worth of cycles. Returns False if a fault halted the run."""
        decrement_timers(self.state)
        for _ in range(self.config.instructions_per_frame):
            try:
                run_cycle(self.state, held_keys)
            except MachineFault as fault:
                if not self._fault(fault):
                    return False
            else:
                self.stats.instructions += 1
        return True

    def run(self, max_frames: Optional[int] = None, progress: bool = False) -> RunStats:
        """Run until the interface asks to stop, ``max_frames`` or a halting fault.

        With ``progress`` and a frame limit, a tqdm bar tracks the frames.
        """
        frame_duration = 1.0 / self.config.fps if self.config.fps > 0 else 0.0
        if max_frames is None:
            frame_numbers = count()
        elif progress:
            frame_numbers = frames_with_progress(max_frames)
        else:
            frame_numbers = iter(range(max_frames))

        for callback in self.callbacks:
            callback.on_start(config_to_dict(self.config))

        start = self.clock()
        last_frame_end = start
        self.interface.setup()
        try:
            for _ in frame_numbers:
                held_keys = self.interface.read_keys()
                if held_keys is None:
                    break

                running = self.step_frame(held_keys)
                self.interface.draw(self.state.display)
                self.stats.frames += 1
                self.stats.elapsed = self.clock() - start

                for callback in self.callbacks:
                    callback.on_frame(self.stats.frames, self._metrics())
                if not running:
                    break

                if frame_duration:
                    remaining = frame_duration - (self.clock() - last_frame_end)
                    if remaining > 0:
                        self.sleep(remaining)
                last_frame_end = self.clock()
        finally:
            if hasattr(frame_numbers, "close"):
                frame_numbers.close()
            self.interface.cleanup()
            self.stats.elapsed = self.clock() - start

        final_metrics = self._metrics()
        final_metrics["frames"] = self.stats.frames
        for callback in self.callbacks:
            callback.on_end(final_metrics)
        return self.stats


def run_headless(
    state: MachineState,
    frames: int,
    config: Optional[RunnerConfig] = None,
    key_schedule: Optional[KeySchedule] = None,
    callbacks: Sequence[RunnerCallback] = (),
    progress: bool = False,
) -> List[FrozenSet[Pixel]]:
    """Run ``frames`` frames as fast as possible and return every drawn display."""
    config = (config if config is not None else RunnerConfig()).replace(fps=0)
    interface = HeadlessInterface(key_schedule)
    Runner(state, interface, config, callbacks).run(max_frames=frames, progress=progress)
    return interface.frames
