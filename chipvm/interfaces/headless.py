"""Front-end without a device, for tests and offline recording."""

from typing import AbstractSet, Callable, FrozenSet, Iterable, List, Mapping, Optional, Union

from chipvm.interfaces.base import Interface, Pixel

KeySchedule = Union[Mapping[int, Iterable[int]], Callable[[int], Iterable[int]]]


class HeadlessInterface(Interface):
    """Feeds scripted keys and keeps a snapshot of every drawn frame.

    Args:
        key_schedule: Frame number to held keys, either a mapping (frames
            not listed hold no keys) or a callable.
        max_frames: Stop after this many frames; None runs until the caller
            stops.
    """

    def __init__(self, key_schedule: Optional[KeySchedule] = None, max_frames: Optional[int] = None):
        self.key_schedule = key_schedule
        self.max_frames = max_frames
        self.frame = 0
        self.frames: List[FrozenSet[Pixel]] = []

    def read_keys(self) -> Optional[FrozenSet[int]]:
        if self.max_frames is not None and self.frame >= self.max_frames:
            return None
        if self.key_schedule is None:
            keys = ()
        elif callable(self.key_schedule):
            keys = self.key_schedule(self.frame)
        else:
            keys = self.key_schedule.get(self.frame, ())
        self.frame += 1
        return frozenset(keys)

    def draw(self, display: AbstractSet[Pixel]) -> None:
        self.frames.append(frozenset(display))
