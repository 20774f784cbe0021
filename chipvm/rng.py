"""Random byte providers for CXNN."""

from itertools import cycle
from typing import Iterable, Optional

import jax
import jax.numpy as jnp
import numpy as np


class RandomSource:
    """Interface for random byte providers."""

    def next_byte(self) -> int:
        raise NotImplementedError


class JaxRandomSource(RandomSource):
    """Uniform random bytes drawn from a split JAX PRNG key.

    Bytes are generated in blocks so that the key is only split once per
    ``block_size`` draws.
    """

    def __init__(self, key: Optional[jax.Array] = None, seed: int = 0, block_size: int = 256):
        if block_size < 1:
            raise ValueError(f"block_size must be positive, got {block_size}")
        self.key = jax.random.PRNGKey(seed) if key is None else key
        self.block_size = block_size
        self._buffer = np.empty(0, dtype=np.uint8)
        self._position = 0

    def _refill(self):
        self.key, subkey = jax.random.split(self.key)
        block = jax.random.bits(subkey, shape=(self.block_size,), dtype=jnp.uint8)
        self._buffer = np.asarray(block, dtype=np.uint8)
        self._position = 0

    def next_byte(self) -> int:
        if self._position >= len(self._buffer):
            self._refill()
        value = int(self._buffer[self._position])
        self._position += 1
        return value


class SequenceRandomSource(RandomSource):
    """Deterministic source that replays the given bytes forever."""

    def __init__(self, values: Iterable[int]):
        values = [int(v) for v in values]
        if not values:
            raise ValueError("SequenceRandomSource needs at least one value")
        if any(v < 0 or v > 0xFF for v in values):
            raise ValueError("SequenceRandomSource values must be bytes (0-255)")
        self._values = cycle(values)

    def next_byte(self) -> int:
        return next(self._values)
