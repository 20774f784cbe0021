"""Tests for random byte providers."""

import pytest
from chipvm import JaxRandomSource, SequenceRandomSource


def test_jax_source_produces_bytes():
    source = JaxRandomSource(seed=0)
    values = [source.next_byte() for _ in range(300)]
    assert all(isinstance(v, int) and 0 <= v <= 255 for v in values)
    assert len(set(values)) > 1


def test_jax_source_is_reproducible():
    first = JaxRandomSource(seed=42, block_size=8)
    second = JaxRandomSource(seed=42, block_size=8)
    assert [first.next_byte() for _ in range(20)] == [second.next_byte() for _ in range(20)]


def test_jax_source_seeds_differ():
    first = JaxRandomSource(seed=1)
    second = JaxRandomSource(seed=2)
    assert [first.next_byte() for _ in range(32)] != [second.next_byte() for _ in range(32)]


def test_jax_source_invalid_block_size():
    with pytest.raises(ValueError):
        JaxRandomSource(block_size=0)


def test_sequence_source_cycles():
    source = SequenceRandomSource([1, 2, 3])
    assert [source.next_byte() for _ in range(7)] == [1, 2, 3, 1, 2, 3, 1]


@pytest.mark.parametrize("values", [[], [256], [-1]])
def test_sequence_source_rejects_invalid(values):
    with pytest.raises(ValueError):
        SequenceRandomSource(values)
