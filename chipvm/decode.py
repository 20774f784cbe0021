"""Instruction word decoding.

Every cycle decodes one 16-bit word; there are only 65536 of them, so
decoded instructions are cached and shared. They are frozen for that reason.
"""

from functools import lru_cache

from chex import dataclass

from chipvm.constants import WORD_MASK


@dataclass(frozen=True)
class DecodedInstruction:
    """Operand fields of one instruction word, named by CHIP-8 convention.

    ``opcode`` is the top nibble that selects the handler group, ``x`` and
    ``y`` are register indices, ``n``/``nn``/``nnn`` are the 4, 8 and 12-bit
    immediates from the low end of the word.
    """
    raw: int
    opcode: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int


@lru_cache(maxsize=WORD_MASK + 1)
def _decode_word(word: int) -> DecodedInstruction:
    return DecodedInstruction(
        raw=word,
        opcode=word >> 12,
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        nn=word & 0xFF,
        nnn=word & 0xFFF,
    )


def decode(instruction: int) -> DecodedInstruction:
    """Split a word into its fields. Bits above 16 are ignored."""
    return _decode_word(int(instruction) & WORD_MASK)
