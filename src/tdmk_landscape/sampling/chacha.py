"""
ChaCha20 Bit Source

Deterministic pseudo-random stream used for every generation step.
Benchmark archives and regression fixtures are bit-reproducible for a
given seed, so the stream layout is fixed:

- 64-bit seeds are expanded to a 256-bit key with PCG32 (8 outputs)
- the key feeds the ChaCha20 block function with a 64-bit block counter
  (words 12-13) and a 64-bit stream id (words 14-15)
- 32-bit outputs are the keystream words in order; a 64-bit output is
  two consecutive words, low word first

Blocks are computed four at a time over numpy uint32 lanes.
"""

import os
import struct
from typing import Optional
import numpy as np

from ..errors import ParameterError


MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

_PCG_MULTIPLIER = 6364136223846793005
_PCG_INCREMENT = 11634580027462260723

_CONSTANTS = np.array(
    [0x61707865, 0x3320646E, 0x79622D32, 0x6B206574], dtype=np.uint32
)

BUFFER_BLOCKS = 4
WORDS_PER_BLOCK = 16


def _rotate_left(x: np.ndarray, n: int) -> np.ndarray:
    return (x << np.uint32(n)) | (x >> np.uint32(32 - n))


def _quarter_round(s: np.ndarray, a: int, b: int, c: int, d: int) -> None:
    s[a] += s[b]
    s[d] ^= s[a]
    s[d] = _rotate_left(s[d], 16)
    s[c] += s[d]
    s[b] ^= s[c]
    s[b] = _rotate_left(s[b], 12)
    s[a] += s[b]
    s[d] ^= s[a]
    s[d] = _rotate_left(s[d], 8)
    s[c] += s[d]
    s[b] ^= s[c]
    s[b] = _rotate_left(s[b], 7)


def chacha_blocks(
    key: np.ndarray,
    counter: int,
    stream: int = 0,
    n_blocks: int = BUFFER_BLOCKS,
    double_rounds: int = 10
) -> np.ndarray:
    """
    Compute consecutive ChaCha keystream blocks.

    Args:
        key: Eight uint32 key words
        counter: Block counter of the first block
        stream: 64-bit stream id
        n_blocks: Number of consecutive blocks
        double_rounds: 10 for ChaCha20

    Returns:
        uint32 array of n_blocks * 16 words, block after block
    """
    counters = np.uint64(counter) + np.arange(n_blocks, dtype=np.uint64)

    state = np.empty((WORDS_PER_BLOCK, n_blocks), dtype=np.uint32)
    state[0:4] = _CONSTANTS[:, None]
    state[4:12] = np.asarray(key, dtype=np.uint32)[:, None]
    state[12] = (counters & np.uint64(MASK32)).astype(np.uint32)
    state[13] = (counters >> np.uint64(32)).astype(np.uint32)
    state[14] = np.uint32(stream & MASK32)
    state[15] = np.uint32((stream >> 32) & MASK32)

    working = state.copy()
    for _ in range(double_rounds):
        # Column rounds
        _quarter_round(working, 0, 4, 8, 12)
        _quarter_round(working, 1, 5, 9, 13)
        _quarter_round(working, 2, 6, 10, 14)
        _quarter_round(working, 3, 7, 11, 15)
        # Diagonal rounds
        _quarter_round(working, 0, 5, 10, 15)
        _quarter_round(working, 1, 6, 11, 12)
        _quarter_round(working, 2, 7, 8, 13)
        _quarter_round(working, 3, 4, 9, 14)
    working += state

    return working.T.reshape(-1)


def _pcg32_words(state: int, count: int = 8):
    """Expand a 64-bit seed into 32-bit words with PCG32 (XSH RR)."""
    words = []
    for _ in range(count):
        state = (state * _PCG_MULTIPLIER + _PCG_INCREMENT) & MASK64
        xorshifted = (((state >> 18) ^ state) >> 27) & MASK32
        rot = state >> 59
        words.append(((xorshifted >> rot) | (xorshifted << ((32 - rot) & 31))) & MASK32)
    return words


class ChaChaRng:
    """
    ChaCha20 random number generator.

    One instance is the single shared stream of a generation run; it must
    be passed explicitly through every step that draws from it.
    """

    def __init__(self, seed: bytes, stream: int = 0):
        """
        Initialize from a 32-byte seed (the ChaCha key).

        Args:
            seed: 32 bytes, read as eight little-endian uint32 key words
            stream: 64-bit stream id
        """
        if len(seed) != 32:
            raise ParameterError(f"ChaCha seed must be 32 bytes, got {len(seed)}")
        self._key = np.array(struct.unpack("<8I", bytes(seed)), dtype=np.uint32)
        self._stream = stream & MASK64
        self._counter = 0
        self._results = np.empty(0, dtype=np.uint32)
        self._index = 0

    @classmethod
    def seed_from_u64(cls, seed: int) -> 'ChaChaRng':
        """Create a generator from a 64-bit seed."""
        if seed < 0 or seed > MASK64:
            raise ParameterError(f"seed must fit in 64 unsigned bits, got {seed}")
        return cls(struct.pack("<8I", *_pcg32_words(seed)))

    @classmethod
    def from_entropy(cls) -> 'ChaChaRng':
        """Create a generator seeded from the operating system."""
        return cls(os.urandom(32))

    @classmethod
    def from_optional_seed(cls, seed: Optional[int]) -> 'ChaChaRng':
        return cls.from_entropy() if seed is None else cls.seed_from_u64(seed)

    def _refill(self) -> None:
        self._results = chacha_blocks(
            self._key, self._counter, self._stream, BUFFER_BLOCKS
        )
        self._counter += BUFFER_BLOCKS
        self._index = 0

    def next_u32(self) -> int:
        if self._index >= len(self._results):
            self._refill()
        value = int(self._results[self._index])
        self._index += 1
        return value

    def next_u64(self) -> int:
        low = self.next_u32()
        high = self.next_u32()
        return (high << 32) | low
