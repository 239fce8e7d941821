"""
Uniform Samplers over the ChaCha Bit Source

Integer sampling uses widening multiplication with rejection:
a 32-bit draw v is multiplied by the range; the high word is the sample
and the low word decides rejection against a zone.

- UniformInt (a prepared distribution) rejects using the exact zone
  2^32 - 1 - ((2^32 - range) mod range)
- gen_range (a one-off draw) uses the cheaper zone (range << lz(range)) - 1

Floats take the top 52 bits of a 64-bit draw as the mantissa of a value
in [1, 2) and subtract 1. Shuffling is a descending Fisher-Yates.
The number of draws per call is part of the reproducibility contract.
"""

import math
from typing import List, MutableSequence, TypeVar

from .chacha import ChaChaRng, MASK32
from ..errors import ParameterError


T = TypeVar('T')

_FLOAT_MAX_RAND = 1.0 - 2.0 ** -52


def _widening_multiply(v: int, range_: int):
    product = v * range_
    return product >> 32, product & MASK32


class UniformInt:
    """Uniform integer distribution over [low, high)."""

    def __init__(self, low: int, high: int):
        if low >= high:
            raise ParameterError(f"UniformInt requires low < high, got [{low}, {high})")
        range_ = high - low
        if range_ > MASK32:
            raise ParameterError(f"UniformInt range must fit in 32 bits, got {range_}")
        self.low = low
        self.range = range_
        ints_to_reject = (MASK32 - range_ + 1) % range_
        self._zone = MASK32 - ints_to_reject

    def sample(self, rng: ChaChaRng) -> int:
        while True:
            high_word, low_word = _widening_multiply(rng.next_u32(), self.range)
            if low_word <= self._zone:
                return self.low + high_word


class UniformFloat:
    """Uniform float distribution over [low, high)."""

    def __init__(self, low: float, high: float):
        if not low < high:
            raise ParameterError(f"UniformFloat requires low < high, got [{low}, {high})")
        scale = high - low
        if not math.isfinite(scale):
            raise ParameterError("UniformFloat range must be finite")
        # Shrink the scale until the largest draw stays below high
        while scale * _FLOAT_MAX_RAND + low >= high:
            scale = math.nextafter(scale, -math.inf)
        self.low = low
        self.scale = scale

    def sample(self, rng: ChaChaRng) -> float:
        value0_1 = (rng.next_u64() >> 12) * 2.0 ** -52
        return value0_1 * self.scale + self.low


def gen_range(rng: ChaChaRng, low: int, high: int) -> int:
    """Draw a single integer uniformly from [low, high)."""
    if low >= high:
        raise ParameterError(f"gen_range requires low < high, got [{low}, {high})")
    range_ = high - low
    if range_ > MASK32:
        raise ParameterError(f"gen_range range must fit in 32 bits, got {range_}")
    leading_zeros = 32 - range_.bit_length()
    zone = ((range_ << leading_zeros) - 1) & MASK32
    while True:
        high_word, low_word = _widening_multiply(rng.next_u32(), range_)
        if low_word <= zone:
            return low + high_word


def shuffle(rng: ChaChaRng, items: MutableSequence[T]) -> None:
    """Shuffle a mutable sequence in place."""
    for i in range(len(items) - 1, 0, -1):
        j = gen_range(rng, 0, i + 1)
        items[i], items[j] = items[j], items[i]


def random_bits(rng: ChaChaRng, length: int) -> List[int]:
    """Draw a random bit string, one 32-bit draw per bit."""
    die = UniformInt(0, 2)
    return [die.sample(rng) for _ in range(length)]
