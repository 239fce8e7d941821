"""
Sampling Module - Reproducible Random Streams

Provides:
- ChaChaRng: ChaCha20 bit source seeded from a 64-bit integer
- UniformInt / UniformFloat: prepared distributions
- gen_range / shuffle / random_bits: one-off draws
"""

from .chacha import ChaChaRng, chacha_blocks
from .uniform import UniformInt, UniformFloat, gen_range, shuffle, random_bits

__all__ = [
    'ChaChaRng',
    'chacha_blocks',
    'UniformInt',
    'UniformFloat',
    'gen_range',
    'shuffle',
    'random_bits',
]
