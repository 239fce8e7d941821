"""
Codomain Module - Subfunction Value Tables

Provides:
- CodomainFunction / CodomainKind: generator variants
- generate_codomain and the individual generators
- Codomain file reading and writing
"""

from .functions import CodomainFunction, CodomainKind, format_float
from .generators import (
    generate_codomain,
    generate_random,
    generate_trap,
    generate_trap_general,
    generate_random_trap,
    generate_nk_q,
    generate_nk_p,
)
from .io import (
    format_codomain,
    write_codomain,
    parse_codomain,
    read_codomain,
    read_codomain_file,
)

__all__ = [
    'CodomainFunction',
    'CodomainKind',
    'format_float',
    'generate_codomain',
    'generate_random',
    'generate_trap',
    'generate_trap_general',
    'generate_random_trap',
    'generate_nk_q',
    'generate_nk_p',
    'format_codomain',
    'write_codomain',
    'parse_codomain',
    'read_codomain',
    'read_codomain_file',
]
