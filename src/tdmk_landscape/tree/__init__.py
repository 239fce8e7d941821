"""
Tree Module - Clique Tree Structure

Provides:
- TreeLayout: level-order layout of the implicit b-ary tree
- construct: random clique/separator construction
- verify_clique_tree: structural checks
"""

from .topology import TreeLayout
from .builder import construct, verify_clique_tree

__all__ = [
    'TreeLayout',
    'construct',
    'verify_clique_tree',
]
