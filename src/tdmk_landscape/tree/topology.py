"""
Clique Tree Topology

Cliques are laid out in level order in an implicit b-ary tree:
level l starts at index sum_{i<l} b^i, and the children of a node form a
contiguous run of at most b indices computed from its level's start.
"""

from dataclasses import dataclass, field
from typing import List

from ..contract import InputParameters


@dataclass
class TreeLayout:
    """
    Level structure of a clique tree with m nodes and branching factor b.

    Attributes:
        m: Number of cliques
        b: Effective branching factor
        start_indices: Start index of every level
    """
    m: int
    b: int
    start_indices: List[int] = field(default_factory=list)

    def __post_init__(self):
        if not self.start_indices:
            total = 0
            level = 0
            while total < self.m:
                self.start_indices.append(total)
                total += self.b ** level
                level += 1

    @classmethod
    def from_parameters(cls, input_parameters: InputParameters) -> 'TreeLayout':
        return cls(m=input_parameters.m, b=input_parameters.branching)

    @property
    def lowest_level(self) -> int:
        return len(self.start_indices) - 1

    @property
    def start_index_lowest_level(self) -> int:
        return self.start_indices[-1]

    @property
    def num_parents(self) -> int:
        """Number of cliques that have at least one child."""
        return -(-(self.m - 1) // self.b)

    def level_of(self, index: int) -> int:
        level = 0
        while level < self.lowest_level and index >= self.start_indices[level + 1]:
            level += 1
        return level

    def children(self, index: int) -> range:
        """Indices of the children of clique `index` (empty for leaves)."""
        if index >= self.start_index_lowest_level:
            return range(0)
        level = self.level_of(index)
        start = self.start_indices[level + 1] + self.b * (index - self.start_indices[level])
        return range(min(start, self.m), min(start + self.b, self.m))

    def parent(self, index: int) -> int:
        if index == 0:
            raise ValueError("The root clique has no parent")
        return (index - 1) // self.b
