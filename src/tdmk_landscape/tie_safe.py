"""
Tie-Safe Fitness Comparisons

All fitness comparisons use an absolute tolerance FITNESS_EPSILON.
"Better" requires a difference of at least epsilon, "equal" a difference
strictly below it. Published benchmark ground truths depend on both the
value of epsilon and this asymmetry.
"""

from typing import List, Sequence, Tuple

from .contract import SolutionFit


FITNESS_EPSILON = 1e-10


def is_better_fitness(fitness1: float, fitness2: float) -> bool:
    return fitness1 > fitness2 and abs(fitness1 - fitness2) >= FITNESS_EPSILON


def is_worse_fitness(fitness1: float, fitness2: float) -> bool:
    return fitness1 < fitness2 and abs(fitness1 - fitness2) >= FITNESS_EPSILON


def is_equal_fitness(fitness1: float, fitness2: float) -> bool:
    return abs(fitness1 - fitness2) < FITNESS_EPSILON


def is_better_or_equal_fitness(fitness1: float, fitness2: float) -> bool:
    return fitness1 > fitness2 or is_equal_fitness(fitness1, fitness2)


def is_better_solutionfit(solutionfit1: SolutionFit, solutionfit2: SolutionFit) -> bool:
    return is_better_fitness(solutionfit1.fitness, solutionfit2.fitness)


def is_worse_solutionfit(solutionfit1: SolutionFit, solutionfit2: SolutionFit) -> bool:
    return is_worse_fitness(solutionfit1.fitness, solutionfit2.fitness)


def is_equal_solutionfit(solutionfit1: SolutionFit, solutionfit2: SolutionFit) -> bool:
    """
    Two solutions are equal when their fitness is identical, or when the
    fitness is within epsilon and the bit strings match.
    """
    if solutionfit1.fitness == solutionfit2.fitness:
        return True
    return (
        is_equal_fitness(solutionfit1.fitness, solutionfit2.fitness)
        and solutionfit1.solution.shape == solutionfit2.solution.shape
        and bool((solutionfit1.solution == solutionfit2.solution).all())
    )


def is_better_or_equal_solutionfit(solutionfit1: SolutionFit, solutionfit2: SolutionFit) -> bool:
    return (
        solutionfit1.fitness > solutionfit2.fitness
        or is_equal_solutionfit(solutionfit1, solutionfit2)
    )


def maximizing_indices(values: Sequence[float]) -> Tuple[float, List[int]]:
    """
    Find all indices whose value ties with the maximum.

    The scan starts at index 0. An index within epsilon of the running
    maximum is added without moving the maximum; a strictly better index
    replaces the running maximum and restarts the list.

    Args:
        values: Values to scan

    Returns:
        Tuple of (maximum value, list of tied indices in ascending order)
    """
    if len(values) == 0:
        raise ValueError("No values to search")

    highest_score = float(values[0])
    highest_indices = [0]
    for index in range(1, len(values)):
        score = float(values[index])
        if is_equal_fitness(score, highest_score):
            highest_indices.append(index)
        elif is_better_fitness(score, highest_score):
            highest_score = score
            highest_indices = [index]

    return highest_score, highest_indices


class TieTracker:
    """
    Running maximum that keeps every tied candidate.

    A candidate strictly better than the running best clears the list.
    A candidate that is better-or-equal is appended and becomes the new
    running best, so the recorded best may drift by less than epsilon.
    The lookup score is the score of the first recorded candidate.
    """

    def __init__(self):
        self.entries: List[Tuple[int, float]] = []
        self._highest_score = 0.0

    def offer(self, candidate: int, score: float) -> None:
        if self.entries and is_better_fitness(score, self._highest_score):
            self.entries.clear()
        if not self.entries or is_better_or_equal_fitness(score, self._highest_score):
            self.entries.append((candidate, score))
            self._highest_score = score

    @property
    def best_score(self) -> float:
        return self.entries[0][1]

    @property
    def candidates(self) -> List[int]:
        return [candidate for candidate, _ in self.entries]
