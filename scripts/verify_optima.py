#!/usr/bin/env python3
"""
Exhaustive Optimum Verification

Generates small landscapes over a grid of (M, k, o, b) and codomain
functions, enumerates every bit string, and checks that the solver's
optimum score and set of optimal strings match the enumeration.

Exit code is 0 when every instance matches, 1 otherwise.
"""

import sys
import argparse
import itertools
import time
import numpy as np
from pathlib import Path
from dataclasses import dataclass
from typing import List

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tdmk_landscape import (
    ChaChaRng,
    CliqueTree,
    CodomainFunction,
    InputParameters,
)
from tdmk_landscape.contract import bits_to_string

FUNCTIONS = {
    'random': CodomainFunction.random(),
    'deceptive-trap': CodomainFunction.deceptive_trap(),
    'nk-q': CodomainFunction.nk_q(3),
    'nk-p': CodomainFunction.nk_p(0.5),
}


@dataclass
class CheckResult:
    """Outcome of one exhaustive check."""
    parameters: InputParameters
    function: str
    solver_score: float
    enumerated_score: float
    solver_count: int
    enumerated_count: int
    matches: bool


def enumerate_fitness(clique_tree: CliqueTree) -> np.ndarray:
    """Fitness of every bit string of the landscape, string i = binary of i."""
    n = clique_tree.problem_size
    k = clique_tree.input_parameters.k
    shifts = np.arange(n - 1, -1, -1, dtype=np.int64)
    strings = (np.arange(1 << n, dtype=np.int64)[:, None] >> shifts) & 1

    cliques = np.array(clique_tree.cliques, dtype=np.int64)
    weights = 1 << np.arange(k - 1, -1, -1, dtype=np.int64)
    indices = strings[:, cliques] @ weights
    rows = np.arange(len(cliques))
    return clique_tree.codomain_values[rows, indices].sum(axis=1)


def check_instance(clique_tree: CliqueTree, function: str, tolerance: float) -> CheckResult:
    fitness = enumerate_fitness(clique_tree)
    best = float(fitness.max())
    n = clique_tree.problem_size
    enumerated = {
        format(int(i), f'0{n}b') for i in np.flatnonzero(fitness > best - tolerance)
    }
    solver = {bits_to_string(row) for row in clique_tree.glob_optima_strings}

    matches = abs(best - clique_tree.glob_optima_score) < tolerance and solver == enumerated
    return CheckResult(
        parameters=clique_tree.input_parameters,
        function=function,
        solver_score=clique_tree.glob_optima_score,
        enumerated_score=best,
        solver_count=len(solver),
        enumerated_count=len(enumerated),
        matches=matches,
    )


def parameter_grid(max_m: int, max_k: int, max_b: int, max_n: int) -> List[InputParameters]:
    grid = []
    for m, k, b in itertools.product(range(1, max_m + 1), range(1, max_k + 1), range(1, max_b + 1)):
        for o in range(k):
            params = InputParameters(m, k, o, b)
            if params.problem_size <= max_n:
                grid.append(params)
    return grid


def main():
    parser = argparse.ArgumentParser(
        description='Check the global optimum solver against exhaustive enumeration'
    )
    parser.add_argument('--seed', type=int, default=0,
                        help='Seed for the bit source (default: 0)')
    parser.add_argument('--max-m', type=int, default=4, help='Largest M (default: 4)')
    parser.add_argument('--max-k', type=int, default=4, help='Largest k (default: 4)')
    parser.add_argument('--max-b', type=int, default=3, help='Largest b (default: 3)')
    parser.add_argument('--max-n', type=int, default=14,
                        help='Skip instances with more variables (default: 14)')
    parser.add_argument('--tolerance', type=float, default=1e-9,
                        help='Score tolerance for ties (default: 1e-9)')
    args = parser.parse_args()

    rng = ChaChaRng.seed_from_u64(args.seed)
    grid = parameter_grid(args.max_m, args.max_k, args.max_b, args.max_n)

    print("=" * 72)
    print(f"Exhaustive optimum verification: {len(grid)} parameter tuples x {len(FUNCTIONS)} functions")
    print("=" * 72)

    start = time.time()
    results = []
    for params in grid:
        for name, function in FUNCTIONS.items():
            clique_tree = CliqueTree.generate(params, function, rng)
            result = check_instance(clique_tree, name, args.tolerance)
            results.append(result)
            if not result.matches:
                print(f"MISMATCH {params.to_line():>10} {name:15} "
                      f"solver={result.solver_score!r} ({result.solver_count}) "
                      f"enumerated={result.enumerated_score!r} ({result.enumerated_count})")

    elapsed = time.time() - start
    failures = sum(1 for r in results if not r.matches)

    print("-" * 72)
    print(f"{'function':15} {'checked':>8} {'failed':>8} {'max optima':>11}")
    for name in FUNCTIONS:
        subset = [r for r in results if r.function == name]
        print(f"{name:15} {len(subset):8d} {sum(1 for r in subset if not r.matches):8d} "
              f"{max(r.solver_count for r in subset):11d}")
    print("-" * 72)
    print(f"Total: {len(results) - failures}/{len(results)} matched in {elapsed:.2f}s")

    sys.exit(0 if failures == 0 else 1)


if __name__ == "__main__":
    main()
