"""
GA Individual and Operators Module
===================================

Genetic algorithm individual representation and genetic operators.
"""

import numpy as np
from typing import List, Sequence
from dataclasses import dataclass, field


@dataclass
class TourIndividual:
    """
    Individual in GA population.

    Genome:
    - genes: permutation of point indices (visiting order)

    Fitness:
    - Closed tour length, lower is better
    - inf = not evaluated
    """
    genes: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int))
    fitness: float = float('inf')

    def copy(self) -> 'TourIndividual':
        """Create a deep copy"""
        return TourIndividual(genes=self.genes.copy(), fitness=self.fitness)

    def __len__(self) -> int:
        return len(self.genes)

    def __repr__(self) -> str:
        return f"TourIndividual(n={len(self.genes)}, fitness={self.fitness:.2f})"


def ordered_crossover(parent1: Sequence[int],
                      parent2: Sequence[int],
                      cut: int) -> np.ndarray:
    """
    Ordered crossover of two permutations.

    The child copies parent1 on [0, cut). Each later position takes
    parent2's gene there if still unused, else parent1's gene there if
    still unused, else the first unused gene found scanning both parents
    backward from that position.

    Args:
        parent1: First parent permutation
        parent2: Second parent permutation (same genes, same length)
        cut: Crossover point in [0, len(parent1)]

    Returns:
        Child permutation
    """
    n = len(parent1)
    child = [int(g) for g in parent1[:cut]]
    used = set(child)

    for i in range(cut, n):
        gene = int(parent2[i])
        if gene in used:
            gene = int(parent1[i])
        if gene in used:
            gene = _scan_back_for_unused(parent1, parent2, i, used)
        child.append(gene)
        used.add(gene)

    return np.array(child, dtype=np.asarray(parent1).dtype)


def _scan_back_for_unused(parent1: Sequence[int],
                          parent2: Sequence[int],
                          start: int,
                          used: set) -> int:
    """First gene not yet used, scanning both parents from `start` down to 0"""
    for j in range(start, -1, -1):
        for parent in (parent2, parent1):
            gene = int(parent[j])
            if gene not in used:
                return gene
    raise ValueError("parents are not permutations of the same genes")


def swap_mutation(genes: np.ndarray, i: int, j: int):
    """Exchange two positions in place"""
    genes[i], genes[j] = genes[j], genes[i]


def reverse_mutation(genes: np.ndarray, i: int, j: int):
    """Reverse the inclusive segment between two positions in place"""
    lo, hi = (i, j) if i <= j else (j, i)
    genes[lo:hi + 1] = genes[lo:hi + 1][::-1].copy()


class GeneticOperators:
    """
    Genetic operators for tour optimization.

    Operators:
    - Mutation: swap two cities, or reverse a segment
    - Crossover: ordered crossover with a single random cut
    - Tournament selection (pool drawn with replacement)
    """

    def __init__(self,
                 mutation_rate: float = 0.15,
                 tournament_k: int = 5,
                 swap_fraction: float = 0.5,
                 rng: np.random.Generator = None,
                 seed: int = 42):
        """
        Initialize genetic operators.

        Args:
            mutation_rate: Probability of mutating an offspring
            tournament_k: Tournament selection pool size
            swap_fraction: Share of mutations that swap rather than reverse
            rng: Random generator to draw from (built from seed if None)
            seed: Random seed
        """
        self.mutation_rate = mutation_rate
        self.tournament_k = tournament_k
        self.swap_fraction = swap_fraction
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def mutate(self, ind: TourIndividual) -> bool:
        """
        Mutate an individual in place with probability mutation_rate.

        Returns:
            True if the genome changed
        """
        n = len(ind.genes)
        if n < 2 or self.rng.random() >= self.mutation_rate:
            return False

        i = int(self.rng.integers(n))
        j = int(self.rng.integers(n))
        if self.rng.random() < self.swap_fraction:
            swap_mutation(ind.genes, i, j)
        else:
            reverse_mutation(ind.genes, i, j)

        ind.fitness = float('inf')
        return True

    def crossover(self, parent1: TourIndividual,
                  parent2: TourIndividual) -> TourIndividual:
        """
        Ordered crossover at a random cut in [0, n].

        Args:
            parent1: First parent
            parent2: Second parent

        Returns:
            Child individual (unevaluated)
        """
        cut = int(self.rng.integers(len(parent1.genes) + 1))
        genes = ordered_crossover(parent1.genes, parent2.genes, cut)
        return TourIndividual(genes=genes)

    def tournament_select(self, population: List[TourIndividual]) -> TourIndividual:
        """
        Tournament selection.

        Args:
            population: Population to select from

        Returns:
            Fittest of tournament_k individuals sampled with replacement
        """
        picks = self.rng.integers(len(population), size=self.tournament_k)
        return min((population[i] for i in picks), key=lambda x: x.fitness)

    def create_random_individual(self, n: int) -> TourIndividual:
        """
        Create a random tour over n points.

        Args:
            n: Number of points

        Returns:
            New individual with a shuffled genome
        """
        return TourIndividual(genes=self.rng.permutation(n))
