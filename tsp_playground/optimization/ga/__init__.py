"""
Genetic Algorithm Module
========================

GA-based tour optimization with permutation genomes.
"""

from .individual import (
    TourIndividual,
    GeneticOperators,
    ordered_crossover,
    swap_mutation,
    reverse_mutation,
)
from .solver import GeneticSolver

__all__ = [
    'TourIndividual',
    'GeneticOperators',
    'ordered_crossover',
    'swap_mutation',
    'reverse_mutation',
    'GeneticSolver',
]
