"""
Optimization Module
===================

Search strategies: swap-based local search and the genetic algorithm.
"""

from .modes import Mode
from .context import SearchContext, SearchResult
from .local_search import (
    LocalSearchSolver,
    acceptance_probability,
    decay_temperature,
    pick_swap_pair,
)
from .ga import TourIndividual, GeneticOperators, GeneticSolver, ordered_crossover

__all__ = [
    'Mode',
    'SearchContext',
    'SearchResult',
    'LocalSearchSolver',
    'acceptance_probability',
    'decay_temperature',
    'pick_swap_pair',
    'TourIndividual',
    'GeneticOperators',
    'GeneticSolver',
    'ordered_crossover',
]
