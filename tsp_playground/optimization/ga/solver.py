"""
GA Solver Module
================

Generational genetic algorithm over tour permutations.
"""

import logging
import time
import numpy as np
from typing import List, Optional

from .individual import TourIndividual, GeneticOperators
from ..context import SearchContext, SearchResult
from ...config import GAConfig
from ...geometry import DistanceMatrix

logger = logging.getLogger(__name__)


class GeneticSolver:
    """
    Genetic algorithm solver for the live tour.

    Features:
    - Random-permutation initial population
    - Tournament selection, ordered crossover, swap/reverse mutation
    - Full generational replacement; the fittest individual of every
      generation is published as the current tour
    """

    def __init__(self, ga_config: Optional[GAConfig] = None):
        """
        Initialize GA solver.

        Args:
            ga_config: GA-specific configuration (context config if None)
        """
        self.ga_config = ga_config

    def run(self, context: SearchContext) -> Optional[SearchResult]:
        """
        Evolve until stopped.

        Args:
            context: Run context (points snapshot, shared output, stop flag)

        Returns:
            SearchResult, or None when there are fewer than two points
        """
        n = context.size
        if n < 2:
            return None

        ga_config = self.ga_config or context.config.ga
        distances = context.distances
        reporter = context.reporter

        operators = GeneticOperators(
            mutation_rate=ga_config.mutation_rate,
            tournament_k=ga_config.tournament_k,
            swap_fraction=ga_config.swap_fraction,
            rng=context.rng,
        )

        population = self._initialize_population(operators, n, ga_config.pop_size)
        self._evaluate_population(population, distances)

        logger.debug("genetic started on %d points, population %d",
                     n, ga_config.pop_size)

        reporter.start()
        started = time.monotonic()
        best_length = min(ind.fitness for ind in population)

        # Evolution loop
        while not context.should_stop():
            offspring = []
            for _ in range(ga_config.pop_size):
                p1 = operators.tournament_select(population)
                p2 = operators.tournament_select(population)
                child = operators.crossover(p1, p2)
                operators.mutate(child)
                offspring.append(child)

            population = offspring
            self._evaluate_population(population, distances)

            best = min(population, key=lambda x: x.fitness)
            best_length = best.fitness
            context.publish(best.genes, best_length)

            reporter.record(1)
            context.publish_stats(reporter.tick(best_length))

        result = SearchResult(
            mode='genetic',
            best_length=best_length,
            work_units=reporter.total_units,
            elapsed=time.monotonic() - started,
        )
        logger.debug("genetic stopped after %d generations (length %.2f)",
                     result.work_units, result.best_length)
        return result

    def _initialize_population(self,
                               operators: GeneticOperators,
                               n: int,
                               pop_size: int) -> List[TourIndividual]:
        """Initialize GA population"""
        return [operators.create_random_individual(n) for _ in range(pop_size)]

    def _evaluate_population(self,
                             population: List[TourIndividual],
                             distances: DistanceMatrix):
        """Evaluate all individuals in population"""
        genomes = np.stack([ind.genes for ind in population])
        for ind, fitness in zip(population, distances.lengths(genomes)):
            ind.fitness = float(fitness)
