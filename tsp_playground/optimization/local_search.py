"""
Local Search Module
===================

Hill climbing and simulated annealing over pairwise swaps.

Both strategies share one loop: swap two random cities, score the
candidate, then accept with `acceptance_probability`. Hill climbing only
takes strict improvements; annealing also takes worse tours with a
probability that shrinks as the temperature decays over wall-clock time.
"""

import logging
import math
import time
import numpy as np
from typing import Optional, Tuple

from .context import SearchContext, SearchResult
from .modes import Mode

logger = logging.getLogger(__name__)


def acceptance_probability(best_length: float,
                           candidate_length: float,
                           temperature: float,
                           mode: Mode) -> float:
    """
    Probability of replacing the current tour with a candidate.

    Args:
        best_length: Length of the current tour
        candidate_length: Length of the candidate tour
        temperature: Annealing temperature (ignored by hill climbing)
        mode: Active search mode

    Returns:
        1 for a strict improvement, 0 for an equal candidate or any
        non-improving hill climbing move, otherwise the Metropolis
        criterion exp((best - candidate) / temperature)
    """
    if candidate_length < best_length:
        return 1.0
    if candidate_length == best_length or mode is Mode.HILL_CLIMBING:
        return 0.0
    if not temperature > 0:
        return 0.0

    exponent = (best_length - candidate_length) / temperature
    # Dividing by a vanishing temperature overflows to -inf
    if exponent == -math.inf or math.isnan(exponent):
        return 0.0
    return math.exp(exponent)


def decay_temperature(temperature: float,
                      decay_rate: float,
                      elapsed: float,
                      min_temperature: float) -> float:
    """
    Exponential cooling proportional to elapsed wall-clock time.

    T -= rate * elapsed * T, floored at min_temperature so it stays positive.
    """
    cooled = temperature - decay_rate * elapsed * temperature
    return max(cooled, min_temperature)


def pick_swap_pair(rng: np.random.Generator, n: int) -> Tuple[int, int]:
    """Two distinct positions in [0, n), uniformly at random"""
    i = int(rng.integers(n))
    j = int(rng.integers(n - 1))
    if j >= i:
        j += 1
    return i, j


class LocalSearchSolver:
    """
    Swap-based local search (hill climbing or simulated annealing).

    One `run()` call performs a whole search and returns once the
    context's stop event is set.
    """

    def __init__(self, mode: Mode = Mode.HILL_CLIMBING):
        if mode is Mode.GENETIC:
            raise ValueError("LocalSearchSolver handles hill climbing and annealing only")
        self.mode = mode

    @property
    def annealing(self) -> bool:
        return self.mode is Mode.SIMULATED_ANNEALING

    def run(self, context: SearchContext) -> Optional[SearchResult]:
        """
        Search until stopped.

        Args:
            context: Run context (points snapshot, shared output, stop flag)

        Returns:
            SearchResult, or None when there are fewer than two points
        """
        n = context.size
        if n < 2:
            return None

        distances = context.distances
        rng = context.rng
        reporter = context.reporter
        annealing = self.annealing
        min_temperature = context.config.annealing.min_temperature

        # Candidate starts as a copy of the published tour
        order = np.arange(n)
        best_length = distances.length(order)
        temperature = context.initial_temperature

        logger.debug("%s started on %d points (length %.2f)",
                     self.mode.value, n, best_length)

        reporter.start()
        started = last = time.monotonic()
        accepted = 0

        while not context.should_stop():
            i, j = pick_swap_pair(rng, n)
            order[i], order[j] = order[j], order[i]
            candidate_length = distances.length(order)

            p = acceptance_probability(best_length, candidate_length,
                                       temperature, self.mode)

            if rng.random() < p:
                best_length = candidate_length
                context.publish(order, best_length)
                accepted += 1
            else:
                order[i], order[j] = order[j], order[i]

            if annealing:
                now = time.monotonic()
                temperature = decay_temperature(
                    temperature, context.decay_rate(), now - last, min_temperature
                )
                last = now
                reporter.record(1, acceptance=p)
            else:
                reporter.record(1)

            context.publish_stats(reporter.tick(
                best_length, temperature if annealing else None
            ))

        result = SearchResult(
            mode=self.mode.value,
            best_length=best_length,
            work_units=reporter.total_units,
            accepted=accepted,
            elapsed=time.monotonic() - started,
        )
        logger.debug("%s stopped after %d iterations, %d accepted (length %.2f)",
                     result.mode, result.work_units, result.accepted, result.best_length)
        return result
