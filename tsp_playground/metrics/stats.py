"""
Search Statistics Module
========================

Throughput and convergence sampling for the live display.

A strategy loop calls `record()` once per work unit (iteration or
generation) and `tick()` once per loop pass; `tick()` emits a snapshot
when at least `interval` seconds have elapsed since the previous one.
"""

import time
from typing import Callable, Dict, Optional
from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class StatsSnapshot:
    """
    One published sample.

    throughput is work units per second: candidate paths for the local
    searches, generations for the genetic algorithm.
    """
    best_length: float = 0.0
    throughput: float = 0.0
    temperature: Optional[float] = None
    average_acceptance_probability: Optional[float] = None
    work_units: int = 0  # iterations or generations since the run started
    timestamp: float = 0.0

    def to_dict(self) -> Dict:
        return asdict(self)


class StatsReporter:
    """
    Samples loop counters at a fixed wall-clock cadence.

    Not thread safe: owned by the single background run that feeds it.
    """

    def __init__(self, interval: float = 0.1,
                 clock: Callable[[], float] = time.monotonic):
        """
        Args:
            interval: Minimum seconds between snapshots
            clock: Monotonic time source in seconds
        """
        self.interval = interval
        self.clock = clock

        self._last_sample = 0.0
        self._units = 0
        self._acceptance_sum = 0.0
        self._acceptance_count = 0
        self.total_units = 0

    def start(self):
        """Reset counters at the beginning of a run"""
        self._last_sample = self.clock()
        self._units = 0
        self._acceptance_sum = 0.0
        self._acceptance_count = 0
        self.total_units = 0

    def record(self, units: int = 1, acceptance: Optional[float] = None):
        """Count completed work and, optionally, one acceptance probability"""
        self._units += units
        self.total_units += units
        if acceptance is not None:
            self._acceptance_sum += acceptance
            self._acceptance_count += 1

    def tick(self, best_length: float,
             temperature: Optional[float] = None) -> Optional[StatsSnapshot]:
        """
        Emit a snapshot if the sampling interval has elapsed.

        Args:
            best_length: Current published tour length
            temperature: Current annealing temperature, if any

        Returns:
            StatsSnapshot, or None while the interval is still running
        """
        now = self.clock()
        elapsed = now - self._last_sample
        if elapsed < self.interval:
            return None

        mean_acceptance = None
        if self._acceptance_count:
            mean_acceptance = self._acceptance_sum / self._acceptance_count

        snapshot = StatsSnapshot(
            best_length=best_length,
            throughput=self._units / elapsed,
            temperature=temperature,
            average_acceptance_probability=mean_acceptance,
            work_units=self.total_units,
            timestamp=now,
        )

        self._last_sample = now
        self._units = 0
        self._acceptance_sum = 0.0
        self._acceptance_count = 0
        return snapshot
