"""
Search Context Module
=====================

Everything one background run needs, bundled for the solvers.
"""

import threading
import numpy as np
from typing import Callable, List, Optional, Tuple
from dataclasses import dataclass, field

from ..config import Config
from ..geometry import Point, DistanceMatrix
from ..metrics import StatsReporter, StatsSnapshot


@dataclass
class SearchResult:
    """Summary of one finished run"""
    mode: str
    best_length: float
    work_units: int = 0  # iterations or generations
    accepted: Optional[int] = None  # local search only
    elapsed: float = 0.0


@dataclass
class SearchContext:
    """
    Run-scoped inputs and outputs of a solver.

    points is the point set snapshotted when the run started; solvers work
    on index permutations into it and publish through `shared`, which must
    provide `publish(tour, length)` and `publish_stats(snapshot)`.
    """
    points: Tuple[Point, ...]
    shared: object
    stop_event: threading.Event
    rng: np.random.Generator
    config: Config = field(default_factory=Config)
    decay_rate: Optional[Callable[[], float]] = None
    initial_temperature: Optional[float] = None
    distances: Optional[DistanceMatrix] = None
    reporter: Optional[StatsReporter] = None

    def __post_init__(self):
        if self.distances is None:
            self.distances = DistanceMatrix(self.points)
        if self.reporter is None:
            self.reporter = StatsReporter(interval=self.config.stats.interval)
        if self.decay_rate is None:
            rate = self.config.annealing.decay_rate
            self.decay_rate = lambda: rate
        if self.initial_temperature is None:
            self.initial_temperature = self.config.annealing.initial_temperature

    @property
    def size(self) -> int:
        return len(self.points)

    def should_stop(self) -> bool:
        return self.stop_event.is_set()

    def tour_from(self, order: np.ndarray) -> List[Point]:
        """Map an index permutation back to point handles"""
        points = self.points
        return [points[i] for i in order]

    def publish(self, order: np.ndarray, length: float):
        tour = self.tour_from(order)
        self.shared.publish(tour, length)

    def publish_stats(self, snapshot: Optional[StatsSnapshot]):
        if snapshot is not None:
            self.shared.publish_stats(snapshot)
