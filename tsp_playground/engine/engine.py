"""
Optimization Engine Module
==========================

Owns the point set and runs one search strategy on a background thread.

Lifecycle:
- Every mutator (add_point, remove_point, set_mode, clear) halts the
  running search first and never restarts it; the caller decides when to
  call calculate_path_async() again.
- At most one worker thread exists. calculate_path_async() stops the
  previous one before launching.
- stop() sets the cancellation flag and joins the worker, so after it
  returns the old run can no longer write to the shared tour.
"""

import logging
import math
import threading
import numpy as np
from typing import List, Optional

from .state import SharedTour
from ..config import Config
from ..geometry import Point
from ..metrics import StatsSnapshot
from ..optimization import (
    Mode,
    SearchContext,
    SearchResult,
    LocalSearchSolver,
    GeneticSolver,
)

logger = logging.getLogger(__name__)


class OptimizationEngine:
    """
    Background TSP search over a live, editable point set.

    Usage:
        engine = OptimizationEngine(Config(random_seed=7))
        for p in points:
            engine.add_point(p)
        engine.set_mode(Mode.SIMULATED_ANNEALING)
        engine.calculate_path_async()
        ...
        tour, length = engine.current_tour(), engine.current_length()
        engine.stop()
    """

    def __init__(self,
                 config: Optional[Config] = None,
                 rng: Optional[np.random.Generator] = None,
                 mode: Mode = Mode.HILL_CLIMBING):
        """
        Initialize engine.

        Args:
            config: Main configuration
            rng: Random generator owned by this engine (seeded from
                config.random_seed if None)
            mode: Initial search mode
        """
        self.config = config or Config()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.random_seed)

        self._mode = mode
        self._decay_rate = self.config.annealing.decay_rate
        self._initial_temperature = self.config.annealing.initial_temperature

        self._shared = SharedTour(history_size=self.config.stats.history_size)
        self._control_lock = threading.RLock()
        self._stop_event = threading.Event()
        self._stop_event.set()
        self._worker: Optional[threading.Thread] = None
        self._running = False

        self.last_result: Optional[SearchResult] = None

    # ---------- point set ----------

    def add_point(self, point: Point):
        """Halt any running search and append a point"""
        with self._control_lock:
            self.stop()
            if not self._shared.add(point):
                logger.debug("Ignoring duplicate point %r", point)

    def remove_point(self, point: Point):
        """Halt any running search and remove a point (order not preserved)"""
        with self._control_lock:
            self.stop()
            self._shared.remove(point)

    def clear(self):
        """Halt any running search and drop every point"""
        with self._control_lock:
            self.stop()
            self._shared.clear()

    def __len__(self) -> int:
        return len(self._shared)

    def __contains__(self, point: Point) -> bool:
        return point in self._shared

    # ---------- tuning ----------

    @property
    def mode(self) -> Mode:
        return self._mode

    def set_mode(self, mode: Mode):
        """
        Halt any running search and record the mode for the next run.

        The search is left stopped; restart with calculate_path_async().
        """
        with self._control_lock:
            self.stop()
            self._mode = mode

    @property
    def temperature_decay_rate(self) -> float:
        """Annealing cooling rate, fraction of temperature per second"""
        return self._decay_rate

    @temperature_decay_rate.setter
    def temperature_decay_rate(self, rate: float):
        # Read by the running loop every iteration
        if not (rate >= 0 and math.isfinite(rate)):
            logger.warning("Invalid temperature decay rate %r, using 0", rate)
            rate = 0.0
        self._decay_rate = float(rate)

    @property
    def initial_temperature(self) -> float:
        """Starting annealing temperature, applied at the next run"""
        return self._initial_temperature

    @initial_temperature.setter
    def initial_temperature(self, temperature: float):
        if not (temperature > 0 and math.isfinite(temperature)):
            logger.warning("Invalid initial temperature %r, keeping %s",
                           temperature, self._initial_temperature)
            return
        self._initial_temperature = float(temperature)

    # ---------- lifecycle ----------

    def calculate_path_async(self):
        """Stop any running search, then start one for the current mode"""
        with self._control_lock:
            self.stop()
            self._stop_event.clear()
            self._running = True
            self._worker = threading.Thread(
                target=self._run_worker,
                name=f"tsp-{self._mode.value}",
                daemon=True,
            )
            self._worker.start()

    def calculate_path(self):
        """
        Run the current mode's search loop until the stop flag is set.

        Invoked by the background worker. Does nothing with fewer than
        two points.
        """
        points = tuple(self._shared.tour())
        if len(points) < 2:
            return

        mode = self._mode
        context = SearchContext(
            points=points,
            shared=self._shared,
            stop_event=self._stop_event,
            rng=self.rng,
            config=self.config,
            decay_rate=lambda: self._decay_rate,
            initial_temperature=self._initial_temperature,
        )

        logger.info("Starting %s search on %d points", mode.value, len(points))
        solver = self._create_solver(mode)
        self.last_result = solver.run(context)
        if self.last_result is not None:
            logger.info("Stopped %s search: length %.2f after %d steps in %.2fs",
                        mode.value, self.last_result.best_length,
                        self.last_result.work_units, self.last_result.elapsed)

    def stop(self) -> bool:
        """
        Halt the running search and wait for the worker to exit.

        Returns:
            True if a search was running, False if already idle
        """
        # The worker cannot join itself; it exits at its next iteration
        if self._worker is threading.current_thread():
            was_running = self._running
            self._stop_event.set()
            return was_running

        # Signal under the lock so a concurrent restart cannot clear the
        # flag between the signal and the join
        with self._control_lock:
            was_running = self._running
            self._stop_event.set()
            worker = self._worker
            if worker is None:
                return False

            worker.join()
            self._worker = None
            self._shared.reset_throughput()
            return was_running

    def is_stopped(self) -> bool:
        """Non-blocking run-state query"""
        return not self._running

    def close(self):
        self.stop()

    def __enter__(self) -> 'OptimizationEngine':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __del__(self):
        # The worker references the engine, so this only runs once idle
        if hasattr(self, '_running'):
            self.stop()

    # ---------- queries ----------

    def current_tour(self) -> List[Point]:
        """Consistent copy of the published tour"""
        return self._shared.tour()

    def current_length(self) -> float:
        return self._shared.length()

    def stats_snapshot(self) -> StatsSnapshot:
        return self._shared.stats()

    def stats_history(self) -> List[StatsSnapshot]:
        """Recent snapshots, oldest first"""
        return self._shared.history()

    # ---------- internals ----------

    def _create_solver(self, mode: Mode):
        """One solver per run; the loop itself never dispatches on mode"""
        if mode is Mode.GENETIC:
            return GeneticSolver(self.config.ga)
        return LocalSearchSolver(mode)

    def _run_worker(self):
        try:
            self.calculate_path()
        except Exception:
            logger.exception("Search worker failed")
        finally:
            self._running = False
