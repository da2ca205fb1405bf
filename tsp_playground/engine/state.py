"""
Shared Tour State Module
========================

The published solution: current tour, its length and the latest
statistics, all guarded by a single lock.

Writers (the background run, or the control thread while the search is
halted) build new lists outside the lock and only swap references inside
it, so readers are never blocked for longer than a copy.
"""

import threading
from collections import deque
from dataclasses import replace
from typing import List, Optional

from ..geometry import Point, tour_length
from ..metrics import StatsSnapshot


class SharedTour:
    """Lock-guarded current tour, length and stats"""

    def __init__(self, history_size: int = 600):
        self._lock = threading.Lock()
        self._tour: List[Point] = []
        self._length = 0.0
        self._stats = StatsSnapshot()
        self._history = deque(maxlen=history_size)

    # ---------- readers ----------

    def tour(self) -> List[Point]:
        """Consistent copy of the current tour"""
        with self._lock:
            return list(self._tour)

    def length(self) -> float:
        with self._lock:
            return self._length

    def __len__(self) -> int:
        with self._lock:
            return len(self._tour)

    def __contains__(self, point: Point) -> bool:
        with self._lock:
            return any(p is point for p in self._tour)

    def stats(self) -> StatsSnapshot:
        """Latest stats, with best_length reflecting the current tour"""
        with self._lock:
            return replace(self._stats, best_length=self._length)

    def history(self) -> List[StatsSnapshot]:
        with self._lock:
            return list(self._history)

    # ---------- background run writers ----------

    def publish(self, tour: List[Point], length: float):
        """
        Install a new best tour.

        `tour` must be a fresh list the caller will not mutate afterwards.
        """
        with self._lock:
            self._tour = tour
            self._length = length

    def publish_stats(self, snapshot: StatsSnapshot):
        with self._lock:
            self._stats = snapshot
            self._history.append(snapshot)

    def reset_throughput(self):
        with self._lock:
            self._stats = replace(self._stats, throughput=0.0)

    # ---------- point set edits (search must be halted) ----------

    def add(self, point: Point) -> bool:
        """Append a point; returns False if it is already in the tour"""
        with self._lock:
            if any(p is point for p in self._tour):
                return False
            tour = self._tour + [point]
            self._tour = tour
            self._length = tour_length(tour)
            return True

    def remove(self, point: Point) -> bool:
        """
        Remove a point by swapping it with the last entry.

        Tour order is not preserved. Returns False if the point is absent.
        """
        with self._lock:
            index = self._index_of(point)
            if index is None:
                return False
            tour = list(self._tour)
            tour[index] = tour[-1]
            tour.pop()
            self._tour = tour
            self._length = tour_length(tour)
            return True

    def clear(self):
        with self._lock:
            self._tour = []
            self._length = 0.0
            self._history.clear()
            self._stats = StatsSnapshot()

    def _index_of(self, point: Point) -> Optional[int]:
        for i, p in enumerate(self._tour):
            if p is point:
                return i
        return None
