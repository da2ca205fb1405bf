"""
Distance Model Module
=====================

Tour cost: the objective every search strategy minimizes.

`pairwise_distance` and `tour_length` read point positions live.
`DistanceMatrix` freezes the positions at construction time and scores
index permutations; strategies build one per run.
"""

import math
import numpy as np
from typing import Sequence
from scipy.spatial.distance import cdist

from .points import Point, positions_array


def pairwise_distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points"""
    return math.hypot(b.x - a.x, b.y - a.y)


def tour_length(tour: Sequence[Point]) -> float:
    """
    Length of a closed tour, including the edge from last back to first.

    Tours with fewer than two points have length 0.
    """
    n = len(tour)
    if n < 2:
        return 0.0
    total = 0.0
    for i in range(n):
        total += pairwise_distance(tour[i], tour[(i + 1) % n])
    return total


class DistanceMatrix:
    """
    Dense distance lookup over a fixed snapshot of positions.

    Tours are represented as integer index arrays into the snapshot.
    """

    def __init__(self, points: Sequence[Point]):
        coords = positions_array(points)
        self.size = len(coords)
        self.matrix = cdist(coords, coords) if self.size else np.zeros((0, 0))

    def __len__(self) -> int:
        return self.size

    def length(self, order: np.ndarray) -> float:
        """Closed-tour length of one index permutation"""
        if len(order) < 2:
            return 0.0
        return float(self.matrix[order, np.roll(order, -1)].sum())

    def lengths(self, population: np.ndarray) -> np.ndarray:
        """Closed-tour lengths for each row of a (P, n) permutation array"""
        if population.shape[1] < 2:
            return np.zeros(population.shape[0])
        return self.matrix[population, np.roll(population, -1, axis=1)].sum(axis=1)
