"""
Points Module
=============

Point handles placed by the UI layer.

The engine never copies a point: tours hold references, and the owner
may move a point by updating its coordinates in place.
"""

import numpy as np
from typing import List, Optional, Tuple
from dataclasses import dataclass


@dataclass(eq=False)
class Point:
    """
    A point on the canvas.

    Equality and hashing are by identity, so two points at the same
    position are still distinct cities.
    """
    x: float
    y: float
    label: Optional[str] = None

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        name = f"{self.label}@" if self.label else ""
        return f"Point({name}{self.x:.1f}, {self.y:.1f})"


def random_points(n: int,
                  width: float = 1000.0,
                  height: float = 1000.0,
                  rng: Optional[np.random.Generator] = None) -> List[Point]:
    """
    Scatter points uniformly over a canvas.

    Args:
        n: Number of points
        width: Canvas width
        height: Canvas height
        rng: Random generator (a fresh unseeded one if None)

    Returns:
        List of new points labelled by index
    """
    rng = rng if rng is not None else np.random.default_rng()
    coords = rng.random((n, 2)) * np.array([width, height])
    return [Point(float(x), float(y), label=str(i)) for i, (x, y) in enumerate(coords)]


def positions_array(points) -> np.ndarray:
    """Snapshot point positions into an (n, 2) float array"""
    if not points:
        return np.zeros((0, 2), dtype=float)
    return np.array([p.position for p in points], dtype=float)
