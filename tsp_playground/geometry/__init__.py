"""
Geometry Module
===============

Point handles and the tour distance model.
"""

from .points import Point, random_points, positions_array
from .distance import pairwise_distance, tour_length, DistanceMatrix

__all__ = [
    'Point',
    'random_points',
    'positions_array',
    'pairwise_distance',
    'tour_length',
    'DistanceMatrix',
]
