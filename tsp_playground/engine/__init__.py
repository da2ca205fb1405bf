"""
Engine Module
=============

Background search lifecycle and the published solution.
"""

from .state import SharedTour
from .engine import OptimizationEngine

__all__ = [
    'SharedTour',
    'OptimizationEngine',
]
