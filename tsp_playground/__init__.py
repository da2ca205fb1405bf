"""
TSP Playground - Optimization Engine
====================================

Live heuristic search for short closed tours over an editable point set.

The engine runs hill climbing, simulated annealing or a genetic algorithm
on a background thread while the UI adds and removes points, and
publishes the best tour and live statistics for display.

Key Features:
- Cancellable, restartable background search
- Lock-guarded snapshot of the published tour
- Three interchangeable strategies over shared distance primitives
- Seedable per-engine random generator

Version: 1.0.0
"""

__version__ = "1.0.0"

from .config import Config, AnnealingConfig, GAConfig, StatsConfig
from .geometry import Point, random_points, pairwise_distance, tour_length
from .optimization import Mode, acceptance_probability, ordered_crossover
from .metrics import StatsSnapshot, StatsReporter
from .engine import OptimizationEngine
from .logging_config import setup_logging

__all__ = [
    'Config', 'AnnealingConfig', 'GAConfig', 'StatsConfig',
    'Point', 'random_points', 'pairwise_distance', 'tour_length',
    'Mode', 'acceptance_probability', 'ordered_crossover',
    'StatsSnapshot', 'StatsReporter',
    'OptimizationEngine',
    'setup_logging',
]
