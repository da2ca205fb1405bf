"""
Visualization Module
====================

Convergence analysis figures.
"""

from .monitor import (
    VisualizationConfig,
    ConvergenceMonitor,
)

__all__ = [
    'VisualizationConfig',
    'ConvergenceMonitor',
]
