"""
Metrics Module
==============

Live search statistics.
"""

from .stats import StatsSnapshot, StatsReporter

__all__ = [
    'StatsSnapshot',
    'StatsReporter',
]
