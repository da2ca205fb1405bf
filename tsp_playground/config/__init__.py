"""
Configuration Module
====================

Centralized configuration management for the optimization engine.
"""

from .settings import (
    Config,
    AnnealingConfig,
    GAConfig,
    StatsConfig,
)

__all__ = [
    'Config',
    'AnnealingConfig',
    'GAConfig',
    'StatsConfig',
]
