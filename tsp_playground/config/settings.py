"""
Configuration Settings Module
==============================

Dataclass-based configuration with validation and defaults.
Follows Single Responsibility Principle - only handles configuration.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Any
import math


@dataclass
class AnnealingConfig:
    """Simulated annealing temperature schedule"""
    initial_temperature: float = 1000.0
    decay_rate: float = 0.1  # fraction of temperature lost per second
    min_temperature: float = 1e-9  # floor, keeps temperature strictly positive

    def __post_init__(self):
        if not (self.initial_temperature > 0 and math.isfinite(self.initial_temperature)):
            raise ValueError("initial_temperature must be a positive finite number")
        if not (self.decay_rate >= 0 and math.isfinite(self.decay_rate)):
            raise ValueError("decay_rate must be a non-negative finite number")
        if not 0 < self.min_temperature <= self.initial_temperature:
            raise ValueError("min_temperature must be in (0, initial_temperature]")


@dataclass
class GAConfig:
    """Genetic Algorithm configuration"""
    pop_size: int = 50
    tournament_k: int = 5
    mutation_rate: float = 0.15

    # Probability of picking swap over segment reversal when mutating
    swap_fraction: float = 0.5

    def __post_init__(self):
        if self.pop_size < 2:
            raise ValueError("pop_size must be at least 2")
        if self.tournament_k < 1:
            raise ValueError("tournament_k must be at least 1")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError("mutation_rate must be in [0, 1]")
        if not 0.0 <= self.swap_fraction <= 1.0:
            raise ValueError("swap_fraction must be in [0, 1]")


@dataclass
class StatsConfig:
    """Live statistics sampling"""
    interval: float = 0.1  # seconds between published samples (>= 10 Hz)
    history_size: int = 600  # samples kept for convergence analysis

    def __post_init__(self):
        if not self.interval > 0:
            raise ValueError("interval must be positive")
        if self.history_size < 1:
            raise ValueError("history_size must be at least 1")


@dataclass
class Config:
    """
    Master configuration class combining all sub-configurations.

    Usage:
        config = Config()
        config = Config(annealing=AnnealingConfig(decay_rate=0.5))
    """
    annealing: AnnealingConfig = field(default_factory=AnnealingConfig)
    ga: GAConfig = field(default_factory=GAConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)

    # Global settings
    random_seed: Optional[int] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Config':
        """Create Config from dictionary"""
        sections = {
            'annealing': AnnealingConfig,
            'ga': GAConfig,
            'stats': StatsConfig,
        }
        config = cls()
        for key, value in d.items():
            if key in sections and isinstance(value, dict):
                setattr(config, key, sections[key](**value))
            elif hasattr(config, key):
                setattr(config, key, value)
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Export config to dictionary"""
        from dataclasses import asdict
        return asdict(self)

