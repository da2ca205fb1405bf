"""
Search Modes
============
"""

from enum import Enum


class Mode(Enum):
    """Search strategy selected for the next run"""
    HILL_CLIMBING = 'hill_climbing'
    SIMULATED_ANNEALING = 'simulated_annealing'
    GENETIC = 'genetic'

    @classmethod
    def from_name(cls, name: str) -> 'Mode':
        """Parse a mode from its value or a short alias"""
        aliases = {
            'hill': cls.HILL_CLIMBING,
            'hc': cls.HILL_CLIMBING,
            'annealing': cls.SIMULATED_ANNEALING,
            'sa': cls.SIMULATED_ANNEALING,
            'ga': cls.GENETIC,
        }
        key = name.strip().lower().replace('-', '_')
        if key in aliases:
            return aliases[key]
        return cls(key)
