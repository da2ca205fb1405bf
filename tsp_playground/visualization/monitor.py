"""
Visualization Module
====================

Convergence plots built from the engine's statistics history.
Helps compare how fast each strategy shortens the tour.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from ..metrics import StatsSnapshot


@dataclass
class VisualizationConfig:
    """Configuration for visualization"""
    figure_size: Tuple[int, int] = (10, 8)
    dpi: int = 100
    mode_colors: Dict[str, str] = None

    def __post_init__(self):
        if self.mode_colors is None:
            self.mode_colors = {
                'hill_climbing': 'blue',
                'simulated_annealing': 'red',
                'genetic': 'green',
            }


def _series(history: Sequence[StatsSnapshot], attr: str) -> Tuple[np.ndarray, np.ndarray]:
    """Elapsed seconds and one attribute, skipping samples where it is None"""
    if not history:
        return np.zeros(0), np.zeros(0)
    t0 = history[0].timestamp
    pairs = [(s.timestamp - t0, getattr(s, attr)) for s in history
             if getattr(s, attr) is not None]
    if not pairs:
        return np.zeros(0), np.zeros(0)
    t, v = zip(*pairs)
    return np.array(t), np.array(v, dtype=float)


class ConvergenceMonitor:
    """
    Static convergence figures.

    Panels:
    - Best tour length over time
    - Throughput (paths or generations per second)
    - Temperature and mean acceptance probability (annealing only)
    """

    def __init__(self, config: Optional[VisualizationConfig] = None):
        self.config = config or VisualizationConfig()

    def plot_convergence(self,
                         histories: Dict[str, List[StatsSnapshot]],
                         title: str = 'Convergence') -> plt.Figure:
        """
        Create a three-panel convergence figure.

        Args:
            histories: Dict of mode name -> stats history
            title: Figure title

        Returns:
            Matplotlib figure
        """
        fig, (ax_len, ax_rate, ax_temp) = plt.subplots(
            3, 1, figsize=self.config.figure_size, sharex=True
        )

        for name, history in histories.items():
            color = self.config.mode_colors.get(name, 'black')

            t, length = _series(history, 'best_length')
            ax_len.plot(t, length, color=color, label=name)

            t, rate = _series(history, 'throughput')
            ax_rate.plot(t, rate, color=color, label=name)

            t, temp = _series(history, 'temperature')
            if len(t):
                ax_temp.semilogy(t, temp, color=color, label=f'{name} temperature')

            t, accept = _series(history, 'average_acceptance_probability')
            if len(t):
                ax_acc = ax_temp.twinx()
                ax_acc.plot(t, accept, color=color, linestyle='--', alpha=0.6,
                            label=f'{name} acceptance')
                ax_acc.set_ylabel('Acceptance p')
                ax_acc.set_ylim(0, 1)

        ax_len.set_ylabel('Tour length')
        ax_len.legend(loc='upper right')
        ax_len.set_title(title)

        ax_rate.set_ylabel('Per second')

        ax_temp.set_ylabel('Temperature')
        ax_temp.set_xlabel('Time (s)')

        fig.tight_layout()
        return fig

    def save_figure(self, fig: plt.Figure, filename: str, dpi: int = None):
        """Save figure to file"""
        fig.savefig(filename, dpi=dpi or self.config.dpi,
                    bbox_inches='tight', facecolor='white')
        plt.close(fig)
