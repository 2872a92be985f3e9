"""
Access Time Plotter
===================

This module provides plotting functions for visualizing and analyzing
shared-memory contention simulation results.

Plots included:
1. Average access time vs number of memory modules
2. Cycles needed to converge per module count
3. Module-selection histogram (exact odd-biased wrapped normal overlay)
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Optional, Dict, Tuple

from ..metrics.bandwidth import compute_theoretical_access_time
from ..randomness.distribution import DistributionKind
from ..randomness.random_source import wrapped_normal_pmf
from ..simulation.simulation_runner import SimulationResults


class AccessTimePlotter:
    """
    Plotting utilities for shared-memory contention analysis.

    All methods are static to allow easy use without instantiation.
    Every method accepts `save_path` (write the figure to disk) and
    `show` (open an interactive window); figures that are not shown are
    closed before returning.
    """

    DEFAULT_SINGLE_PLOT_SIZE: Tuple[int, int] = (12, 6)

    @staticmethod
    def _finish(fig, save_path: Optional[str], show: bool) -> None:
        """Save, show, or close a finished figure."""
        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Figure saved to:  {save_path}")

        if show:
            plt.show()
        else:
            plt.close(fig)

    @staticmethod
    def plot_access_time_vs_modules(
        results_by_label: Dict[str, SimulationResults],
        show_theoretical: bool = False,
        save_path: Optional[str] = None,
        show: bool = True
    ) -> None:
        """
        Plot average access time against the number of memory modules.

        Args:
            results_by_label: Dict of {curve_label: SimulationResults}.
            show_theoretical: If True, overlay p / B(p, m) for every
                uniform-distribution curve.
            save_path: If provided, save figure to this path.
            show: If True, display the figure.
        """
        fig, ax = plt.subplots(figsize=AccessTimePlotter.DEFAULT_SINGLE_PLOT_SIZE)

        colors = ['blue', 'red', 'green', 'purple', 'orange', 'brown', 'teal']

        for idx, (label, results) in enumerate(results_by_label.items()):
            color = colors[idx % len(colors)]
            ax.plot(
                results.module_counts, results.average_access_time,
                color=color, linewidth=1.5, label=label
            )

            # Mark module counts that hit the cycle cap
            unconverged = ~results.converged
            if np.any(unconverged):
                ax.plot(
                    results.module_counts[unconverged],
                    results.average_access_time[unconverged],
                    'x', color=color, markersize=6
                )

            if show_theoretical and results.configuration.distribution is DistributionKind.UNIFORM:
                ax.plot(
                    results.module_counts,
                    compute_theoretical_access_time(
                        results.configuration.number_of_processors,
                        results.module_counts
                    ),
                    '--', color=color, linewidth=0.8, alpha=0.7,
                    label=f"{label} (theory)"
                )

        ax.set_xlabel('Number of Memory Modules', fontsize=11)
        ax.set_ylabel('Average Access Time (cycles)', fontsize=11)
        ax.set_title('Average Access Time vs Memory Modules', fontsize=12, fontweight='bold')
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right', fontsize=9)

        AccessTimePlotter._finish(fig, save_path, show)

    @staticmethod
    def plot_cycles_to_converge(
        results: SimulationResults,
        save_path: Optional[str] = None,
        show: bool = True
    ) -> None:
        """
        Plot how many CPU cycles each module count needed to converge.

        Args:
            results: SimulationResults of one run.
            save_path: If provided, save figure to this path.
            show: If True, display the figure.
        """
        fig, ax = plt.subplots(figsize=AccessTimePlotter.DEFAULT_SINGLE_PLOT_SIZE)

        ax.plot(results.module_counts, results.cycles_to_converge, 'b-', linewidth=0.8)
        ax.axhline(
            y=results.configuration.max_cpu_cycles,
            color='r', linestyle='--', linewidth=1.0,
            label=f"Cycle cap ({results.configuration.max_cpu_cycles})"
        )

        config = results.configuration
        ax.set_xlabel('Number of Memory Modules', fontsize=11)
        ax.set_ylabel('Cycles Simulated', fontsize=11)
        ax.set_title(
            f'Cycles to Converge ({config.number_of_processors} processors, '
            f'{config.distribution.value})',
            fontsize=12, fontweight='bold'
        )
        ax.set_yscale('log')
        ax.grid(True, alpha=0.3, which='both')
        ax.legend(loc='upper right', fontsize=9)

        AccessTimePlotter._finish(fig, save_path, show)

    @staticmethod
    def plot_module_selection_histogram(
        samples: np.ndarray,
        module_count: int,
        mean: Optional[float] = None,
        standard_deviation: Optional[float] = None,
        save_path: Optional[str] = None,
        show: bool = True
    ) -> None:
        """
        Histogram of drawn module indices.

        When mean and standard_deviation are given, the exact probability
        of every module index under the odd-biased wrapped normal is
        overlaid (see wrapped_normal_pmf). Even indices only receive mass
        through wrap-around or the zero band, so the overlay is spiky
        rather than a smooth bell.

        Args:
            samples: Drawn module indices.
            module_count: Number of modules (histogram range).
            mean: Mean of the normal distribution, if any.
            standard_deviation: Spread of the normal distribution, if any.
            save_path: If provided, save figure to this path.
            show: If True, display the figure.
        """
        fig, ax = plt.subplots(figsize=AccessTimePlotter.DEFAULT_SINGLE_PLOT_SIZE)

        bin_edges: np.ndarray = np.arange(module_count + 1) - 0.5
        ax.hist(
            samples, bins=bin_edges, density=True,
            color='steelblue', alpha=0.7, label='Drawn modules'
        )

        if mean is not None and standard_deviation is not None:
            pmf: np.ndarray = wrapped_normal_pmf(mean, standard_deviation, module_count)
            ax.plot(
                np.arange(module_count), pmf, 'r.', markersize=5,
                label='Odd-biased wrapped normal (exact)'
            )

        ax.set_xlabel('Module Index', fontsize=11)
        ax.set_ylabel('Probability', fontsize=11)
        ax.set_title(f'Module Selection ({module_count} modules)', fontsize=12, fontweight='bold')
        ax.set_xlim(-0.5, module_count - 0.5)
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right', fontsize=9)

        AccessTimePlotter._finish(fig, save_path, show)
