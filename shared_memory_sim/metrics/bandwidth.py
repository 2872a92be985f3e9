"""
Memory Bandwidth Metrics
========================

Effective bandwidth is the number of granted accesses per CPU cycle across
all processors. It complements the average access time: with p processors
and an average access time T, roughly p / T accesses complete per cycle.

THEORETICAL MODEL:
==================
If p processors each request one of m modules uniformly at random, and
conflicts are resolved independently every cycle, the expected number of
distinct busy modules is

    B(p, m) = m * (1 - (1 - 1/m)^p)

This classic model ignores that denied processors keep requesting the same
module, so the simulated bandwidth is usually a little lower for small m.
It is useful as a sanity reference for the uniform distribution.
"""

import numpy as np
from typing import Union


ArrayOrFloat = Union[float, np.ndarray]


def compute_effective_bandwidth(total_accesses: ArrayOrFloat, cycles: ArrayOrFloat) -> ArrayOrFloat:
    """
    Granted accesses per cycle.

    Args:
        total_accesses: Accesses granted to all processors.
        cycles: Cycles executed.

    Returns:
        Accesses per cycle (0 where no cycle was executed).
    """
    accesses = np.asarray(total_accesses, dtype=np.float64)
    cycle_counts = np.asarray(cycles, dtype=np.float64)

    bandwidth = np.divide(
        accesses,
        cycle_counts,
        out=np.zeros_like(accesses),
        where=cycle_counts > 0
    )

    if bandwidth.ndim == 0:
        return float(bandwidth)
    return bandwidth


def compute_theoretical_bandwidth(
    number_of_processors: int,
    module_count: ArrayOrFloat
) -> ArrayOrFloat:
    """
    Expected busy modules per cycle for uniform independent requests.

    Args:
        number_of_processors: Number of processors p.
        module_count: Number of modules m (scalar or array).

    Returns:
        B(p, m) = m * (1 - (1 - 1/m)^p)
    """
    modules = np.asarray(module_count, dtype=np.float64)
    bandwidth = modules * (1.0 - (1.0 - 1.0 / modules) ** number_of_processors)

    if bandwidth.ndim == 0:
        return float(bandwidth)
    return bandwidth


def compute_theoretical_access_time(
    number_of_processors: int,
    module_count: ArrayOrFloat
) -> ArrayOrFloat:
    """
    Average access time implied by the theoretical bandwidth: p / B(p, m).
    """
    return number_of_processors / compute_theoretical_bandwidth(
        number_of_processors, module_count
    )
