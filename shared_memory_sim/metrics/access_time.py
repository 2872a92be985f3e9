"""
Average Access Time
===================

The access time of one processor after `cycle` CPU cycles is the number of
cycles it needed per granted access:

    t_i = cycle / n_i        if n_i > 0
    t_i = 0                  if n_i = 0    (no access granted yet)

The average access time of the system is

    T = (t_1 + t_2 + ... + t_p) / p

where p is the FULL processor population, including processors that have
not been granted any access yet. Early in a configuration this makes T
smaller than the mean over processors with n_i > 0. This divisor is
intentional: every processor counts towards T from the first cycle.

CONVERGENCE:
============
A configuration has converged when the relative change between two
consecutive cycles drops below a threshold (epsilon):

    |T_previous - T_current| / T_current < epsilon

If T_current is exactly 0 (nobody has been served yet) the ratio is
undefined and the configuration is treated as not converged.
"""

import numpy as np


def compute_average_access_time(
    access_counts: np.ndarray,
    cycle: int,
    number_of_processors: int
) -> float:
    """
    Compute the average access time after `cycle` cycles.

    Args:
        access_counts: Granted accesses per processor.
        cycle: Number of cycles executed so far (>= 1).
        number_of_processors: Population size used as the divisor.

    Returns:
        float: Average access time in cycles per access.
    """
    counts: np.ndarray = np.asarray(access_counts, dtype=np.float64)
    served: np.ndarray = counts > 0

    per_processor_time: np.ndarray = np.zeros_like(counts)
    per_processor_time[served] = cycle / counts[served]

    return float(np.sum(per_processor_time) / number_of_processors)


def compute_relative_change(previous: float, current: float) -> float:
    """
    Relative change |previous - current| / current.

    Returns infinity when current is 0 so that the result never passes a
    convergence threshold.
    """
    if current == 0.0:
        return float("inf")
    return abs((previous - current) / current)


def has_converged(previous: float, current: float, threshold: float) -> bool:
    """Return True if the relative change is below the threshold."""
    return compute_relative_change(previous, current) < threshold
