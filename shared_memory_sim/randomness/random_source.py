"""
Random Source
=============

This module provides the pseudo-random generator used to choose which
memory module a processor requests next.

All randomness in a simulation run flows through ONE RandomSource
instance. The instance is created once per run and passed explicitly to
every component that needs it, so that a seed fully determines the run.

RAW DRAWS:
==========
The generator mimics a C-style rand(): every raw draw is an integer in
[0, RAND_MAX] with RAND_MAX = 2^31 - 1. Raw integers come from a numpy
Generator and are fetched in blocks to keep the per-draw cost low.

UNIFORM:
========
    uniform(max) = raw % max

WRAPPED NORMAL (two-phase Box-Muller):
======================================
Phase 0 draws a fresh pair:
    U = (raw + 1) / (RAND_MAX + 2)        U in (0, 1), never 0
    V = raw / (RAND_MAX + 1)              V in [0, 1)
    Z = sqrt(-2 ln U) * sin(2 pi V)

Phase 1 reuses the cached pair:
    Z = sqrt(-2 ln U) * cos(2 pi V)

The normal value x = stddev * Z + mean is then truncated with an odd bias:
    int(x) even -> int(x + 1)
    int(x) odd  -> int(x)

and wrapped into [0, max). Before wrapping, 0 is the only even value the
truncation can produce.
"""

import math
from typing import Optional

import numpy as np
from scipy import stats

from .distribution import DistributionKind


# Largest raw value returned by the underlying integer generator
RAND_MAX: int = 2**31 - 1

# Number of raw integers fetched from numpy per refill
RAW_BLOCK_SIZE: int = 4096


def odd_biased_truncation(value: float) -> int:
    """
    Truncate a real value towards zero, nudging even results to odd.

    If the truncated value is even, value + 1 is truncated instead.
    For value in (-1, 0) both truncations give 0, so that band is the
    only place where an even result survives.

    Args:
        value: Real-valued sample.

    Returns:
        int: The odd-biased integer.
    """
    truncated: int = int(value)
    if truncated % 2 == 0:
        return int(value + 1)
    return truncated


def wrap_module_index(value: int, maximum: int) -> int:
    """Wrap an integer (possibly negative) into [0, maximum)."""
    # Python's % takes the sign of the divisor, so no negative fix-up is needed
    return value % maximum


def wrapped_normal_pmf(
    mean: float,
    standard_deviation: float,
    maximum: int,
    tail_sigmas: float = 10.0
) -> np.ndarray:
    """
    Exact probability of every module index under RandomSource.wrapped_normal.

    Each integer n produced by odd_biased_truncation collects the normal
    mass of one interval of the real line:

        n odd, n >= 1   ->  [n - 1, n + 1)
        n == 0          ->  (-1, 0)
        n odd, n <= -1  ->  (n - 2, n]
        n even, n != 0  ->  nothing

    The masses are then summed per module index after wrapping.

    Args:
        mean: Centre of the normal distribution.
        standard_deviation: Spread in modules, must be positive.
        maximum: Number of modules.
        tail_sigmas: Half-width of the integer range evaluated, in
            standard deviations.

    Returns:
        np.ndarray: Probabilities of length maximum.
    """
    low: int = int(np.floor(mean - tail_sigmas * standard_deviation)) - 2
    high: int = int(np.ceil(mean + tail_sigmas * standard_deviation)) + 2
    values: np.ndarray = np.arange(low, high + 1)

    lower: np.ndarray = np.where(values > 0, values - 1, np.where(values == 0, -1, values - 2))
    upper: np.ndarray = np.where(values > 0, values + 1, values)
    reachable: np.ndarray = (values % 2 == 1) | (values == 0)

    mass: np.ndarray = np.where(
        reachable,
        stats.norm.cdf(upper, loc=mean, scale=standard_deviation)
        - stats.norm.cdf(lower, loc=mean, scale=standard_deviation),
        0.0
    )

    pmf: np.ndarray = np.zeros(maximum)
    np.add.at(pmf, values % maximum, mass)
    return pmf


class RandomSource:
    """
    Seedable pseudo-random generator for module selection.

    Attributes:
        seed (Optional[int]): Seed passed to numpy.random.default_rng.
        phase (int): Box-Muller phase, 0 (draw new pair) or 1 (reuse pair).
        cached_u (float): First uniform of the cached Box-Muller pair.
        cached_v (float): Second uniform of the cached Box-Muller pair.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """
        Initialize the random source.

        Args:
            seed: Seed for reproducible runs. None draws fresh entropy.
        """
        self.seed: Optional[int] = seed
        self._generator: np.random.Generator = np.random.default_rng(seed)

        # Block of pre-drawn raw integers and the read position inside it
        self._raw_block: np.ndarray = np.empty(0, dtype=np.int64)
        self._raw_position: int = 0

        # Box-Muller state shared between the two phases
        self.phase: int = 0
        self.cached_u: float = 0.0
        self.cached_v: float = 0.0

    def next_raw(self) -> int:
        """Return the next raw integer in [0, RAND_MAX]."""
        if self._raw_position >= len(self._raw_block):
            self._raw_block = self._generator.integers(
                0, RAND_MAX, size=RAW_BLOCK_SIZE, endpoint=True
            )
            self._raw_position = 0

        raw: int = int(self._raw_block[self._raw_position])
        self._raw_position += 1
        return raw

    def uniform(self, maximum: int) -> int:
        """
        Draw an integer uniformly from [0, maximum).

        Args:
            maximum: Exclusive upper bound, must be positive.

        Returns:
            int: The drawn value.

        Raises:
            ValueError: If maximum <= 0.
        """
        if maximum <= 0:
            raise ValueError(
                f"Uniform upper bound must be positive. Received: {maximum}"
            )
        return self.next_raw() % maximum

    def standard_normal(self) -> float:
        """
        Draw one standard normal value using the two-phase Box-Muller
        transform (sin branch on phase 0, cos branch on phase 1).
        """
        if self.phase == 0:
            self.cached_u = (self.next_raw() + 1.0) / (RAND_MAX + 2.0)
            self.cached_v = self.next_raw() / (RAND_MAX + 1.0)
            z = math.sqrt(-2.0 * math.log(self.cached_u)) * math.sin(
                2.0 * math.pi * self.cached_v
            )
        else:
            z = math.sqrt(-2.0 * math.log(self.cached_u)) * math.cos(
                2.0 * math.pi * self.cached_v
            )

        self.phase = 1 - self.phase
        return z

    def wrapped_normal(
        self,
        mean: float,
        standard_deviation: float,
        maximum: int
    ) -> int:
        """
        Draw a module index from a normal distribution wrapped onto
        [0, maximum).

        Args:
            mean: Centre of the distribution (a module index).
            standard_deviation: Spread in modules.
            maximum: Number of modules, must be positive.

        Returns:
            int: Module index in [0, maximum).
        """
        if maximum <= 0:
            raise ValueError(
                f"Wrapped-normal range must be positive. Received: {maximum}"
            )

        value: float = standard_deviation * self.standard_normal() + mean
        return wrap_module_index(odd_biased_truncation(value), maximum)

    def draw_module(
        self,
        distribution: DistributionKind,
        mean: float,
        module_count: int,
        standard_deviation: float
    ) -> int:
        """Draw the next target module for the given distribution."""
        if distribution is DistributionKind.UNIFORM:
            return self.uniform(module_count)
        return self.wrapped_normal(mean, standard_deviation, module_count)
