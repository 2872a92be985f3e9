"""
Randomness Module
=================

This module contains the module-selection random source and the
distribution selector.
"""

from .distribution import DistributionKind
from .random_source import (
    RandomSource,
    odd_biased_truncation,
    wrap_module_index,
    wrapped_normal_pmf,
    RAND_MAX
)

__all__ = [
    "DistributionKind",
    "RandomSource",
    "odd_biased_truncation",
    "wrap_module_index",
    "wrapped_normal_pmf",
    "RAND_MAX"
]
