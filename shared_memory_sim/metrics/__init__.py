"""
Metrics Module
==============

This module contains functions for calculating performance metrics:
- Average access time and the convergence test
- Effective and theoretical memory bandwidth
"""

from .access_time import (
    compute_average_access_time,
    compute_relative_change,
    has_converged
)
from .bandwidth import (
    compute_effective_bandwidth,
    compute_theoretical_bandwidth,
    compute_theoretical_access_time
)

__all__ = [
    "compute_average_access_time",
    "compute_relative_change",
    "has_converged",
    "compute_effective_bandwidth",
    "compute_theoretical_bandwidth",
    "compute_theoretical_access_time"
]
