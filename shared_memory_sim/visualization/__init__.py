"""
Visualization Module
====================

This module provides plotting functions for analyzing access times,
convergence behaviour and module selection.
"""

from .access_time_plotter import AccessTimePlotter

__all__ = ["AccessTimePlotter"]
