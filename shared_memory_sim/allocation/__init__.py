"""
Allocation Module
=================

This module contains the per-cycle occupancy table and the contention
resolution step.
"""

from .occupancy_table import OccupancyTable, FREE_MODULE
from .cycle_allocator import CycleAllocator

__all__ = ["OccupancyTable", "FREE_MODULE", "CycleAllocator"]
