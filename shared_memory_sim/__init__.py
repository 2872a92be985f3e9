"""
Shared-Memory Contention Simulation Package
===========================================

This package estimates the average memory-access time seen by a fixed
population of processors that share a pool of interleaved memory modules.

Every CPU cycle each processor requests one module. When two processors
request the same module in the same cycle only the first one (in ring
order) is served; the others are denied and retry the same module on the
next cycle. Cycles are repeated until the average access time converges,
once for every module count from 1 to NUM_MEMORY_MODULES.

Package Structure:
- randomness/: Module-selection random source (uniform, wrapped normal)
- processors/: Processor records and the round-robin processor ring
- allocation/: Occupancy table and per-cycle contention resolution
- simulation/: Convergence loop and simulation orchestration
- metrics/: Access-time and bandwidth metrics
- visualization/: Plotting and analysis tools
"""

__version__ = "1.0.0"
