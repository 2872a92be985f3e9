"""
Simulation Module
=================

This module provides the convergence loop and the orchestration layer
that ties together all components of the simulation.
"""

from .convergence_loop import ConvergenceLoop, ConfigurationOutcome
from .simulation_runner import (
    SimulationRunner,
    SimulationConfiguration,
    SimulationResults,
    simulate,
    NUM_MEMORY_MODULES,
    MAX_CPU_CYCLES,
    STANDARD_DEVIATION,
    CONVERGENCE_THRESHOLD
)

__all__ = [
    "ConvergenceLoop",
    "ConfigurationOutcome",
    "SimulationRunner",
    "SimulationConfiguration",
    "SimulationResults",
    "simulate",
    "NUM_MEMORY_MODULES",
    "MAX_CPU_CYCLES",
    "STANDARD_DEVIATION",
    "CONVERGENCE_THRESHOLD"
]
