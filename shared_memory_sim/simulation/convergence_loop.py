"""
Convergence Loop
================

This is the CORE of the simulation: it drives CPU cycles for ONE
module-count configuration until the average access time stabilizes.

STATE MACHINE (per module count m):
===================================

    INIT
      - every processor: mean = uniform(m), then its first requested
        module is drawn from the active distribution
      - occupancy table of size m, all modules free
      - T_previous = 0

    CYCLE (cycle = 1 .. max_cpu_cycles)
      1. allocate modules; if a processor was denied, rotate the ring
         head to it (it is served first next cycle, so nobody starves)
      2. T_current = average access time after `cycle` cycles
      3. |T_previous - T_current| / T_current < epsilon  ->  CONVERGED
      4. T_previous = T_current, free all modules, next cycle

    CAP REACHED
      - a warning is printed and the last T_current is recorded with
        converged = False

    TEARDOWN
      - access counters are snapshotted into the outcome and reset to 0
"""

import numpy as np
from dataclasses import dataclass, field

from ..allocation.cycle_allocator import CycleAllocator
from ..allocation.occupancy_table import OccupancyTable
from ..metrics.access_time import compute_average_access_time, has_converged
from ..processors.processor_ring import ProcessorRing
from ..randomness.distribution import DistributionKind
from ..randomness.random_source import RandomSource


@dataclass
class ConfigurationOutcome:
    """
    Result of one module-count configuration.

    Attributes:
        module_count: Number of memory modules simulated.
        average_access_time: Recorded average access time (cycles/access).
        cycles: CPU cycles executed.
        converged: False if the cycle cap was reached first.
        access_counts: Granted accesses per processor (identity order),
            captured before the counters were reset.
    """
    module_count: int
    average_access_time: float
    cycles: int
    converged: bool
    access_counts: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64))

    @property
    def total_accesses(self) -> int:
        """Accesses granted to all processors."""
        return int(np.sum(self.access_counts))


class ConvergenceLoop:
    """
    Runs module-count configurations on a shared processor ring.

    The ring and the random source persist across configurations; only
    the per-configuration state (means, requests, counters, occupancy)
    is reset.

    Attributes:
        ring (ProcessorRing): Processors, shared across configurations.
        random_source (RandomSource): Run-wide generator.
        distribution (DistributionKind): Module-selection distribution.
        max_cpu_cycles (int): Cycle cap per configuration.
        convergence_threshold (float): Relative-change threshold (epsilon).
        standard_deviation (float): Spread of the wrapped normal.
    """

    def __init__(
        self,
        ring: ProcessorRing,
        random_source: RandomSource,
        distribution: DistributionKind,
        max_cpu_cycles: int = 1_000_000,
        convergence_threshold: float = 0.02,
        standard_deviation: float = 5.0
    ) -> None:
        self.ring: ProcessorRing = ring
        self.random_source: RandomSource = random_source
        self.distribution: DistributionKind = distribution
        self.max_cpu_cycles: int = max_cpu_cycles
        self.convergence_threshold: float = convergence_threshold
        self.standard_deviation: float = standard_deviation

        self.allocator: CycleAllocator = CycleAllocator(
            random_source=random_source,
            standard_deviation=standard_deviation
        )

    def _initialize(self, module_count: int) -> None:
        """Assign a fresh mean and first request to every processor."""
        for processor in self.ring.processors:
            processor.mean = self.random_source.uniform(module_count)
            processor.memory_module = self.random_source.draw_module(
                self.distribution,
                processor.mean,
                module_count,
                self.standard_deviation
            )

    def run(self, module_count: int) -> ConfigurationOutcome:
        """
        Simulate cycles for one module count until convergence.

        Args:
            module_count: Number of memory modules (>= 1).

        Returns:
            ConfigurationOutcome: The recorded access time and run statistics.
        """
        # ===== INIT =====
        self._initialize(module_count)
        occupancy: OccupancyTable = OccupancyTable(module_count)
        number_of_processors: int = len(self.ring)

        previous_access_time: float = 0.0
        current_access_time: float = 0.0
        converged: bool = False
        cycle: int = 0

        # ===== CYCLES =====
        for cycle in range(1, self.max_cpu_cycles + 1):
            denied_processor = self.allocator.allocate(
                self.ring, occupancy, self.distribution, module_count
            )
            if denied_processor is not None:
                self.ring.rotate_head_to(denied_processor)

            current_access_time = compute_average_access_time(
                self.ring.access_counts(), cycle, number_of_processors
            )

            if has_converged(
                previous_access_time,
                current_access_time,
                self.convergence_threshold
            ):
                converged = True
                break

            previous_access_time = current_access_time
            occupancy.clear()

        if not converged:
            print(
                f"WARNING: Simulation ended due to reaching maximum CPU cycles "
                f"({self.max_cpu_cycles}) for {module_count} memory modules. "
                f"Recording last average access time {current_access_time:.4f}."
            )

        # ===== TEARDOWN =====
        outcome = ConfigurationOutcome(
            module_count=module_count,
            average_access_time=current_access_time,
            cycles=cycle,
            converged=converged,
            access_counts=self.ring.access_counts()
        )
        self.ring.reset_access_counts()

        return outcome
