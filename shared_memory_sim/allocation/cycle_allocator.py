"""
Cycle Allocator
===============

This is the per-cycle contention-resolution step.

One call walks the processor ring once, starting at the head:

    for each processor in ring order:
        if its requested module is free:
            claim the module, count the access,
            draw the next requested module
        else:
            denied; the processor keeps requesting the same module
            (only the FIRST denied processor is remembered)

The first denied processor is returned so the caller can rotate the ring
head to it, giving it priority in the next cycle. Ties are broken purely by
ring position.
"""

from typing import Optional

from ..processors.processor import Processor
from ..processors.processor_ring import ProcessorRing
from ..randomness.distribution import DistributionKind
from ..randomness.random_source import RandomSource
from .occupancy_table import OccupancyTable


class CycleAllocator:
    """
    Resolves module contention for one CPU cycle.

    Attributes:
        random_source (RandomSource): Generator for the next requested module.
        standard_deviation (float): Spread used by the wrapped normal.
    """

    def __init__(
        self,
        random_source: RandomSource,
        standard_deviation: float = 5.0
    ) -> None:
        self.random_source: RandomSource = random_source
        self.standard_deviation: float = standard_deviation

    def allocate(
        self,
        ring: ProcessorRing,
        occupancy: OccupancyTable,
        distribution: DistributionKind,
        module_count: int
    ) -> Optional[Processor]:
        """
        Run one allocation pass over the ring.

        Args:
            ring: The processor ring, traversed from its current head.
            occupancy: Module ownership for this cycle. Must be cleared by
                the caller between cycles.
            distribution: Distribution for the next requested module.
            module_count: Number of modules; every processor's request is
                assumed to lie in [0, module_count).

        Returns:
            Optional[Processor]: The first processor denied access, or None
                if every request was granted.
        """
        first_denied: Optional[Processor] = None

        for processor in ring:
            if occupancy.is_free(processor.memory_module):
                occupancy.claim(processor.memory_module, processor.processor_id)
                next_module: int = self.random_source.draw_module(
                    distribution,
                    processor.mean,
                    module_count,
                    self.standard_deviation
                )
                processor.record_access(next_module)
            elif first_denied is None:
                first_denied = processor

        return first_denied
