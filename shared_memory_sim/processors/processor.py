"""
Processor Record
================

A processor is one element of the round-robin ring. It remembers which
memory module it is currently waiting for and how many accesses it has
completed in the current module-count configuration.
"""

from dataclasses import dataclass


@dataclass
class Processor:
    """
    One processor competing for memory modules.

    Attributes:
        processor_id: Identity in 1..N, stable for the whole run.
            Also used as the occupancy marker, so it is never 0.
        memory_module: Index of the module currently requested.
        access_count: Successful accesses in the current configuration.
        mean: Centre of the wrapped-normal distribution for this
            processor (unused by the uniform distribution).
    """
    processor_id: int
    memory_module: int = 0
    access_count: int = 0
    mean: int = 0

    def record_access(self, next_module: int) -> None:
        """Count a granted access and move on to the next requested module."""
        self.access_count += 1
        self.memory_module = next_module

    def reset(self) -> None:
        """Clear the access counter before the next configuration."""
        self.access_count = 0
