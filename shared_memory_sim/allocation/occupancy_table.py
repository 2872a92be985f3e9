"""
Occupancy Table
===============

Scratch table recording which processor holds each memory module during
the current cycle. Entry 0 means the module is free; any other value is
the identity of the processor that claimed it.
"""

import numpy as np


FREE_MODULE: int = 0


class OccupancyTable:
    """
    Per-cycle module ownership for one module-count configuration.

    Attributes:
        module_count (int): Number of memory modules.
        owners (np.ndarray): Owner identity per module (0 = free).
    """

    def __init__(self, module_count: int) -> None:
        if module_count < 1:
            raise ValueError(
                f"Module count must be at least 1. Received: {module_count}"
            )

        self.module_count: int = module_count
        self.owners: np.ndarray = np.zeros(module_count, dtype=np.int64)

    def __len__(self) -> int:
        return self.module_count

    def is_free(self, module_index: int) -> bool:
        """Return True if nobody has claimed the module this cycle."""
        return self.owners[module_index] == FREE_MODULE

    def claim(self, module_index: int, processor_id: int) -> None:
        """Mark the module as held by the given processor."""
        self.owners[module_index] = processor_id

    def owner_of(self, module_index: int) -> int:
        """Return the identity holding the module, or 0 if free."""
        return int(self.owners[module_index])

    def busy_module_count(self) -> int:
        """Number of modules claimed in the current cycle."""
        return int(np.count_nonzero(self.owners))

    def clear(self) -> None:
        """Free every module before the next cycle."""
        self.owners.fill(FREE_MODULE)
