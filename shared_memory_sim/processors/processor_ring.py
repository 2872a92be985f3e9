"""
Processor Ring
==============

The processors are served in strict round-robin order. The ring is stored
as a list of processors plus the index of the current head; rotating
priority to another processor is an index assignment, and the traversal
order never changes.

    head
     |
     v
    [P1] -> [P2] -> [P3] -> [P4] -> (back to P1)

After a cycle in which P3 was the first processor denied access, the head
moves to P3 and the next cycle serves P3, P4, P1, P2.
"""

from typing import Dict, Iterator, List

import numpy as np

from ..errors import InvalidConfigurationError
from .processor import Processor


class ProcessorRing:
    """
    Fixed-size circular collection of processors with a movable head.

    Attributes:
        processors (List[Processor]): Members in ring order (identity order).
        head_index (int): Position of the current head in `processors`.
    """

    def __init__(self, number_of_processors: int) -> None:
        """
        Build a ring of processors with identities 1..number_of_processors.

        Args:
            number_of_processors: Ring size, at least 1.

        Raises:
            InvalidConfigurationError: If number_of_processors < 1.
        """
        if number_of_processors < 1:
            raise InvalidConfigurationError(
                f"A processor ring needs at least 1 processor. "
                f"Received: {number_of_processors}"
            )

        self.processors: List[Processor] = [
            Processor(processor_id=identity)
            for identity in range(1, number_of_processors + 1)
        ]
        # Position of each processor, for O(1) rotation
        self._positions: Dict[int, int] = {
            id(processor): index for index, processor in enumerate(self.processors)
        }
        self.head_index: int = 0

    @classmethod
    def build(cls, number_of_processors: int) -> "ProcessorRing":
        """Alternate constructor: build a ring of number_of_processors processors."""
        return cls(number_of_processors)

    def __len__(self) -> int:
        return len(self.processors)

    @property
    def head(self) -> Processor:
        """The processor served first in the next traversal."""
        return self.processors[self.head_index]

    def rotate_head_to(self, processor: Processor) -> None:
        """
        Make `processor` the new head without changing the ring order.

        Raises:
            ValueError: If the processor is not a member of this ring.
        """
        position = self._positions.get(id(processor))
        if position is None or self.processors[position] is not processor:
            raise ValueError(
                f"Processor {processor.processor_id} is not a member of this ring"
            )
        self.head_index = position

    def __iter__(self) -> Iterator[Processor]:
        """
        Visit every processor exactly once, starting at the head.

        The start position is captured when iteration begins; rotating the
        head afterwards does not affect a traversal already in progress.
        """
        start: int = self.head_index
        size: int = len(self.processors)
        for offset in range(size):
            yield self.processors[(start + offset) % size]

    def for_each(self) -> Iterator[Processor]:
        """Return a fresh traversal from the current head."""
        return iter(self)

    def reset_access_counts(self) -> None:
        """Zero every processor's access counter."""
        for processor in self.processors:
            processor.reset()

    def access_counts(self) -> np.ndarray:
        """Return the access counters in identity order."""
        return np.array(
            [processor.access_count for processor in self.processors],
            dtype=np.int64
        )
