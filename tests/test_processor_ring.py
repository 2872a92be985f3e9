import numpy as np
import pytest

from shared_memory_sim.errors import InvalidConfigurationError
from shared_memory_sim.processors import Processor, ProcessorRing


def ids(processors):
    return [p.processor_id for p in processors]


def test_build_assigns_identities_and_head():
    ring = ProcessorRing.build(5)

    assert len(ring) == 5
    assert ids(ring) == [1, 2, 3, 4, 5]
    assert ring.head.processor_id == 1


@pytest.mark.parametrize("count", [0, -1])
def test_build_rejects_empty_ring(count):
    with pytest.raises(InvalidConfigurationError):
        ProcessorRing(count)


def test_rotation_changes_start_but_not_order():
    ring = ProcessorRing(4)

    ring.rotate_head_to(ring.processors[2])

    assert ring.head.processor_id == 3
    assert ids(ring) == [3, 4, 1, 2]
    assert ids(ring.processors) == [1, 2, 3, 4]


def test_traversal_is_restartable():
    ring = ProcessorRing(3)
    assert ids(ring.for_each()) == ids(ring.for_each()) == [1, 2, 3]


def test_traversal_uses_head_captured_at_start():
    ring = ProcessorRing(4)
    visited = []

    for processor in ring:
        visited.append(processor.processor_id)
        if processor.processor_id == 2:
            ring.rotate_head_to(ring.processors[3])

    assert visited == [1, 2, 3, 4]
    assert ring.head.processor_id == 4


def test_single_processor_ring():
    ring = ProcessorRing(1)
    assert ids(ring) == [1]
    ring.rotate_head_to(ring.head)
    assert ring.head.processor_id == 1


def test_rotating_to_foreign_processor_fails():
    ring = ProcessorRing(3)
    with pytest.raises(ValueError):
        ring.rotate_head_to(Processor(processor_id=2))


def test_access_counts_and_reset():
    ring = ProcessorRing(3)
    ring.processors[0].record_access(next_module=4)
    ring.processors[2].record_access(next_module=1)
    ring.processors[2].record_access(next_module=0)

    np.testing.assert_array_equal(ring.access_counts(), [1, 0, 2])
    assert ring.processors[0].memory_module == 4

    ring.reset_access_counts()
    np.testing.assert_array_equal(ring.access_counts(), [0, 0, 0])
