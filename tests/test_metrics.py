import math

import numpy as np
import pytest

from shared_memory_sim.metrics import (
    compute_average_access_time,
    compute_effective_bandwidth,
    compute_relative_change,
    compute_theoretical_access_time,
    compute_theoretical_bandwidth,
    has_converged,
)


def test_average_access_time_divides_by_full_population():
    # only one of four processors served: (1/1 + 0 + 0 + 0) / 4
    assert compute_average_access_time(np.array([1, 0, 0, 0]), 1, 4) == 0.25


def test_average_access_time_mixed_counts():
    assert compute_average_access_time([2, 1], 2, 2) == pytest.approx(1.5)


def test_average_access_time_with_no_accesses_is_zero():
    assert compute_average_access_time([0, 0, 0], 5, 3) == 0.0


def test_relative_change():
    assert compute_relative_change(4.0, 5.0) == pytest.approx(0.2)
    assert compute_relative_change(5.0, 4.0) == pytest.approx(0.25)


def test_zero_current_value_is_never_converged():
    assert math.isinf(compute_relative_change(0.0, 0.0))
    assert not has_converged(0.0, 0.0, 0.02)
    assert not has_converged(3.0, 0.0, 0.02)


def test_has_converged_threshold_is_strict():
    assert has_converged(1.0, 1.0, 0.02)
    assert has_converged(0.99, 1.0, 0.02)
    assert not has_converged(0.5, 1.0, 0.02)


def test_effective_bandwidth():
    assert compute_effective_bandwidth(10, 5) == 2.0
    assert compute_effective_bandwidth(10, 0) == 0.0
    np.testing.assert_allclose(
        compute_effective_bandwidth(np.array([4, 9]), np.array([2, 3])), [2.0, 3.0]
    )


def test_theoretical_bandwidth_limits():
    # a single module serves one request per cycle
    assert compute_theoretical_bandwidth(8, 1) == pytest.approx(1.0)
    # a single processor always completes one access per cycle
    assert compute_theoretical_bandwidth(1, 64) == pytest.approx(1.0)
    assert compute_theoretical_access_time(1, 64) == pytest.approx(1.0)


def test_theoretical_bandwidth_grows_with_modules():
    bandwidth = compute_theoretical_bandwidth(8, np.arange(1, 65))
    assert isinstance(bandwidth, np.ndarray)
    assert np.all(np.diff(bandwidth) > 0)
    assert bandwidth[-1] < 8


def test_theoretical_access_time_with_one_module_equals_processor_count():
    assert compute_theoretical_access_time(6, 1) == pytest.approx(6.0)
