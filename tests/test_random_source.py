import math

import numpy as np
import pytest

from shared_memory_sim.randomness import (
    DistributionKind,
    RAND_MAX,
    RandomSource,
    odd_biased_truncation,
    wrap_module_index,
    wrapped_normal_pmf,
)


def test_uniform_stays_in_range_and_covers_it():
    source = RandomSource(seed=1)

    draws = [source.uniform(7) for _ in range(2000)]

    assert all(0 <= d < 7 for d in draws)
    assert set(draws) == set(range(7))


def test_uniform_with_single_value_range_is_always_zero():
    source = RandomSource(seed=2)
    assert {source.uniform(1) for _ in range(50)} == {0}


@pytest.mark.parametrize("maximum", [0, -3])
def test_uniform_rejects_non_positive_bound(maximum):
    with pytest.raises(ValueError):
        RandomSource(seed=0).uniform(maximum)


def test_same_seed_gives_same_sequence():
    a = RandomSource(seed=123)
    b = RandomSource(seed=123)

    assert [a.uniform(512) for _ in range(100)] == [b.uniform(512) for _ in range(100)]
    assert [a.wrapped_normal(10, 5, 64) for _ in range(100)] == [
        b.wrapped_normal(10, 5, 64) for _ in range(100)
    ]


def test_raw_draws_span_rand_max_range():
    source = RandomSource(seed=9)
    raws = [source.next_raw() for _ in range(5000)]
    assert all(0 <= r <= RAND_MAX for r in raws)


def test_uniform_is_raw_modulo_bound():
    a = RandomSource(seed=77)
    b = RandomSource(seed=77)
    for maximum in (3, 10, 512):
        assert a.uniform(maximum) == b.next_raw() % maximum


def test_standard_normal_reproduces_box_muller_transform():
    source = RandomSource(seed=3)
    reference = RandomSource(seed=3)

    first_raw = reference.next_raw()
    second_raw = reference.next_raw()
    u = (first_raw + 1.0) / (RAND_MAX + 2.0)
    v = second_raw / (RAND_MAX + 1.0)
    radius = math.sqrt(-2.0 * math.log(u))

    assert source.standard_normal() == pytest.approx(radius * math.sin(2.0 * math.pi * v))
    assert source.standard_normal() == pytest.approx(radius * math.cos(2.0 * math.pi * v))


def test_two_normal_draws_consume_one_raw_pair():
    source = RandomSource(seed=11)
    reference = RandomSource(seed=11)

    assert source.phase == 0
    source.standard_normal()
    assert source.phase == 1
    source.standard_normal()
    assert source.phase == 0

    reference.next_raw()
    reference.next_raw()
    assert source.next_raw() == reference.next_raw()


def test_generator_state_persists_between_wrapped_normal_calls():
    source = RandomSource(seed=5)
    source.wrapped_normal(3, 5, 16)
    cached = (source.cached_u, source.cached_v)

    source.wrapped_normal(3, 5, 16)

    # second phase reuses the cached pair
    assert (source.cached_u, source.cached_v) == cached
    assert source.phase == 0


@pytest.mark.parametrize("maximum", [1, 2, 3, 10, 512])
def test_wrapped_normal_stays_in_range(maximum):
    source = RandomSource(seed=maximum)
    # mean 0 with stddev 5 produces plenty of negative values to wrap
    draws = [source.wrapped_normal(0, 5, maximum) for _ in range(2000)]
    assert all(0 <= d < maximum for d in draws)


def test_wrapped_normal_matches_manual_transform():
    source = RandomSource(seed=21)
    reference = RandomSource(seed=21)

    for _ in range(20):
        value = 5.0 * reference.standard_normal() + 7
        expected = odd_biased_truncation(value) % 12
        assert source.wrapped_normal(7, 5.0, 12) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.2, 1),
        (1.7, 1),
        (2.0, 3),
        (2.9, 3),
        (3.5, 3),
        (10.0, 11),
        (-1.2, -1),
        (-2.5, -1),
        (-3.9, -3),
    ],
)
def test_odd_biased_truncation(value, expected):
    assert odd_biased_truncation(value) == expected


def test_odd_biased_truncation_keeps_zero_between_minus_one_and_zero():
    assert odd_biased_truncation(-0.5) == 0


def test_truncated_values_are_never_left_even_outside_minus_one_zero_band():
    values = np.random.default_rng(0).uniform(-50.0, 50.0, size=2000)
    for value in values:
        if -1.0 < value < 0.0:
            continue
        assert odd_biased_truncation(float(value)) % 2 == 1


def test_wrap_module_index_handles_negative_values():
    assert wrap_module_index(-1, 8) == 7
    assert wrap_module_index(-9, 8) == 7
    assert wrap_module_index(17, 8) == 1


def test_draw_module_dispatches_on_distribution():
    a = RandomSource(seed=4)
    b = RandomSource(seed=4)
    assert a.draw_module(DistributionKind.UNIFORM, 3, 32, 5.0) == b.uniform(32)

    c = RandomSource(seed=4)
    d = RandomSource(seed=4)
    assert c.draw_module(DistributionKind.NORMAL, 3, 32, 5.0) == d.wrapped_normal(3, 5.0, 32)


def test_wrapped_normal_pmf_sums_to_one_and_skips_even_modules():
    pmf = wrapped_normal_pmf(mean=4, standard_deviation=5.0, maximum=32)

    assert pmf.shape == (32,)
    assert pmf.sum() == pytest.approx(1.0)
    # 2 and 30 (== -2) can only be reached from even truncations
    assert pmf[2] == 0.0
    assert pmf[30] == 0.0
    assert pmf[0] > 0.0
    assert pmf[31] > 0.0
    assert pmf[5] == pytest.approx(0.1554, abs=1e-3)


def test_wrapped_normal_pmf_matches_drawn_frequencies():
    source = RandomSource(seed=11)
    samples = np.array([source.wrapped_normal(4, 5.0, 32) for _ in range(20000)])

    frequencies = np.bincount(samples, minlength=32) / len(samples)

    np.testing.assert_allclose(frequencies, wrapped_normal_pmf(4, 5.0, 32), atol=0.02)
