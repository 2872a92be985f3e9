import pytest

from shared_memory_sim.randomness import DistributionKind


@pytest.mark.parametrize("selector", ["uniform", "u", "U", " Uniform "])
def test_uniform_selectors(selector):
    assert DistributionKind.from_selector(selector) is DistributionKind.UNIFORM


@pytest.mark.parametrize("selector", ["normal", "n", "N"])
def test_normal_selectors(selector):
    assert DistributionKind.from_selector(selector) is DistributionKind.NORMAL


def test_enum_passes_through():
    assert DistributionKind.from_selector(DistributionKind.NORMAL) is DistributionKind.NORMAL


def test_unknown_selector_falls_back_to_normal_with_warning(capsys):
    assert DistributionKind.from_selector("x") is DistributionKind.NORMAL
    assert "WARNING" in capsys.readouterr().out


def test_unknown_selector_rejected_in_strict_mode():
    with pytest.raises(ValueError):
        DistributionKind.from_selector("x", strict=True)


def test_short_codes():
    assert DistributionKind.UNIFORM.short_code == "u"
    assert DistributionKind.NORMAL.short_code == "n"
