"""Tests for strata construction."""
import numpy as np
import pytest
from src.randomization.errors import InvalidParameterError
from src.randomization.strata import build_strata, stratum_generators


def test_build_strata_cross_product():
    strata = build_strata({"site": ["siteA", "siteB", "siteC"], "age_group": ["<65", ">=65"]})
    assert len(strata) == 6
    assert strata[:2] == ["siteA_<65", "siteA_>=65"]


def test_build_strata_single_dimension():
    assert build_strata({"site": ["1", "2"]}) == ["1", "2"]


@pytest.mark.parametrize("dims", [
    {},
    {"site": []},
    {"site": ["A", "A"]},
    {"a": ["x_y", "x"], "b": ["z", "y_z"]},  # x_y_z twice
])
def test_build_strata_invalid(dims):
    with pytest.raises(InvalidParameterError):
        build_strata(dims)


def test_stratum_generators_reproducible_and_distinct():
    first = [g.integers(0, 1_000_000) for g in stratum_generators(42, 3)]
    second = [g.integers(0, 1_000_000) for g in stratum_generators(42, 3)]
    assert first == second
    assert len(set(first)) == 3
    assert all(isinstance(g, np.random.Generator) for g in stratum_generators(None, 2))
