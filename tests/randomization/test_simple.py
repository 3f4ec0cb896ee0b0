"""Tests for simple (coin-flip) randomization."""
import numpy as np
import pytest
from src.randomization.errors import InvalidParameterError
from src.randomization.simple import simple_randomize, simple_randomization_table


def test_simple_randomize_domain():
    """n=10, prob=0.5 -> ten values in {0, 1}; no balance guarantee."""
    draws = simple_randomize(10, prob=0.5, seed=1)
    assert len(draws) == 10
    assert set(np.unique(draws)) <= {0, 1}


def test_simple_randomize_reproducible():
    a = simple_randomize(50, seed=123)
    b = simple_randomize(50, seed=123)
    assert np.array_equal(a, b)


def test_simple_randomize_prob_extremes():
    assert simple_randomize(20, prob=0.0, seed=1).sum() == 0
    assert simple_randomize(20, prob=1.0, seed=1).sum() == 20


def test_simple_randomize_uses_given_rng():
    rng = np.random.default_rng(5)
    expected = np.random.default_rng(5).binomial(1, 0.5, size=15)
    assert np.array_equal(simple_randomize(15, rng=rng), expected)


def test_simple_randomize_rough_balance():
    draws = simple_randomize(2000, prob=0.5, seed=11)
    assert 900 <= draws.sum() <= 1100


@pytest.mark.parametrize("n,prob", [(-1, 0.5), (10, 1.5), (10, -0.1), (2.5, 0.5)])
def test_simple_randomize_invalid(n, prob):
    with pytest.raises(InvalidParameterError):
        simple_randomize(n, prob=prob)


def test_simple_randomization_table():
    table = simple_randomization_table(10, seed=3, id_prefix="P")
    assert len(table) == 10
    assert not table.is_stratified
    assert [r.identifier for r in table][:2] == ["P001", "P002"]
    assert all(r.block_index is None for r in table)
    assert all(not r.randomized for r in table)
    assert table.sequence() == list(simple_randomize(10, seed=3))
