"""Tests for balance and imbalance diagnostics."""
import numpy as np
import pytest
from src.randomization.consumption import next_assignment
from src.randomization.errors import InvalidParameterError
from src.randomization.generator import generate
from src.randomization.stats import (
    arm_counts,
    balance_chi_square,
    block_prefixes_balanced,
    check_balance,
    max_abs_imbalance,
    prob_imbalance_exceeds,
    running_imbalance,
    simulate_simple_imbalance,
    stratum_summary,
)


def test_balance_perfect():
    balanced, _, p = check_balance(500, 500)
    assert balanced
    assert p > 0.9


def test_balance_extreme():
    balanced, _, p = check_balance(900, 100)
    assert not balanced
    assert p < 0.01


def test_balance_chi_square_empty():
    assert balance_chi_square(0, 0) == (0.0, 1.0)


def test_arm_counts():
    assert arm_counts([1, 0, 0, 1, 1]) == (2, 3)
    assert arm_counts([]) == (0, 0)


def test_block_prefixes_balanced():
    assert block_prefixes_balanced([1, 0, 0, 1, 0, 1, 1, 0], 4)
    assert block_prefixes_balanced([1, 0, 0, 1, 1, 1], 4)  # trailing partial block
    assert not block_prefixes_balanced([1, 1, 1, 0], 4)


def test_running_imbalance():
    assert running_imbalance([1, 1, 0, 0, 0]).tolist() == [1, 2, 1, 0, -1]
    assert max_abs_imbalance([1, 1, 0, 0, 0]) == 2
    assert max_abs_imbalance([]) == 0


def test_block_sequence_returns_to_zero():
    seq = generate(40, block_size=4, seed=3).sequence()
    imb = running_imbalance(seq)
    assert all(imb[i] == 0 for i in range(3, len(seq), 4))
    assert max_abs_imbalance(seq) <= 2


def test_simulate_simple_imbalance():
    sims = simulate_simple_imbalance(40, n_sims=500, seed=1)
    assert len(sims) == 500
    assert (sims >= 0).all()
    assert (sims % 2 == 0).all()  # n even -> difference even
    assert sims.max() > 0


def test_prob_imbalance_exceeds():
    assert prob_imbalance_exceeds(10, 10) == pytest.approx(0.0)
    assert prob_imbalance_exceeds(10, -1) == pytest.approx(1.0)
    # |2k - 2| > 0 for k in {0, 2}: 0.25 + 0.25
    assert prob_imbalance_exceeds(2, 0) == pytest.approx(0.5)


def test_prob_imbalance_matches_simulation():
    exact = prob_imbalance_exceeds(40, 6)
    sims = simulate_simple_imbalance(40, n_sims=20000, seed=7)
    assert abs(np.mean(sims > 6) - exact) < 0.03


def test_stratum_summary():
    table = generate(8, strata=["A", "B"], seed=5)
    next_assignment(table, "A")
    summary = stratum_summary(table)
    assert summary["stratum"].tolist() == ["A", "B"]
    assert summary["total"].tolist() == [8, 8]
    assert summary["control"].tolist() == [4, 4]
    assert summary["intervention"].tolist() == [4, 4]
    assert summary["consumed"].tolist() == [1, 0]
    assert summary["remaining"].tolist() == [7, 8]
    assert summary["block_balanced"].all()


def test_stratum_summary_unstratified():
    summary = stratum_summary(generate(8, seed=1))
    assert summary["stratum"].tolist() == ["(none)"]


def test_balance_chi_square_known_value():
    """60/40 against 50/50: (10^2 + 10^2) / 50 = 4."""
    chi2, p = balance_chi_square(60, 40)
    assert chi2 == pytest.approx(4.0)
    assert p == pytest.approx(0.0455, abs=1e-3)


def test_balance_chi_square_unequal_allocation():
    """2:1 allocation realised exactly is a perfect fit."""
    chi2, p = balance_chi_square(100, 200, expected_frac=2 / 3)
    assert chi2 == pytest.approx(0.0)
    assert p == pytest.approx(1.0)


@pytest.mark.parametrize("n_control,n_intervention,expected_frac,fits", [
    (10, 0, 0.0, True),
    (9, 1, 0.0, False),
    (0, 10, 1.0, True),
    (1, 9, 1.0, False),
])
def test_balance_deterministic_allocation(n_control, n_intervention, expected_frac, fits):
    balanced, chi2, p = check_balance(n_control, n_intervention, expected_frac=expected_frac)
    assert balanced is fits
    assert p == (1.0 if fits else 0.0)
    assert chi2 == (0.0 if fits else float("inf"))


@pytest.mark.parametrize("expected_frac", [-0.1, 1.5])
def test_balance_invalid_expected_frac(expected_frac):
    with pytest.raises(InvalidParameterError):
        balance_chi_square(5, 5, expected_frac=expected_frac)
