"""
Allocation balance checks.

Compares how many participants a table (or a realised sequence) actually put
in each arm with the allocation the trial intended, and checks the exact
50/50 guarantee of permuted blocks.
"""

import math
from typing import Sequence, Tuple

import numpy as np
from scipy import stats

from ..errors import InvalidParameterError
from ..schema import TreatmentArm


def balance_chi_square(
    n_control: int,
    n_intervention: int,
    expected_frac: float = 0.5,
) -> Tuple[float, float]:
    """
    Goodness of fit of the arm sizes to the intended allocation.

    Under simple randomization a small p-value means the coin flips drifted
    further from the intended split than chance usually allows. A
    deterministic allocation (expected_frac of 0 or 1) has no sampling
    variation: any participant in the arm that should be empty is an outright
    mismatch.

    Args:
        n_control: Participants allocated to control
        n_intervention: Participants allocated to intervention
        expected_frac: Intended fraction in intervention (default 0.5)

    Returns:
        Tuple of (chi2_statistic, p_value)
    """
    if not 0.0 <= expected_frac <= 1.0:
        raise InvalidParameterError(f"expected_frac must be in [0, 1], got {expected_frac}")

    n_total = n_control + n_intervention
    if n_total == 0:
        return 0.0, 1.0

    if expected_frac in (0.0, 1.0):
        misallocated = n_intervention if expected_frac == 0.0 else n_control
        return (math.inf, 0.0) if misallocated else (0.0, 1.0)

    result = stats.chisquare(
        [n_control, n_intervention],
        f_exp=[n_total * (1 - expected_frac), n_total * expected_frac],
    )
    return float(result.statistic), float(result.pvalue)


def check_balance(
    n_control: int,
    n_intervention: int,
    expected_frac: float = 0.5,
    alpha: float = 0.05,
) -> Tuple[bool, float, float]:
    """
    Returns:
        Tuple of (balanced, chi2_statistic, p_value)
    """
    chi2, p_value = balance_chi_square(n_control, n_intervention, expected_frac)
    return p_value >= alpha, chi2, p_value


def arm_counts(labels: Sequence[int]) -> Tuple[int, int]:
    """(n_control, n_intervention) of a label sequence."""
    arr = np.asarray(labels, dtype=int)
    n_int = int((arr == TreatmentArm.INTERVENTION.value).sum())
    return len(arr) - n_int, n_int


def block_prefixes_balanced(labels: Sequence[int], block_size: int) -> bool:
    """True if every prefix whose length is a multiple of block_size is exactly 50/50."""
    arr = np.asarray(labels, dtype=int)
    for end in range(block_size, len(arr) + 1, block_size):
        n_control, n_int = arm_counts(arr[:end])
        if n_control != n_int:
            return False
    return True
