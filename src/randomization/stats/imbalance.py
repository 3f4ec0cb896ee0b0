"""
How far simple randomization drifts from 50/50.

Running imbalance is #intervention - #control after each assignment. Under
block randomization it returns to zero at the end of every block; under
simple randomization it is a random walk.
"""

from typing import Optional, Sequence

import numpy as np
from scipy import stats


def running_imbalance(labels: Sequence[int]) -> np.ndarray:
    arr = np.asarray(labels, dtype=int)
    return np.cumsum(2 * arr - 1)


def max_abs_imbalance(labels: Sequence[int]) -> int:
    if len(labels) == 0:
        return 0
    return int(np.max(np.abs(running_imbalance(labels))))


def simulate_simple_imbalance(
    n: int,
    n_sims: int = 1000,
    prob: float = 0.5,
    seed: Optional[int] = None,
) -> np.ndarray:
    """
    Final |#intervention - #control| over replicate simple randomizations.

    Args:
        n: Participants per replicate
        n_sims: Number of replicates
        prob: Probability of intervention
        seed: Random seed

    Returns:
        Array of length n_sims
    """
    rng = np.random.default_rng(seed)
    n_int = rng.binomial(n, prob, size=n_sims)
    return np.abs(2 * n_int - n)


def prob_imbalance_exceeds(n: int, threshold: int, prob: float = 0.5) -> float:
    """
    Exact P(|#intervention - #control| > threshold) for n coin flips.

    |2k - n| > t  <=>  k > (n + t) / 2  or  k < (n - t) / 2
    """
    k = np.arange(n + 1)
    pmf = stats.binom.pmf(k, n, prob)
    return float(pmf[np.abs(2 * k - n) > threshold].sum())
