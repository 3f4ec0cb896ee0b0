"""
Simple randomization: an independent weighted coin flip per participant.

Balanced only in expectation. Kept as the baseline that block randomization
is compared against in the report.
"""

import logging
from typing import Optional

import numpy as np

from .errors import InvalidParameterError
from .schema import AssignmentRow, AssignmentTable

logger = logging.getLogger(__name__)


def simple_randomize(
    n: int,
    prob: float = 0.5,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Flip a weighted coin n times.

    Args:
        n: Number of participants
        prob: Probability of intervention (1)
        seed: Seed for a fresh generator (ignored when rng is given)
        rng: Existing numpy Generator to draw from

    Returns:
        Array of n values in {0, 1}
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
        raise InvalidParameterError(f"n must be a non-negative integer, got {n!r}")
    if not 0.0 <= prob <= 1.0:
        raise InvalidParameterError(f"prob must be in [0, 1], got {prob}")
    if rng is None:
        rng = np.random.default_rng(seed)
    return rng.binomial(1, prob, size=n).astype(int)


def simple_randomization_table(
    n: int,
    prob: float = 0.5,
    seed: Optional[int] = None,
    id_prefix: str = "",
) -> AssignmentTable:
    """Coin-flip assignments wrapped in an unstratified AssignmentTable."""
    draws = simple_randomize(n, prob=prob, seed=seed)
    width = max(3, len(str(n)))
    rows = [
        AssignmentRow(
            identifier=f"{id_prefix}{i + 1:0{width}d}",
            stratum=None,
            treatment_assignment=int(v),
        )
        for i, v in enumerate(draws)
    ]
    n_int = int(draws.sum())
    logger.info(
        f"Simple randomization: {n} participants -> "
        f"intervention={n_int}, control={n - n_int}"
    )
    return AssignmentTable(rows)
