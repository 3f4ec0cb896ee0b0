"""Balance diagnostics for randomization tables."""

from .balance import balance_chi_square, check_balance, arm_counts, block_prefixes_balanced
from .imbalance import (
    running_imbalance,
    max_abs_imbalance,
    simulate_simple_imbalance,
    prob_imbalance_exceeds,
)
from .summary import stratum_summary

__all__ = [
    "balance_chi_square",
    "check_balance",
    "arm_counts",
    "block_prefixes_balanced",
    "running_imbalance",
    "max_abs_imbalance",
    "simulate_simple_imbalance",
    "prob_imbalance_exceeds",
    "stratum_summary",
]
