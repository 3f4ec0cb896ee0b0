"""
Block catalog for permuted block randomization.

A block of size B holds B/2 intervention and B/2 control labels. The catalog
is every distinct ordering of that multiset: C(B, B/2) blocks, 6 for B=4.
"""

import math
from itertools import combinations
from typing import List, Tuple

import numpy as np

from .errors import InvalidParameterError
from .schema import TreatmentArm

Block = Tuple[int, ...]


def validate_block_size(block_size: int) -> None:
    """Block size must be a positive even integer so it splits 50/50."""
    if isinstance(block_size, bool) or not isinstance(block_size, (int, np.integer)):
        raise InvalidParameterError(f"block_size must be an integer, got {block_size!r}")
    if block_size <= 0 or block_size % 2 != 0:
        raise InvalidParameterError(
            f"block_size must be a positive even integer, got {block_size}"
        )


def block_catalog(block_size: int = 4) -> List[Block]:
    """
    Enumerate all balanced blocks of the given size.

    Blocks are ordered lexicographically, so index i always refers to the
    same block for a given size.

    Args:
        block_size: Positive even block length

    Returns:
        List of C(block_size, block_size/2) tuples of 0/1 labels
    """
    validate_block_size(block_size)
    half = block_size // 2
    catalog = []
    for positions in combinations(range(block_size), half):
        block = [TreatmentArm.CONTROL.value] * block_size
        for p in positions:
            block[p] = TreatmentArm.INTERVENTION.value
        catalog.append(tuple(block))
    return sorted(catalog)


def catalog_size(block_size: int) -> int:
    validate_block_size(block_size)
    return math.comb(block_size, block_size // 2)


def n_blocks_needed(total_target_n: int, block_size: int, oversample_factor: float = 1.0) -> int:
    """Blocks to draw so a stratum can serve total_target_n * oversample_factor participants."""
    return math.ceil(total_target_n * oversample_factor / block_size)


def draw_blocks(catalog: List[Block], n_blocks: int, rng: np.random.Generator) -> List[int]:
    """
    Draw catalog indices uniformly with replacement.

    Returns:
        List of catalog indices, in draw order
    """
    if n_blocks <= 0:
        return []
    return [int(i) for i in rng.integers(0, len(catalog), size=n_blocks)]
