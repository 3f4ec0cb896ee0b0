"""
Strata from stratification dimensions, and independent per-stratum seeds.
"""

from itertools import product
from typing import List, Mapping, Optional, Sequence

import numpy as np

from .errors import InvalidParameterError

STRATUM_SEPARATOR = "_"


def build_strata(dimensions: Mapping[str, Sequence[str]]) -> List[str]:
    """
    Cross product of stratification levels.

    Args:
        dimensions: Ordered mapping of dimension name -> levels,
                    e.g. {"site": ["siteA", "siteB"], "age_group": ["<65", ">=65"]}

    Returns:
        Stratum labels in dimension order, e.g. ["siteA_<65", "siteA_>=65", ...]
    """
    if not dimensions:
        raise InvalidParameterError("Stratification requested but no dimensions given")
    for name, levels in dimensions.items():
        if not levels:
            raise InvalidParameterError(f"Stratification dimension {name!r} has no levels")
        if len(set(levels)) != len(levels):
            raise InvalidParameterError(f"Stratification dimension {name!r} has duplicate levels")

    strata = [
        STRATUM_SEPARATOR.join(str(level) for level in combo)
        for combo in product(*dimensions.values())
    ]
    if len(set(strata)) != len(strata):
        raise InvalidParameterError(f"Stratum labels are not unique: {strata}")
    return strata


def stratum_generators(seed: Optional[int], n_strata: int) -> List[np.random.Generator]:
    """
    One independent Generator per stratum.

    Child seeds are spawned from a single SeedSequence, so the whole table is
    reproducible from one seed while strata never share draw state.
    """
    children = np.random.SeedSequence(seed).spawn(n_strata)
    return [np.random.default_rng(child) for child in children]
