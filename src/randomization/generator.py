"""
Assignment table generation for (stratified) permuted block randomization.

Each stratum gets its own sequence of blocks drawn with replacement from the
balanced-block catalog, so every multiple-of-block_size prefix within a
stratum has exactly as many intervention as control assignments.
"""

import logging
import math
from typing import List, Mapping, Optional, Sequence

import numpy as np

from .blocks import block_catalog, draw_blocks, n_blocks_needed, validate_block_size
from .errors import InvalidParameterError
from .schema import AssignmentRow, AssignmentTable, GenerationConfig
from .strata import build_strata, stratum_generators

logger = logging.getLogger(__name__)


def _validate(total_target_n: int, oversample_factor: float, strata: Optional[Sequence[str]]) -> None:
    if isinstance(total_target_n, bool) or not isinstance(total_target_n, (int, np.integer)):
        raise InvalidParameterError(f"total_target_n must be an integer, got {total_target_n!r}")
    if total_target_n <= 0:
        raise InvalidParameterError(f"total_target_n must be positive, got {total_target_n}")
    if not math.isfinite(oversample_factor) or oversample_factor < 1:
        raise InvalidParameterError(f"oversample_factor must be >= 1, got {oversample_factor}")
    if strata is not None:
        if len(strata) == 0:
            raise InvalidParameterError("Stratification requested but strata list is empty")
        if len(set(strata)) != len(strata):
            raise InvalidParameterError(f"Strata must be unique, got {list(strata)}")


def _stratum_rows(
    stratum: Optional[str],
    catalog: list,
    n_blocks: int,
    rng: np.random.Generator,
    id_prefix: str,
    width: int,
) -> List[AssignmentRow]:
    rows = []
    counter = 0
    for draw_pos, catalog_idx in enumerate(draw_blocks(catalog, n_blocks, rng)):
        for label in catalog[catalog_idx]:
            counter += 1
            number = f"{counter:0{width}d}"
            identifier = number if stratum is None else f"{stratum}-{number}"
            rows.append(AssignmentRow(
                identifier=f"{id_prefix}{identifier}",
                stratum=stratum,
                treatment_assignment=int(label),
                randomized=False,
                block_index=draw_pos,
            ))
    return rows


def generate(
    total_target_n: int,
    block_size: int = 4,
    strata: Optional[Sequence[str]] = None,
    oversample_factor: float = 1.0,
    seed: Optional[int] = None,
    id_prefix: str = "",
) -> AssignmentTable:
    """
    Generate an assignment table by permuted block randomization.

    Args:
        total_target_n: Participants each stratum must be able to serve
                        (or overall, when unstratified)
        block_size: Positive even block length
        strata: Stratum labels; None for simple block randomization
        oversample_factor: Multiplier (>= 1) on total_target_n so the table
                           is not exhausted during enrollment
        seed: Seed for the whole table; each stratum draws from its own
              child generator
        id_prefix: Optional prefix prepended to every identifier

    Returns:
        AssignmentTable, stratum-major, each stratum in block draw order

    Raises:
        InvalidParameterError: on invalid block size, target n, oversample
                               factor, or an empty strata list
    """
    validate_block_size(block_size)
    _validate(total_target_n, oversample_factor, strata)

    catalog = block_catalog(block_size)
    n_blocks = n_blocks_needed(total_target_n, block_size, oversample_factor)
    width = max(3, len(str(n_blocks * block_size)))

    partitions: List[Optional[str]] = [None] if strata is None else [str(s) for s in strata]
    rngs = stratum_generators(seed, len(partitions))

    rows: List[AssignmentRow] = []
    for stratum, rng in zip(partitions, rngs):
        rows.extend(_stratum_rows(stratum, catalog, n_blocks, rng, id_prefix, width))

    logger.info(
        f"Generated {len(rows)} assignments: {len(partitions)} strata x "
        f"{n_blocks} blocks of {block_size} (target n={total_target_n}, "
        f"oversample={oversample_factor})"
    )
    return AssignmentTable(rows)


def generate_from_config(config: GenerationConfig) -> AssignmentTable:
    return generate(
        total_target_n=config.total_target_n,
        block_size=config.block_size,
        strata=config.strata,
        oversample_factor=config.oversample_factor,
        seed=config.seed,
        id_prefix=config.id_prefix,
    )


def stratified_generate(
    total_target_n: int,
    dimensions: Mapping[str, Sequence[str]],
    block_size: int = 4,
    oversample_factor: float = 1.0,
    seed: Optional[int] = None,
    id_prefix: str = "",
) -> AssignmentTable:
    """Stratified block randomization over the cross product of dimensions."""
    return generate(
        total_target_n=total_target_n,
        block_size=block_size,
        strata=build_strata(dimensions),
        oversample_factor=oversample_factor,
        seed=seed,
        id_prefix=id_prefix,
    )
