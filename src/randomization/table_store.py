"""
Static files for assignment tables.

Full tables (with the randomized column) are kept as CSV under
output/tables/ so the statistician can reload them between enrollments.
The upload export holds only the columns a data-capture system imports.
"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from .schema import AssignmentTable

logger = logging.getLogger(__name__)

DEFAULT_TABLE_DIR = "output/tables"


def _ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _table_path(name: str, base_dir: str = DEFAULT_TABLE_DIR) -> Path:
    return Path(base_dir) / f"{name}.csv"


def write_table(
    table: AssignmentTable,
    name: str,
    base_dir: str = DEFAULT_TABLE_DIR,
) -> Path:
    """
    Write the full assignment table, overwriting any previous version.

    Args:
        table: AssignmentTable to write
        name: File stem (e.g. "stratified_block")
        base_dir: Directory for table files

    Returns:
        Path to the CSV written
    """
    path = _table_path(name, base_dir)
    _ensure_dir(path.parent)
    table.to_dataframe().to_csv(path, index=False)
    logger.info(f"Wrote {len(table)} assignments to {path}")
    return path


def read_table(name: str, base_dir: str = DEFAULT_TABLE_DIR) -> AssignmentTable:
    """Read a table written by write_table."""
    path = _table_path(name, base_dir)
    if not path.exists():
        raise FileNotFoundError(f"Assignment table not found: {path}")
    # Only empty cells are missing; labels such as "NA" or "None" are real strata
    df = pd.read_csv(
        path,
        dtype={"identifier": str, "stratum": str},
        keep_default_na=False,
        na_values={"stratum": [""], "block_index": [""]},
    )
    return AssignmentTable.from_dataframe(df)


def export_upload(table: AssignmentTable, path: Union[str, Path]) -> Path:
    """Write identifier, stratum, treatment_assignment for a static upload."""
    path = Path(path)
    _ensure_dir(path.parent)
    table.upload_frame().to_csv(path, index=False)
    logger.info(f"Upload file written to {path}")
    return path
