"""
Data models for clinical trial randomization tables.

Dataclass schemas for assignment rows, the mutable assignment table that a
statistician works through during enrollment, and the generation/report
configurations.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

import pandas as pd

from .errors import UnknownStratumError


class TreatmentArm(int, Enum):
    """Treatment arm, stored as the binary treatment_assignment value."""
    CONTROL = 0
    INTERVENTION = 1


TABLE_COLUMNS = ["identifier", "stratum", "treatment_assignment", "randomized", "block_index"]
UPLOAD_COLUMNS = ["identifier", "stratum", "treatment_assignment"]


@dataclass
class AssignmentRow:
    """One precomputed assignment, handed out at most once."""
    identifier: str
    stratum: Optional[str]
    treatment_assignment: int  # 0 = control, 1 = intervention
    randomized: bool = False
    block_index: Optional[int] = None  # None for simple randomization

    @property
    def arm(self) -> TreatmentArm:
        return TreatmentArm(self.treatment_assignment)


class AssignmentTable:
    """
    Ordered assignment rows, logically partitioned by stratum.

    Rows within a stratum are handed out lowest index first. The table is
    edited in place as rows are consumed; only one person should be doing
    that at a time (see consumption.next_assignment).
    """

    def __init__(self, rows: Optional[List[AssignmentRow]] = None):
        self.rows: List[AssignmentRow] = list(rows or [])

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[AssignmentRow]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return f"AssignmentTable(rows={len(self.rows)}, strata={self.strata})"

    @property
    def strata(self) -> List[Optional[str]]:
        """Distinct strata in table order ([None] for an unstratified table)."""
        seen: List[Optional[str]] = []
        for row in self.rows:
            if row.stratum not in seen:
                seen.append(row.stratum)
        return seen

    @property
    def is_stratified(self) -> bool:
        return any(row.stratum is not None for row in self.rows)

    def partition(self, stratum: Optional[str] = None) -> List[AssignmentRow]:
        """
        Rows of one stratum, in table order.

        Raises:
            UnknownStratumError: if the table holds no rows for the stratum
        """
        rows = [row for row in self.rows if row.stratum == stratum]
        if not rows:
            raise UnknownStratumError(stratum)
        return rows

    def sequence(self, stratum: Optional[str] = None) -> List[int]:
        return [row.treatment_assignment for row in self.partition(stratum)]

    def remaining(self, stratum: Optional[str] = None) -> int:
        return sum(1 for row in self.partition(stratum) if not row.randomized)

    def to_dataframe(self) -> pd.DataFrame:
        df = pd.DataFrame(
            [
                {
                    "identifier": r.identifier,
                    "stratum": r.stratum,
                    "treatment_assignment": r.treatment_assignment,
                    "randomized": r.randomized,
                    "block_index": r.block_index,
                }
                for r in self.rows
            ],
            columns=TABLE_COLUMNS,
        )
        df["block_index"] = df["block_index"].astype("Int64")
        return df

    def upload_frame(self) -> pd.DataFrame:
        """Columns expected by a data-capture system's randomization import."""
        return self.to_dataframe()[UPLOAD_COLUMNS]

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "AssignmentTable":
        """Rebuild a table from to_dataframe() output (e.g. read back from CSV)."""
        missing = [c for c in UPLOAD_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Assignment table is missing columns: {missing}")

        rows = []
        for rec in df.to_dict(orient="records"):
            stratum = rec.get("stratum")
            block_index = rec.get("block_index")
            rows.append(AssignmentRow(
                identifier=str(rec["identifier"]),
                stratum=None if pd.isna(stratum) else str(stratum),
                treatment_assignment=int(rec["treatment_assignment"]),
                randomized=_as_bool(rec.get("randomized", False)),
                block_index=None if block_index is None or pd.isna(block_index) else int(block_index),
            ))
        return cls(rows)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    if value is None or pd.isna(value):
        return False
    return bool(value)


@dataclass
class GenerationConfig:
    """Parameters for one assignment table generation."""
    total_target_n: int
    block_size: int = 4
    strata: Optional[List[str]] = None  # None = unstratified
    oversample_factor: float = 1.0
    seed: Optional[int] = None
    id_prefix: str = ""


@dataclass
class ReportConfig:
    """Parameters for the example computations shown in the report."""
    seed: Optional[int] = 2024  # None draws fresh entropy on every render
    simple_n: int = 10
    simple_prob: float = 0.5
    block_size: int = 4
    target_n: int = 40
    oversample_factor: float = 1.5
    stratified_target_n: int = 12
    dimensions: Dict[str, List[str]] = field(default_factory=lambda: {
        "site": ["siteA", "siteB"],
        "age_group": ["<65", ">=65"],
    })
    imbalance_n: int = 40
    imbalance_sims: int = 2000
    imbalance_threshold: int = 6
    demo_enrollments: int = 5

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ReportConfig":
        """Build from a plain dict (e.g. parsed JSON); unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in known})
