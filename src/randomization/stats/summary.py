"""
Per-stratum breakdown of an assignment table.
"""

import pandas as pd

from ..schema import AssignmentTable, TreatmentArm
from .balance import block_prefixes_balanced


def stratum_summary(table: AssignmentTable, block_size: int = 4) -> pd.DataFrame:
    """
    Counts per stratum.

    Returns:
        DataFrame with columns stratum, control, intervention, total,
        consumed, remaining, block_balanced
    """
    df = table.to_dataframe()
    cols = ["stratum", "control", "intervention", "total", "consumed", "remaining", "block_balanced"]
    if df.empty:
        return pd.DataFrame(columns=cols)

    results = []
    for stratum in table.strata:
        sub = df[df["stratum"].isna()] if stratum is None else df[df["stratum"] == stratum]
        n_int = int((sub["treatment_assignment"] == TreatmentArm.INTERVENTION.value).sum())
        consumed = int(sub["randomized"].sum())
        results.append({
            "stratum": stratum if stratum is not None else "(none)",
            "control": len(sub) - n_int,
            "intervention": n_int,
            "total": len(sub),
            "consumed": consumed,
            "remaining": len(sub) - consumed,
            "block_balanced": block_prefixes_balanced(sub["treatment_assignment"].tolist(), block_size),
        })
    return pd.DataFrame(results, columns=cols)
