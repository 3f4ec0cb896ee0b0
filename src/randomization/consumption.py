"""
Handing out precomputed assignments as participants enroll.

The statistician keeps the table; when a coordinator enrolls a participant
in a stratum, the lowest-indexed row of that stratum not yet randomized is
relayed and its `randomized` flag is set. Access is single-writer: there is
no locking here, so concurrent use needs to be serialized by whoever holds
the table.
"""

import logging
from typing import Optional

from .errors import TableExhaustedError, UnknownStratumError
from .schema import AssignmentRow, AssignmentTable

logger = logging.getLogger(__name__)


def _check_stratum(table: AssignmentTable, stratum: Optional[str]) -> None:
    if stratum is None and table.is_stratified:
        raise UnknownStratumError(stratum)


def peek_next(table: AssignmentTable, stratum: Optional[str] = None) -> Optional[AssignmentRow]:
    """Next row that would be handed out for the stratum, without consuming it."""
    _check_stratum(table, stratum)
    for row in table.partition(stratum):
        if not row.randomized:
            return row
    return None


def next_assignment(table: AssignmentTable, stratum: Optional[str] = None) -> AssignmentRow:
    """
    Consume the next assignment for a stratum.

    Args:
        table: Assignment table, modified in place
        stratum: Stratum of the enrolling participant (None if unstratified)

    Returns:
        The consumed AssignmentRow (its randomized flag is now True)

    Raises:
        UnknownStratumError: stratum not in table, or missing on a stratified table
        TableExhaustedError: every row of the stratum has been used
    """
    row = peek_next(table, stratum)
    if row is None:
        raise TableExhaustedError(stratum, len(table.partition(stratum)))
    row.randomized = True
    logger.info(
        f"Assigned {row.identifier} -> {row.arm.name.lower()} "
        f"({table.remaining(stratum)} left in {stratum or 'table'})"
    )
    return row
