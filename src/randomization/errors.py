"""Exceptions raised while generating, consuming and rendering randomization tables."""


class RandomizationError(Exception):
    """Base class for randomization errors."""


class InvalidParameterError(RandomizationError, ValueError):
    """Generation parameters that cannot produce a valid table."""


class UnknownStratumError(RandomizationError, KeyError):
    """Requested stratum has no partition in the table."""

    def __init__(self, stratum):
        self.stratum = stratum
        super().__init__(f"No assignment rows for stratum {stratum!r}")

    def __str__(self) -> str:
        return self.args[0]


class TableExhaustedError(RandomizationError, LookupError):
    """
    Every row of the partition has already been handed out.

    Regenerate with a larger oversample_factor; tables are never extended
    mid-trial.
    """

    def __init__(self, stratum, n_rows: int):
        self.stratum = stratum
        self.n_rows = n_rows
        label = "unstratified table" if stratum is None else f"stratum {stratum!r}"
        super().__init__(f"All {n_rows} assignments used for {label}")


class ReportRenderError(RandomizationError, RuntimeError):
    """Narrative document could not be rendered."""
