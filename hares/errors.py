"""
Error types raised (or collected) by the pipeline stages.
"""


class HaresError(Exception):
    """Base class for pipeline errors."""


class LoadError(HaresError):
    """Input file missing, unreadable, or without the required columns."""


class ParseError(HaresError, ValueError):
    """
    A single cell that could not be parsed.

    Row-level and non-fatal: ``normalize`` collects these instead of raising,
    and the offending row is left out of every downstream computation.
    """

    def __init__(self, row, column, value, reason=None):
        self.row = row
        self.column = column
        self.value = value
        self.reason = reason or f"could not parse {column}"
        super().__init__(f"row {row}: {self.reason} ({value!r})")

    def as_dict(self):
        return {"row": self.row, "column": self.column, "value": self.value, "reason": self.reason}


class InsufficientDataError(HaresError, ValueError):
    """A statistic was requested with too few valid observations."""
