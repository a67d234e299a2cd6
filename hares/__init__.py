"""
Juvenile Hares Report
Package for the Bonanza Creek juvenile snowshoe hare exploratory analysis.
"""

__version__ = "1.0.0"

from .errors import HaresError, InsufficientDataError, LoadError, ParseError

# Stage modules are imported as needed (plots pulls in matplotlib)

__all__ = [
    "config", "io", "cleaning", "summary", "comparison", "regression", "qc", "plots", "report",
    "HaresError", "LoadError", "ParseError", "InsufficientDataError",
]
