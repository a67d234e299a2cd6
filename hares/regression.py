"""
Regression module: simple OLS of weight on hind-foot length.
"""

from dataclasses import dataclass, field

import numpy as np
import pandas as pd
import statsmodels.api as sm
from scipy import stats
from statsmodels.tools.tools import add_constant

from . import config
from .errors import InsufficientDataError


@dataclass(frozen=True)
class RegressionResult:
    slope: float
    intercept: float
    r_squared: float
    r: float
    p_value: float
    n: int
    slope_stderr: float
    x_name: str = "hindft"
    y_name: str = "weight"
    # diagnostics, aligned with the rows used in the fit
    fitted: np.ndarray = field(default=None, repr=False, compare=False)
    residuals: np.ndarray = field(default=None, repr=False, compare=False)

    def predict(self, x):
        return self.intercept + self.slope * np.asarray(x, dtype=float)

    def as_dict(self):
        return {
            "x": self.x_name,
            "y": self.y_name,
            "n": self.n,
            "slope": self.slope,
            "slope_stderr": self.slope_stderr,
            "intercept": self.intercept,
            "r_squared": self.r_squared,
            "pearson_r": self.r,
            "p_value": self.p_value,
        }


def valid_pairs(records, x="hindft", y="weight") -> pd.DataFrame:
    """Rows where both x and y are present, as floats."""
    missing = [c for c in (x, y) if c not in records.columns]
    if missing:
        raise ValueError(f"Columns not found in records: {missing}")
    pairs = records[[x, y]].apply(pd.to_numeric, errors="coerce")
    return pairs.dropna().astype(float)


def fit(records, x="hindft", y="weight"):
    """
    Fit y ≈ intercept + slope * x by ordinary least squares.

    Raw fit only: no transformation, weighting, or outlier removal.
    Pearson's r and its two-sided p-value come from scipy.

    Raises:
        InsufficientDataError: fewer than 3 complete pairs, or constant x or y
    """
    pairs = valid_pairs(records, x, y)
    n = len(pairs)
    if n < config.MIN_REGRESSION_PAIRS:
        raise InsufficientDataError(
            f"{n} complete ({x}, {y}) pairs; need at least {config.MIN_REGRESSION_PAIRS}"
        )
    if pairs[x].nunique() < 2:
        raise InsufficientDataError(f"{x} is constant; slope undefined")
    if pairs[y].nunique() < 2:
        raise InsufficientDataError(f"{y} is constant; R² and r undefined")

    X = add_constant(pairs[x], has_constant="add")
    model = sm.OLS(pairs[y], X).fit()

    r, p_value = stats.pearsonr(pairs[x], pairs[y])

    return RegressionResult(
        slope=float(model.params[x]),
        intercept=float(model.params["const"]),
        r_squared=float(model.rsquared),
        r=float(r),
        p_value=float(p_value),
        n=n,
        slope_stderr=float(model.bse[x]),
        x_name=x,
        y_name=y,
        fitted=np.asarray(model.fittedvalues, dtype=float),
        residuals=np.asarray(model.resid, dtype=float),
    )
