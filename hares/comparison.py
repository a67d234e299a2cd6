"""
Comparison module: Welch two-sample t-test and Cohen's d.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy import stats

from . import config
from .errors import InsufficientDataError


@dataclass(frozen=True)
class ComparisonResult:
    mean_a: float
    mean_b: float
    sd_a: float
    sd_b: float
    n_a: int
    n_b: int
    mean_difference: float
    t_statistic: float
    df: float
    p_value: float
    cohens_d: float

    @property
    def percent_difference(self):
        """Difference as a percentage of the second group's mean."""
        if self.mean_b == 0:
            return np.nan
        return 100.0 * self.mean_difference / self.mean_b

    def as_dict(self):
        out = dict(self.__dict__)
        out["percent_difference"] = self.percent_difference
        return out


def _clean(sample, label):
    values = pd.to_numeric(pd.Series(sample, dtype=object), errors="coerce").dropna().astype(float)
    if len(values) < config.MIN_COMPARISON_SAMPLE:
        raise InsufficientDataError(
            f"Sample {label} has {len(values)} valid values; "
            f"need at least {config.MIN_COMPARISON_SAMPLE}"
        )
    return values.to_numpy()


def welch_df(a, b):
    """Welch–Satterthwaite degrees of freedom."""
    va = np.var(a, ddof=1) / len(a)
    vb = np.var(b, ddof=1) / len(b)
    denom = va ** 2 / (len(a) - 1) + vb ** 2 / (len(b) - 1)
    if denom == 0:
        return np.nan
    return float((va + vb) ** 2 / denom)


def cohens_d(a, b):
    """(mean_a - mean_b) / pooled sd, pooled with n-1 weights."""
    n_a, n_b = len(a), len(b)
    pooled_var = ((n_a - 1) * np.var(a, ddof=1) + (n_b - 1) * np.var(b, ddof=1)) / (n_a + n_b - 2)
    if pooled_var == 0:
        return np.nan
    return float((np.mean(a) - np.mean(b)) / np.sqrt(pooled_var))


def compare(sample_a, sample_b):
    """
    Compare the means of two samples.

    Missing values are removed from each sample independently. The t-test
    does not assume equal variances (Welch).

    Raises:
        InsufficientDataError: a sample has fewer than 2 valid values
    """
    a = _clean(sample_a, "a")
    b = _clean(sample_b, "b")

    t_stat, p_value = stats.ttest_ind(a, b, equal_var=False)

    return ComparisonResult(
        mean_a=float(np.mean(a)),
        mean_b=float(np.mean(b)),
        sd_a=float(np.std(a, ddof=1)),
        sd_b=float(np.std(b, ddof=1)),
        n_a=len(a),
        n_b=len(b),
        mean_difference=float(np.mean(a) - np.mean(b)),
        t_statistic=float(t_stat),
        df=welch_df(a, b),
        p_value=float(p_value),
        cohens_d=cohens_d(a, b),
    )


def compare_groups(records, by="sex", a="Male", b="Female", metric="weight"):
    """compare() on two groups of a normalized records frame."""
    if by not in records.columns or metric not in records.columns:
        raise ValueError(f"Columns not found in records: {by}, {metric}")
    sample_a = records.loc[records[by] == a, metric]
    sample_b = records.loc[records[by] == b, metric]
    return compare(sample_a, sample_b)
