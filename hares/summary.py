"""
Summary module: grouped counts, means and standard deviations.
"""

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
import pandas as pd

from . import config


@dataclass(frozen=True)
class GroupSummary:
    """
    Statistics for one group.

    ``count`` is the number of rows in the group; ``n`` the number of those
    rows with a non-missing metric. ``mean``/``sd`` are None when undefined
    (no valid values, or fewer than two for the sample sd).
    """

    key: Any
    count: int
    n: int
    mean: Optional[float]
    sd: Optional[float]


def _keys(by):
    keys = [by] if isinstance(by, str) else list(by)
    if not keys:
        raise ValueError("At least one grouping column is required")
    return keys


def _sort_key(key, keys, settings):
    """Year ascending; declared category order for sex/site/grid."""
    values = key if isinstance(key, tuple) else (key,)
    out = []
    for col, value in zip(keys, values):
        order = settings.category_orders.get(col)
        if order is not None:
            rank = order.index(value) if value in order else len(order)
            out.append((rank, str(value)))
        elif pd.isna(value):
            out.append((1, 0))
        else:
            out.append((0, value))
    return tuple(out)


def summarize_values(values: pd.Series, key=None, count=None) -> GroupSummary:
    """Summary of one metric column, ignoring missing values."""
    valid = pd.to_numeric(values, errors="coerce").dropna()
    n = int(len(valid))
    mean = float(valid.mean()) if n > 0 else None
    sd = float(valid.std(ddof=1)) if n > 1 else None
    return GroupSummary(
        key=key,
        count=int(len(values)) if count is None else count,
        n=n,
        mean=mean,
        sd=sd,
    )


def group_by(records, by, metric="weight", settings=config.DEFAULT_SETTINGS):
    """
    Group records and summarize ``metric`` per group.

    Args:
        records: normalized juvenile DataFrame
        by: column name or list of column names (year, sex, site, grid)
        metric: numeric column to summarize
        settings: config.Settings (category orders)

    Returns:
        dict key -> GroupSummary, in deterministic report order. Keys are
        scalars for a single column and tuples for several.
    """
    keys = _keys(by)
    missing = [c for c in keys + [metric] if c not in records.columns]
    if missing:
        raise ValueError(f"Columns not found in records: {missing}")

    summaries = {}
    for key, group in records.groupby(keys, dropna=False, sort=False):
        if len(keys) == 1 and isinstance(key, tuple):
            key = key[0]
        summaries[key] = summarize_values(group[metric], key=key)

    ordered = sorted(summaries, key=lambda k: _sort_key(k, keys, settings))
    return {k: summaries[k] for k in ordered}


def summary_table(summaries, by, metric="weight") -> pd.DataFrame:
    """Flatten a group_by result into a table (undefined stats → NaN)."""
    keys = _keys(by)
    rows = []
    for key, s in summaries.items():
        values = key if isinstance(key, tuple) else (key,)
        row = dict(zip(keys, values))
        row.update({
            "count": s.count,
            "n": s.n,
            f"mean_{metric}": np.nan if s.mean is None else s.mean,
            f"sd_{metric}": np.nan if s.sd is None else s.sd,
        })
        rows.append(row)
    return pd.DataFrame(rows, columns=keys + ["count", "n", f"mean_{metric}", f"sd_{metric}"])


def annual_counts(records, fill_missing_years=True) -> pd.DataFrame:
    """
    Juvenile trappings per year.

    With ``fill_missing_years`` every year between the first and last
    observed year is listed, zero when nothing was trapped.
    """
    counts = records.groupby("year").size().rename("count")
    if fill_missing_years and len(counts) > 0:
        years = range(int(counts.index.min()), int(counts.index.max()) + 1)
        counts = counts.reindex(years, fill_value=0)
    counts.index.name = "year"
    return counts.reset_index().astype({"year": int, "count": int})


def count_statistics(counts: pd.DataFrame) -> dict:
    """Min / max / mean / median of the annual counts."""
    if len(counts) == 0:
        return {"years": 0, "min": None, "max": None, "mean": None, "median": None}

    c = counts["count"]
    return {
        "years": int(len(c)),
        "min": int(c.min()),
        "min_year": int(counts.loc[c.idxmin(), "year"]),
        "max": int(c.max()),
        "max_year": int(counts.loc[c.idxmax(), "year"]),
        "mean": float(c.mean()),
        "median": float(c.median()),
    }
