"""Tests for grouped summaries and annual counts."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from hares.cleaning import normalize
from hares.summary import (
    GroupSummary,
    annual_counts,
    count_statistics,
    group_by,
    summarize_values,
    summary_table,
)


def _records(rows: list[tuple]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=["year", "sex", "site", "weight"])


# ---------------------------------------------------------------------------
# summarize_values


def test_summarize_values_ignores_missing() -> None:
    s = summarize_values(pd.Series([1.0, np.nan, 3.0]), key="k")
    assert isinstance(s, GroupSummary)
    assert (s.key, s.count, s.n, s.mean) == ("k", 3, 2, 2.0)
    assert s.sd == pytest.approx(np.sqrt(2.0))


def test_summarize_values_undefined_statistics_are_none() -> None:
    single = summarize_values(pd.Series([5.0]))
    assert single.mean == 5.0
    assert single.sd is None

    empty = summarize_values(pd.Series([np.nan, np.nan]))
    assert empty.count == 2
    assert empty.n == 0
    assert empty.mean is None and empty.sd is None


# ---------------------------------------------------------------------------
# group_by


def test_group_by_count_tracks_row_membership() -> None:
    df = _records([
        (2000, "Male", "A", 900.0),
        (2000, "Male", "A", np.nan),
        (2000, "Female", "A", np.nan),
        (2001, "unknown", "B", 700.0),
    ])
    out = group_by(df, "sex")

    assert out["Male"].count == 2
    assert out["Male"].n == 1
    assert out["Female"].count == 1
    assert out["Female"].mean is None
    assert sum(s.count for s in out.values()) == len(df)


def test_group_by_sample_sd() -> None:
    df = _records([(2000, "Male", "A", w) for w in (2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0)])
    s = group_by(df, "sex")["Male"]
    assert s.mean == pytest.approx(5.0)
    assert s.sd == pytest.approx(np.std([2, 4, 4, 4, 5, 5, 7, 9], ddof=1))


def test_group_by_invariant_under_row_order(juvenile_rows) -> None:
    records = normalize(juvenile_rows).records
    shuffled = records.sample(frac=1.0, random_state=42)

    a = group_by(records, ["site", "sex"])
    b = group_by(shuffled, ["site", "sex"])

    assert list(a) == list(b)
    for key in a:
        assert a[key].count == b[key].count
        assert a[key].mean == pytest.approx(b[key].mean)
        if a[key].sd is None:
            assert b[key].sd is None
        else:
            assert a[key].sd == pytest.approx(b[key].sd)


def test_group_by_deterministic_order() -> None:
    df = _records([
        (2003, "Male", "Lowland Black Spruce", 1.0),
        (1999, "unknown", "Bonanza Mature", 1.0),
        (2001, "Female", "Bonanza Riparian", 1.0),
    ])
    assert list(group_by(df, "year")) == [1999, 2001, 2003]
    assert list(group_by(df, "sex")) == ["Female", "Male", "unknown"]
    assert list(group_by(df, "site")) == ["Bonanza Riparian", "Bonanza Mature", "Lowland Black Spruce"]
    assert list(group_by(df, ["site", "sex"]))[0] == ("Bonanza Riparian", "Female")


def test_group_by_unknown_column() -> None:
    with pytest.raises(ValueError, match="colour"):
        group_by(_records([(2000, "Male", "A", 1.0)]), "colour")


def test_summary_table_uses_nan_marker() -> None:
    df = _records([(2000, "Male", "A", 900.0), (2000, "Female", "A", np.nan)])
    table = summary_table(group_by(df, "sex"), "sex")

    assert list(table.columns) == ["sex", "count", "n", "mean_weight", "sd_weight"]
    female = table[table["sex"] == "Female"].iloc[0]
    assert np.isnan(female["mean_weight"])
    assert female["count"] == 1


# ---------------------------------------------------------------------------
# annual counts


def test_annual_counts_fills_gaps() -> None:
    df = pd.DataFrame({"year": [1999, 1999, 2001, 2002, 2002, 2002]})
    counts = annual_counts(df)

    assert counts["year"].tolist() == [1999, 2000, 2001, 2002]
    assert counts["count"].tolist() == [2, 0, 1, 3]
    assert annual_counts(df, fill_missing_years=False)["year"].tolist() == [1999, 2001, 2002]


def test_count_statistics() -> None:
    counts = pd.DataFrame({"year": [1999, 2000, 2001, 2002], "count": [2, 0, 1, 3]})
    stats = count_statistics(counts)

    assert stats["min"] == 0 and stats["min_year"] == 2000
    assert stats["max"] == 3 and stats["max_year"] == 2002
    assert stats["mean"] == pytest.approx(1.5)
    assert stats["median"] == pytest.approx(1.5)


def test_count_statistics_empty() -> None:
    stats = count_statistics(annual_counts(pd.DataFrame({"year": pd.Series([], dtype=int)})))
    assert stats["years"] == 0
    assert stats["mean"] is None
