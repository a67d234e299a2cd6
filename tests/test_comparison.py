"""Tests for the Welch t-test / Cohen's d comparison."""

from __future__ import annotations

import numpy as np
import pytest
from scipy import stats

from hares.cleaning import normalize
from hares.comparison import cohens_d, compare, compare_groups, welch_df
from hares.errors import InsufficientDataError

A = [900.0, 950.0, 1010.0, 870.0, np.nan, 990.0]
B = [800.0, 860.0, 790.0, None, 845.0]


def test_compare_drops_missing_independently() -> None:
    res = compare(A, B)
    assert res.n_a == 5
    assert res.n_b == 4
    assert res.mean_a == pytest.approx(944.0)
    assert res.mean_b == pytest.approx(823.75)
    assert res.mean_difference == pytest.approx(120.25)


def test_compare_is_welch() -> None:
    a = [x for x in A if x is not None and not np.isnan(x)]
    b = [x for x in B if x is not None]
    expected = stats.ttest_ind(a, b, equal_var=False)

    res = compare(A, B)
    assert res.t_statistic == pytest.approx(expected.statistic)
    assert res.p_value == pytest.approx(expected.pvalue)
    assert res.df == pytest.approx(welch_df(np.array(a), np.array(b)))
    # Welch df is not the pooled n_a + n_b - 2
    assert res.df != pytest.approx(len(a) + len(b) - 2)


def test_compare_antisymmetric() -> None:
    ab = compare(A, B)
    ba = compare(B, A)

    assert ab.mean_difference == -ba.mean_difference
    assert ab.t_statistic == pytest.approx(-ba.t_statistic)
    assert ab.p_value == pytest.approx(ba.p_value)
    assert ab.cohens_d == pytest.approx(-ba.cohens_d)


def test_cohens_d_pooled() -> None:
    a = np.array([1.0, 2.0, 3.0, 4.0])
    b = np.array([3.0, 4.0, 5.0, 6.0, 7.0])
    pooled = np.sqrt((3 * np.var(a, ddof=1) + 4 * np.var(b, ddof=1)) / 7)
    assert cohens_d(a, b) == pytest.approx((2.5 - 5.0) / pooled)


def test_percent_difference() -> None:
    res = compare([110.0, 110.0, 110.0, 110.5], [100.0, 100.0, 100.5, 99.5])
    assert res.percent_difference == pytest.approx(100 * res.mean_difference / res.mean_b)


@pytest.mark.parametrize("small", [[], [1.0], [np.nan, 2.0], [None, None, 3.0]])
def test_compare_insufficient_data(small) -> None:
    with pytest.raises(InsufficientDataError):
        compare(small, [1.0, 2.0, 3.0])
    with pytest.raises(InsufficientDataError):
        compare([1.0, 2.0, 3.0], small)


def test_compare_groups_male_female(five_rows) -> None:
    records = normalize(five_rows).records
    # one female only
    with pytest.raises(InsufficientDataError):
        compare_groups(records, by="sex", a="Male", b="Female")


def test_compare_groups_on_records(juvenile_rows) -> None:
    records = normalize(juvenile_rows).records
    res = compare_groups(records)

    males = records.loc[records["sex"] == "Male", "weight"].dropna()
    assert res.n_a == len(males)
    assert res.mean_a == pytest.approx(males.mean())
    assert res.mean_difference > 0
