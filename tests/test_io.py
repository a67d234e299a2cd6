"""Tests for loading the raw trapping CSV."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from conftest import write_csv
from hares.errors import LoadError
from hares.io import load_trappings, save_csv


def test_load_trappings_keeps_cells_as_text(tmp_path: Path, five_rows) -> None:
    path = write_csv(tmp_path / "hares.csv", five_rows)
    df = load_trappings(path)

    assert len(df) == 5
    assert df.loc[0, "weight"] == "900"
    assert df.loc[0, "date"] == "11/26/1998"
    # "NA" cells come back missing, not as the literal string
    assert df["notes"].isna().all()


def test_load_trappings_missing_file(tmp_path: Path) -> None:
    with pytest.raises(LoadError, match="not found"):
        load_trappings(tmp_path / "nope.csv")


def test_load_trappings_missing_required_column(tmp_path: Path, five_rows) -> None:
    path = write_csv(tmp_path / "hares.csv", five_rows.drop(columns=["hindft"]))
    with pytest.raises(LoadError, match="hindft"):
        load_trappings(path)


def test_load_trappings_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(LoadError):
        load_trappings(path)


def test_load_trappings_undecodable_file(tmp_path: Path) -> None:
    path = tmp_path / "binary.csv"
    path.write_bytes(b"date,grid\n\xff\xfe\xfa,\x80\n")
    with pytest.raises(LoadError):
        load_trappings(path)


def test_load_trappings_custom_required_columns(tmp_path: Path) -> None:
    path = tmp_path / "small.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    df = load_trappings(path, required_columns=("a",))
    assert list(df.columns) == ["a", "b"]


def test_save_csv_creates_parent(tmp_path: Path) -> None:
    out = save_csv(pd.DataFrame({"x": [1, 2]}), tmp_path / "nested" / "t.csv")
    assert out.exists()
    assert pd.read_csv(out)["x"].tolist() == [1, 2]
