"""Shared fixtures: small synthetic trapping tables."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pandas as pd
import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

HEADER = ["date", "time", "grid", "trap", "l_ear", "r_ear", "sex", "age", "weight", "hindft", "notes"]


def make_raw(rows: list[dict]) -> pd.DataFrame:
    """Raw-looking frame: every cell text, missing cells NaN."""
    df = pd.DataFrame(rows)
    for col in HEADER:
        if col not in df.columns:
            df[col] = None
    return df[HEADER].astype(object).where(df[HEADER].notna(), None)


@pytest.fixture
def five_rows() -> pd.DataFrame:
    """3 juveniles (2 male, 1 female) and 2 adults."""
    return make_raw([
        {"date": "11/26/1998", "grid": "bonrip", "sex": "m", "age": "j", "weight": "900", "hindft": "120"},
        {"date": "11/27/1998", "grid": "bonrip", "sex": "m", "age": "j", "weight": "950", "hindft": "125"},
        {"date": "9/15/1999", "grid": "bonbs", "sex": "f", "age": "j", "weight": "800", "hindft": "115"},
        {"date": "9/15/1999", "grid": "bonbs", "sex": "f", "age": "a", "weight": "1500", "hindft": "135"},
        {"date": "9/16/1999", "grid": "bonmat", "sex": "m", "age": "a", "weight": "1600", "hindft": "138"},
    ])


@pytest.fixture
def juvenile_rows() -> pd.DataFrame:
    """A larger juvenile set spread over years, sites and sexes."""
    rows = []
    sites = ["bonrip", "bonmat", "bonbs"]
    for i in range(24):
        sex = "m" if i % 2 == 0 else "f"
        hindft = 100 + i
        weight = 10 * hindft - 300 + (40 if sex == "m" else 0) + (i % 3) * 15
        rows.append({
            "date": f"{(i % 9) + 1}/{(i % 27) + 1}/{1999 + (i % 4)}",
            "grid": sites[i % 3],
            "sex": sex,
            "age": "j",
            "weight": str(weight),
            "hindft": str(hindft),
        })
    rows.append({"date": "10/1/2001", "grid": "bonrip", "sex": None, "age": "j", "weight": "700", "hindft": None})
    rows.append({"date": "10/2/2001", "grid": "bonmat", "sex": "pf", "age": "j", "weight": None, "hindft": "118"})
    return make_raw(rows)


def write_csv(path: Path, df: pd.DataFrame) -> Path:
    df.to_csv(path, index=False, na_rep="NA")
    return path
