"""
Cleaning module: restrict trappings to juveniles and normalize their fields.
"""

import warnings
from dataclasses import dataclass, field

import pandas as pd

from . import config
from .errors import ParseError

NUMERIC_COLUMNS = ("hindft", "weight")


@dataclass
class NormalizeResult:
    """Juvenile records plus the audit trail of rows that were skipped."""

    records: pd.DataFrame
    errors: list = field(default_factory=list)
    log: list = field(default_factory=list)

    @property
    def n_skipped(self):
        return len({e.row for e in self.errors})

    def errors_frame(self):
        return pd.DataFrame(
            [e.as_dict() for e in self.errors],
            columns=["row", "column", "value", "reason"],
        )


def relabel_sex(s: pd.Series, settings=config.DEFAULT_SETTINGS) -> pd.Series:
    """Map raw sex codes to display labels; anything else becomes unknown."""
    return s.map(settings.sex_labels).fillna(settings.sex_unknown)


def site_names(s: pd.Series, settings=config.DEFAULT_SETTINGS) -> pd.Series:
    """Grid code → site display name (unknown codes pass through)."""
    return s.map(settings.site_labels).fillna(s)


def _strip(s: pd.Series) -> pd.Series:
    return s.map(lambda v: v.strip() if isinstance(v, str) else v)


def _bad_cells(raw: pd.Series, parsed: pd.Series):
    """Rows where a non-empty raw cell failed to parse."""
    present = raw.notna() & (raw != "")
    return raw[present & parsed.isna()]


def normalize(df, settings=config.DEFAULT_SETTINGS):
    """
    Keep juvenile trappings and normalize them for analysis.

    - age must equal the juvenile marker exactly
    - date parsed with ``settings.date_format``; year derived from it
    - hindft/weight parsed to float; empty cells stay NaN
    - sex relabeled (m → Male, f → Female, other/missing → unknown);
      surrounding whitespace is stripped first, as for the other text cells
    - site display name added next to the raw grid code

    A row with an unparseable date or a non-empty, non-numeric measurement
    is dropped and one ``ParseError`` per bad cell is collected.

    Args:
        df: Raw trappings DataFrame (from io.load_trappings)
        settings: config.Settings

    Returns:
        NormalizeResult
    """
    log = []
    errors = []

    juveniles = df[df["age"] == settings.juvenile_marker].copy()
    log.append(f"✓ Kept {len(juveniles)} juvenile rows of {len(df)} "
               f"(age == '{settings.juvenile_marker}')")

    # 1. Dates
    raw_dates = _strip(juveniles["date"])
    dates = pd.to_datetime(raw_dates, format=settings.date_format, errors="coerce")
    for idx, value in raw_dates[dates.isna()].items():
        errors.append(ParseError(idx, "date", None if pd.isna(value) else str(value),
                                 "unparseable capture date"))
    juveniles["date"] = dates

    # 2. Measurements
    for col in NUMERIC_COLUMNS:
        raw = _strip(juveniles[col])
        parsed = pd.to_numeric(raw, errors="coerce").astype(float)
        for idx, value in _bad_cells(raw, parsed).items():
            errors.append(ParseError(idx, col, str(value), f"non-numeric {col}"))
        juveniles[col] = parsed

    bad_rows = {e.row for e in errors}
    if bad_rows:
        juveniles = juveniles.drop(index=sorted(bad_rows))
        msg = f"{len(bad_rows)} juvenile rows skipped ({len(errors)} unparseable cells)"
        log.append(f"⚠️  {msg}")
        warnings.warn(msg)

    # 3. Derived and relabeled fields
    juveniles["year"] = juveniles["date"].dt.year.astype(int)
    juveniles["sex"] = relabel_sex(_strip(juveniles["sex"]), settings)
    juveniles["site"] = site_names(juveniles["grid"], settings)

    unknown_sex = (juveniles["sex"] == settings.sex_unknown).sum()
    if unknown_sex > 0:
        log.append(f"⚠️  {unknown_sex} juveniles with sex '{settings.sex_unknown}' (kept)")
    for col in NUMERIC_COLUMNS:
        n_missing = juveniles[col].isna().sum()
        if n_missing > 0:
            log.append(f"⚠️  {col}: {n_missing} missing values (kept as NaN)")

    if len(juveniles) > 0:
        log.append(f"✓ Years {juveniles['year'].min()}–{juveniles['year'].max()}")
    log.append(f"✓ Normalization complete: {len(juveniles)} juvenile records")

    return NormalizeResult(records=juveniles, errors=errors, log=log)
