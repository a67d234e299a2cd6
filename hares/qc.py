"""
Quality Control (QC) module: Assertions and data quality checks.
"""

from . import config


def check_required_columns(df, required=config.REQUIRED_COLUMNS):
    """Assert the raw header carries every required column."""
    missing = [c for c in required if c not in df.columns]
    assert not missing, f"Missing columns: {missing}"
    return f"✓ All {len(required)} required columns present"

def check_juveniles_only(df, age_col='age', marker=config.JUVENILE_MARKER):
    """Assert every record is a juvenile."""
    others = (df[age_col] != marker).sum()
    assert others == 0, f"Found {others} non-juvenile records!"
    return f"✓ All {len(df)} records are juveniles"

def check_sex_labels(df, sex_col='sex', settings=config.DEFAULT_SETTINGS):
    """Assert sex is one of the display labels (or unknown)."""
    allowed = set(settings.sex_labels.values()) | {settings.sex_unknown}
    bad = sorted(set(df[sex_col].dropna()) - allowed)
    assert df[sex_col].notna().all(), f"Null {sex_col} values found!"
    assert not bad, f"Unexpected {sex_col} labels: {bad}"
    return f"✓ Sex labels within {sorted(allowed)}"

def check_dates(df, date_col='date', year_col='year'):
    """Assert every record has a capture date and year."""
    null_count = df[date_col].isnull().sum()
    assert null_count == 0, f"{null_count} null dates in {date_col}"
    assert (df[year_col] == df[date_col].dt.year).all(), f"{year_col} does not match {date_col}"
    if len(df) == 0:
        return f"⚠️  No records"
    return f"✓ Date range: {df[date_col].min():%Y-%m-%d} to {df[date_col].max():%Y-%m-%d}"

def check_non_negative(df, col):
    """Assert a measurement column has no negative values (NaN allowed)."""
    if col not in df.columns:
        return f"⚠️  {col} column not found"

    negative = (df[col] < 0).sum()
    assert negative == 0, f"Found {negative} negative {col} values!"
    return f"✓ {col}: {df[col].notna().sum()} values, none negative ({df[col].isna().sum()} missing)"

def check_group_counts(summaries, df):
    """Verify that grouped counts add up to the number of records."""
    total = sum(s.count for s in summaries.values())
    assert total == len(df), (
        f"Group count mismatch: {total} grouped != {len(df)} records"
    )
    return f"✓ Group counts match: {total:,} records"

def print_qc_report(checks):
    """
    Print formatted QC report.

    Args:
        checks: List of (name, check_func, kwargs) tuples
    """
    print("\n" + "=" * 80)
    print("QUALITY CONTROL REPORT")
    print("=" * 80)

    failures = 0
    for name, check_func, kwargs in checks:
        try:
            result = check_func(**kwargs)
            print(f"\n{name}")
            print(f"  {result}")
        except AssertionError as e:
            failures += 1
            print(f"\n❌ {name}")
            print(f"  ERROR: {e}")
        except (KeyError, TypeError, AttributeError) as e:
            failures += 1
            print(f"\n⚠️  {name}")
            print(f"  WARNING: {e}")

    print("\n" + "=" * 80)
    return failures
