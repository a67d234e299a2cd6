"""
I/O module: Load the raw trapping CSV and save derived tables.
"""

import pandas as pd
from pathlib import Path

from . import config
from .errors import LoadError


def load_trappings(filepath, required_columns=config.REQUIRED_COLUMNS, **kwargs):
    """
    Load the raw hare trapping CSV with every cell kept as text.

    Numeric and date parsing is left to ``cleaning.normalize``; this only
    checks that the header carries the required columns.

    Args:
        filepath: Path to CSV file
        required_columns: Column names that must be in the header
        **kwargs: Additional arguments for pd.read_csv()

    Returns:
        pd.DataFrame (dtype str, missing cells as NaN)

    Raises:
        LoadError: file missing, unreadable, empty, or header incomplete
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise LoadError(f"CSV file not found: {filepath}")

    try:
        with open(filepath, encoding=kwargs.pop("encoding", "utf-8"), newline="") as fh:
            df = pd.read_csv(fh, dtype=str, **kwargs)
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read {filepath}: {e}") from e
    except pd.errors.EmptyDataError as e:
        raise LoadError(f"CSV file is empty: {filepath}") from e
    except pd.errors.ParserError as e:
        raise LoadError(f"Malformed CSV {filepath}: {e}") from e

    df.columns = [str(col).strip() for col in df.columns]
    missing = [col for col in required_columns if col not in df.columns]
    if missing:
        raise LoadError(f"{filepath.name} is missing required columns: {missing}")

    return df


def save_csv(df, filepath, **kwargs):
    """
    Save DataFrame to CSV.

    Args:
        df: DataFrame to save
        filepath: Output path
        **kwargs: Additional arguments for df.to_csv()

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df.to_csv(filepath, index=False, **kwargs)

    return filepath
