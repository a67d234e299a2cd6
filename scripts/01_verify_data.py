#!/usr/bin/env python
"""
01_verify_data.py
- Load the raw hare trappings CSV
- Keep juveniles, parse dates/measurements, relabel sex and sites
- Run QC checks
- Save juvenile records (and skipped rows) into data/processed/
"""

import sys
from pathlib import Path

# ensure repo root on path for `hares` package imports when running as script
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from hares import config, qc
from hares.cleaning import normalize
from hares.io import load_trappings, save_csv


def main():
    config.print_config()
    config.ensure_output_dirs()

    print("=" * 80)
    print("LOAD & NORMALIZE")
    print("=" * 80)

    df_raw = load_trappings(config.INPUT_FILES["hares"])
    print(f"\n[DATA] Loaded {len(df_raw):,} trapping records, {df_raw.shape[1]} columns")

    result = normalize(df_raw)
    if config.VERBOSE:
        for line in result.log:
            print(f"  {line}")

    juveniles = result.records
    failures = qc.print_qc_report([
        ("Required columns", qc.check_required_columns, {"df": df_raw}),
        ("Juveniles only", qc.check_juveniles_only, {"df": juveniles}),
        ("Sex labels", qc.check_sex_labels, {"df": juveniles}),
        ("Capture dates", qc.check_dates, {"df": juveniles}),
        ("Weight", qc.check_non_negative, {"df": juveniles, "col": "weight"}),
        ("Hind-foot length", qc.check_non_negative, {"df": juveniles, "col": "hindft"}),
    ])

    out = save_csv(juveniles, config.OUTPUT_FILES["juveniles"], date_format="%Y-%m-%d")
    print(f"\n✓ Saved: {out}")
    if result.errors:
        out = save_csv(result.errors_frame(), config.OUTPUT_FILES["parse_errors"])
        print(f"⚠️  Saved {len(result.errors)} parse errors: {out}")

    print(f"\n{'✓ Verification complete' if failures == 0 else f'❌ {failures} QC checks failed'}")


if __name__ == "__main__":
    main()
