#!/usr/bin/env python
"""
05_build_report.py
Run the whole pipeline and write outputs/report.md with its figures and tables.
"""

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from hares import config
from hares.cleaning import normalize
from hares.io import load_trappings
from hares.report import build_report


def main():
    df_raw = load_trappings(config.INPUT_FILES["hares"])
    result = normalize(df_raw)
    if config.VERBOSE:
        for line in result.log:
            print(f"  {line}")

    build_report(result.records, result.errors, out_dir=config.OUTPUTS_DIR, n_raw=len(df_raw))

    print("\n" + "=" * 80)
    print(f"✓ REPORT WRITTEN: {config.OUTPUT_FILES['report']}")
    print("=" * 80)


if __name__ == "__main__":
    main()
