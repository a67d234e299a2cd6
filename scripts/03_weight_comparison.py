#!/usr/bin/env python
"""
03_weight_comparison.py
Male vs female juvenile weights: Welch's t-test and Cohen's d.
"""

import sys
from pathlib import Path

import pandas as pd

REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from hares import config
from hares.cleaning import normalize
from hares.comparison import compare_groups
from hares.errors import InsufficientDataError
from hares.io import load_trappings, save_csv
from hares.report import effect_size_label, format_p


def main():
    config.ensure_output_dirs()
    juveniles = normalize(load_trappings(config.INPUT_FILES["hares"])).records

    print("=" * 80)
    print("JUVENILE WEIGHT COMPARISON: MALE vs FEMALE")
    print("=" * 80)

    try:
        res = compare_groups(juveniles, by="sex", a="Male", b="Female")
    except InsufficientDataError as e:
        print(f"\n❌ Comparison not computed: {e}")
        return

    print(f"\n  Male:   {res.mean_a:.2f} ± {res.sd_a:.2f} g (n = {res.n_a})")
    print(f"  Female: {res.mean_b:.2f} ± {res.sd_b:.2f} g (n = {res.n_b})")
    print(f"\n  Difference in means: {res.mean_difference:.2f} g ({res.percent_difference:.2f}%)")
    print(f"  Welch t({res.df:.2f}) = {res.t_statistic:.3f}, p {format_p(res.p_value)}")
    print(f"  Cohen's d = {res.cohens_d:.3f} ({effect_size_label(res.cohens_d)})")

    out = save_csv(pd.DataFrame([res.as_dict()]), config.OUTPUT_FILES["weight_comparison"])
    print(f"\n✓ Saved: {out}")


if __name__ == "__main__":
    main()
