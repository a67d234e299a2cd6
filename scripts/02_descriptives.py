#!/usr/bin/env python
"""
02_descriptives.py
- Annual juvenile trap counts (table + bar chart)
- Juvenile weight by sex and site (table + box/point chart)
"""

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from hares import config, qc
from hares.cleaning import normalize
from hares.io import load_trappings, save_csv
from hares.plots import render_chart
from hares.report import annual_counts_chart, format_table, weight_by_sex_site_chart
from hares.summary import annual_counts, count_statistics, group_by, summary_table


def main():
    config.ensure_output_dirs()
    juveniles = normalize(load_trappings(config.INPUT_FILES["hares"])).records

    # ========================================================================
    # 1. ANNUAL COUNTS
    # ========================================================================
    print("=" * 80)
    print("ANNUAL JUVENILE TRAP COUNTS")
    print("=" * 80)

    counts = annual_counts(juveniles)
    print(counts.to_string(index=False))

    stats = count_statistics(counts)
    print(f"\n  Min:    {stats['min']} ({stats.get('min_year')})")
    print(f"  Max:    {stats['max']} ({stats.get('max_year')})")
    print(f"  Mean:   {stats['mean']:.1f}")
    print(f"  Median: {stats['median']:.1f}")

    print(f"\n✓ Saved: {save_csv(counts, config.OUTPUT_FILES['annual_counts'])}")
    print(f"✓ Saved: {render_chart(annual_counts_chart(counts), config.FIGURES_DIR / 'annual_counts.png')}")

    # ========================================================================
    # 2. WEIGHT BY SEX AND SITE
    # ========================================================================
    print("\n" + "=" * 80)
    print("JUVENILE WEIGHT BY SEX AND SITE")
    print("=" * 80)

    by = ["site", "sex"]
    summaries = group_by(juveniles, by)
    print(qc.check_group_counts(summaries, juveniles))
    table = summary_table(summaries, by)
    print(format_table(table).to_string(index=False))

    by_sex = summary_table(group_by(juveniles, "sex"), "sex")
    print("\n" + format_table(by_sex).to_string(index=False))

    print(f"\n✓ Saved: {save_csv(table, config.OUTPUT_FILES['weight_sex_site'])}")
    print(f"✓ Saved: {save_csv(by_sex, config.OUTPUT_FILES['weight_sex'])}")
    print(f"✓ Saved: {render_chart(weight_by_sex_site_chart(juveniles), config.FIGURES_DIR / 'weight_by_sex_site.png')}")


if __name__ == "__main__":
    main()
