#!/usr/bin/env python
"""
04_weight_hindfoot_regression.py
Simple OLS of juvenile weight on hind-foot length, with residual diagnostics.

Output: outputs/tables/weight_hindfoot_regression.csv and figures in outputs/figures/
"""

import sys
from pathlib import Path

import pandas as pd

REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from hares import config
from hares.cleaning import normalize
from hares.io import load_trappings, save_csv
from hares.plots import render_chart
from hares.regression import fit
from hares.report import format_p, residual_charts, weight_hindfoot_chart


def main():
    config.ensure_output_dirs()
    juveniles = normalize(load_trappings(config.INPUT_FILES["hares"])).records

    print("=" * 80)
    print("OLS: WEIGHT ~ HIND-FOOT LENGTH")
    print("=" * 80)

    reg = fit(juveniles)
    print(f"\n  N:          {reg.n}")
    print(f"  Slope:      {reg.slope:.3f} g/mm (se {reg.slope_stderr:.3f})")
    print(f"  Intercept:  {reg.intercept:.3f} g")
    print(f"  R²:         {reg.r_squared:.4f}")
    print(f"  Pearson r:  {reg.r:.3f}, p {format_p(reg.p_value)}")

    print(f"\nResiduals:")
    print(f"  Mean: {reg.residuals.mean():.6f}")
    print(f"  Std:  {reg.residuals.std(ddof=1):.4f}")
    print(f"  Min:  {reg.residuals.min():.2f}")
    print(f"  Max:  {reg.residuals.max():.2f}")

    print(f"\n✓ Saved: {save_csv(pd.DataFrame([reg.as_dict()]), config.OUTPUT_FILES['regression'])}")
    print(f"✓ Saved: {render_chart(weight_hindfoot_chart(juveniles, reg), config.FIGURES_DIR / 'weight_hindfoot.png')}")
    for spec, name in zip(residual_charts(reg), ("residuals_hist", "residuals_qq")):
        print(f"✓ Saved: {render_chart(spec, config.FIGURES_DIR / f'{name}.png')}")


if __name__ == "__main__":
    main()
