"""
Report module: tables, charts and narrative for the juvenile hare report.

Consumes the outputs of summary / comparison / regression and never
computes new statistics of its own beyond formatting.
"""

from pathlib import Path

import numpy as np
import pandas as pd

from . import config
from .comparison import compare_groups
from .errors import InsufficientDataError
from .io import save_csv
from .plots import ChartSpec, render_chart
from .regression import fit
from .summary import annual_counts, count_statistics, group_by, summary_table

# ============================================================================
# NARRATIVE TEMPLATES
# ============================================================================

INTRO = (
    "This report explores juvenile snowshoe hares (*Lepus americanus*) trapped at "
    "the Bonanza Creek Experimental Forest between {first_year} and {last_year}: "
    "annual trap counts, weights by sex and site, a comparison of male and female "
    "weights, and the relationship between hind-foot length and weight."
)

DATA_METHODS = (
    "{n_raw} trapping records were read; {n_juveniles} are juveniles used in this "
    "report ({n_skipped} juvenile rows skipped for unparseable values). Weights are "
    "compared with Welch's two-sample t-test and Cohen's d; the weight/hind-foot "
    "relationship is described by simple linear regression and Pearson's r."
)

ANNUAL_COUNTS = (
    "Juvenile trap counts ranged from {min} ({min_year}) to {max} ({max_year}) "
    "per year, with a mean of {mean:.1f} and a median of {median:.1f} over "
    "{years} years. Counts are not standardized by trapping effort (days or "
    "traps per year), so they describe sampling as much as population size."
)

WEIGHT_COMPARISON = (
    "On average, juvenile {a_label} hares weighed {direction} than {b_label} hares "
    "({mean_a} ± {sd_a} g, n = {n_a}; vs. {mean_b} ± {sd_b} g, "
    "n = {n_b}; mean ± 1 sd). The absolute difference in means is {abs_diff} g "
    "(a {abs_pct}% difference). Welch's t-test: t({df}) = {t}, p {p}; "
    "the effect size is {effect} (Cohen's d = {d})."
)

REGRESSION = (
    "Simple linear regression of weight on hind-foot length (n = {n}) gives a "
    "slope of {slope} g/mm (intercept {intercept} g): each 1 mm of "
    "hind-foot length is associated with an average weight change of {slope} g. "
    "Hind-foot length explains {r2_pct}% of the variance in weight "
    "(R² = {r2}); Pearson's r = {r}, p {p}. Residual diagnostics are "
    "shown below; normality and constant variance of residuals should be read "
    "from them before relying on the p-value."
)

NOT_COMPUTED = "_Not computed: {reason}_"

# ============================================================================
# FORMATTING
# ============================================================================


def _num(v, fmt=".2f"):
    """Format a statistic; undefined (None, NaN, inf) prints as NA."""
    if v is None or not np.isfinite(v):
        return "NA"
    return format(v, fmt)


def format_p(p):
    if p is None or pd.isna(p):
        return "= NA"
    if p < 0.001:
        return "< 0.001"
    return f"= {p:.3f}"


def effect_size_label(d):
    """Conventional magnitude label for Cohen's d."""
    if d is None or pd.isna(d):
        return "undefined"
    d = abs(d)
    if d < 0.2:
        return "negligible"
    if d < 0.5:
        return "small"
    if d < 0.8:
        return "medium"
    return "large"


def format_table(df: pd.DataFrame, digits=2) -> pd.DataFrame:
    """Numbers → text; missing values print as NA, never 0."""
    out = df.copy()
    for col in out.columns:
        if pd.api.types.is_float_dtype(out[col]):
            out[col] = out[col].map(lambda v: "NA" if pd.isna(v) else f"{v:.{digits}f}")
        else:
            out[col] = out[col].map(lambda v: "NA" if pd.isna(v) else str(v))
    return out


def markdown_table(df: pd.DataFrame, digits=2) -> str:
    text = format_table(df, digits)
    lines = [
        "| " + " | ".join(str(c) for c in text.columns) + " |",
        "|" + "|".join("---" for _ in text.columns) + "|",
    ]
    for row in text.itertuples(index=False):
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)

# ============================================================================
# CHART SPECS
# ============================================================================


def _present(values, order):
    seen = list(pd.unique(values.dropna()))
    return [v for v in order if v in seen] + [v for v in seen if v not in order]


def annual_counts_chart(counts):
    return ChartSpec(
        data=counts, geometry="bar", x="year", y="count",
        title="Annual juvenile hare trap counts",
        x_label="Year", y_label="Juvenile hares trapped",
        caption="Total juvenile snowshoe hares trapped per year, all sites combined.",
    )


def weight_by_sex_site_chart(records, settings=config.DEFAULT_SETTINGS):
    data = records[records["weight"].notna()]
    return ChartSpec(
        data=data, geometry="box", x="sex", y="weight", hue="sex", col="site",
        order=_present(data["sex"], settings.category_orders["sex"]),
        col_order=_present(data["site"], settings.category_orders["site"]),
        palette=config.SEX_PALETTE,
        title="Juvenile hare weight by sex and site",
        x_label="Sex", y_label="Weight (g)", legend_title="Sex",
        caption="Boxes show median and quartiles; points are individual hares.",
    )


def weight_hindfoot_chart(records, reg=None):
    data = records[records["weight"].notna() & records["hindft"].notna()]
    return ChartSpec(
        data=data, geometry="scatter", x="hindft", y="weight", hue="sex",
        palette=config.SEX_PALETTE,
        line=None if reg is None else (reg.intercept, reg.slope),
        title="Juvenile hare weight vs. hind-foot length",
        x_label="Hind-foot length (mm)", y_label="Weight (g)", legend_title="Sex",
        caption="Dashed line: ordinary least-squares fit over all juveniles.",
    )


def residual_charts(reg):
    data = pd.DataFrame({"residual": reg.residuals})
    return [
        ChartSpec(data=data, geometry="hist", x="residual",
                  title="Distribution of residuals", x_label="Residuals (g)",
                  y_label="Frequency"),
        ChartSpec(data=data, geometry="qq", x="residual",
                  title="Q-Q plot (normal distribution)"),
    ]

# ============================================================================
# SECTIONS
# ============================================================================


def annual_counts_section(records):
    counts = annual_counts(records)
    stats = count_statistics(counts)
    if stats["years"] == 0:
        return counts, NOT_COMPUTED.format(reason="no juvenile records")
    return counts, ANNUAL_COUNTS.format(**stats)


def weight_comparison_section(records, a="Male", b="Female"):
    """Returns (table, narrative); the table is None when not computable."""
    try:
        res = compare_groups(records, by="sex", a=a, b=b)
    except InsufficientDataError as e:
        return None, NOT_COMPUTED.format(reason=e)

    table = pd.DataFrame({
        "sex": [a, b],
        "mean_weight": [res.mean_a, res.mean_b],
        "sd_weight": [res.sd_a, res.sd_b],
        "n": [res.n_a, res.n_b],
    })
    text = WEIGHT_COMPARISON.format(
        a_label=a.lower(), b_label=b.lower(),
        direction="more" if res.mean_difference >= 0 else "less",
        mean_a=_num(res.mean_a), sd_a=_num(res.sd_a), n_a=res.n_a,
        mean_b=_num(res.mean_b), sd_b=_num(res.sd_b), n_b=res.n_b,
        abs_diff=_num(abs(res.mean_difference)), abs_pct=_num(abs(res.percent_difference)),
        df=_num(res.df), t=_num(res.t_statistic), p=format_p(res.p_value),
        effect=effect_size_label(res.cohens_d), d=_num(res.cohens_d),
    )
    return (table, res), text


def regression_section(records):
    """Returns (RegressionResult or None, narrative)."""
    try:
        reg = fit(records)
    except InsufficientDataError as e:
        return None, NOT_COMPUTED.format(reason=e)

    text = REGRESSION.format(
        n=reg.n, slope=_num(reg.slope), intercept=_num(reg.intercept),
        r2=_num(reg.r_squared, ".3f"), r2_pct=_num(100 * reg.r_squared, ".1f"),
        r=_num(reg.r), p=format_p(reg.p_value),
    )
    return reg, text

# ============================================================================
# REPORT
# ============================================================================


def _figure(spec, path, rel):
    render_chart(spec, path)
    caption = spec.caption or spec.title
    return f"![{spec.title}]({rel})\n\n*{caption}*"


def build_report(records, errors=(), out_dir=None, n_raw=None, settings=config.DEFAULT_SETTINGS):
    """
    Render the full report: Markdown text, figures and CSV tables.

    Args:
        records: normalized juvenile DataFrame
        errors: ParseErrors collected by normalize()
        out_dir: output folder (default config.OUTPUTS_DIR)
        n_raw: number of raw rows read, for the methods paragraph

    Returns:
        Report text (also written to out_dir/report.md)
    """
    out_dir = Path(out_dir) if out_dir is not None else config.OUTPUTS_DIR
    figures_dir = out_dir / "figures"
    tables_dir = out_dir / "tables"
    figures_dir.mkdir(parents=True, exist_ok=True)
    tables_dir.mkdir(parents=True, exist_ok=True)

    n_skipped = len({e.row for e in errors})
    years = records["year"] if len(records) else pd.Series([np.nan])
    parts = ["# Juvenile snowshoe hares: exploratory report", ""]

    parts += ["## 1. Introduction", "", INTRO.format(
        first_year="NA" if pd.isna(years.min()) else int(years.min()),
        last_year="NA" if pd.isna(years.max()) else int(years.max()),
    ), ""]
    parts += ["## 2. Data and methods", "", DATA_METHODS.format(
        n_raw="NA" if n_raw is None else n_raw,
        n_juveniles=len(records), n_skipped=n_skipped,
    ), ""]

    # Annual counts
    counts, text = annual_counts_section(records)
    save_csv(counts, tables_dir / "annual_juvenile_counts.csv")
    parts += ["## 3. Annual juvenile hare trap counts", ""]
    if len(counts):
        parts += [_figure(annual_counts_chart(counts),
                          figures_dir / "annual_counts.png", "figures/annual_counts.png"), ""]
    parts += [text, ""]

    # Weights by sex and site
    by_sex_site = summary_table(group_by(records, ["site", "sex"], settings=settings), ["site", "sex"])
    save_csv(by_sex_site, tables_dir / "weight_by_sex_site.csv")
    parts += ["## 4. Juvenile weights by sex and site", ""]
    if records["weight"].notna().any():
        parts += [_figure(weight_by_sex_site_chart(records, settings),
                          figures_dir / "weight_by_sex_site.png", "figures/weight_by_sex_site.png"), ""]
    parts += [markdown_table(by_sex_site), ""]

    # Male vs female
    comparison, text = weight_comparison_section(records)
    parts += ["## 5. Juvenile weight comparison (male vs. female)", ""]
    if comparison is not None:
        table, res = comparison
        save_csv(pd.DataFrame([res.as_dict()]), tables_dir / "weight_comparison.csv")
        parts += [markdown_table(table), ""]
    parts += [text, ""]

    # Weight vs hind-foot length
    reg, text = regression_section(records)
    parts += ["## 6. Relationship between juvenile weight and hind-foot length", ""]
    if reg is not None:
        save_csv(pd.DataFrame([reg.as_dict()]), tables_dir / "weight_hindfoot_regression.csv")
        parts += [_figure(weight_hindfoot_chart(records, reg),
                          figures_dir / "weight_hindfoot.png", "figures/weight_hindfoot.png"), ""]
        parts += [text, ""]
        for spec, name in zip(residual_charts(reg), ("residuals_hist", "residuals_qq")):
            parts += [_figure(spec, figures_dir / f"{name}.png", f"figures/{name}.png"), ""]
    else:
        parts += [text, ""]

    if errors:
        parts += ["## Appendix: skipped rows", ""]
        err_df = pd.DataFrame([e.as_dict() for e in errors])
        save_csv(err_df, tables_dir / "parse_errors.csv")
        parts += [markdown_table(err_df), ""]

    text = "\n".join(parts)
    (out_dir / "report.md").write_text(text, encoding="utf-8")
    return text
