"""
Plots module: declarative chart specs rendered with matplotlib/seaborn.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from scipy import stats

from . import config

GEOMETRIES = ("bar", "box", "scatter", "hist", "qq")


@dataclass
class ChartSpec:
    """What to draw: data source, geometry, labels and colour mapping."""

    data: pd.DataFrame
    geometry: str
    x: Optional[str] = None
    y: Optional[str] = None
    hue: Optional[str] = None
    col: Optional[str] = None
    title: str = ""
    x_label: Optional[str] = None
    y_label: Optional[str] = None
    legend_title: Optional[str] = None
    palette: Optional[dict] = None
    order: Optional[list] = None
    col_order: Optional[list] = None
    # scatter: (intercept, slope) of a fitted line to overlay
    line: Optional[tuple] = None
    caption: str = ""
    options: dict = field(default_factory=dict)

    def __post_init__(self):
        if self.geometry not in GEOMETRIES:
            raise ValueError(f"Unknown geometry '{self.geometry}' (expected one of {GEOMETRIES})")
        for col in (self.x, self.y, self.hue, self.col):
            if col is not None and col not in self.data.columns:
                raise ValueError(f"Column '{col}' not in chart data")


def _draw(ax, spec, data):
    if spec.geometry == "bar":
        ax.bar(data[spec.x].astype(str), data[spec.y], color="#2E86AB", edgecolor="black", alpha=0.8)
        ax.tick_params(axis="x", rotation=45)
    elif spec.geometry == "box":
        sns.boxplot(data=data, x=spec.x, y=spec.y, hue=spec.hue, order=spec.order,
                    palette=spec.palette, ax=ax, fliersize=0, width=0.5)
        sns.stripplot(data=data, x=spec.x, y=spec.y, hue=spec.hue, order=spec.order,
                      palette=spec.palette, ax=ax, dodge=spec.hue not in (None, spec.x),
                      alpha=0.5, size=3, legend=False, edgecolor="gray", linewidth=0.5)
    elif spec.geometry == "scatter":
        sns.scatterplot(data=data, x=spec.x, y=spec.y, hue=spec.hue,
                        palette=spec.palette, ax=ax, alpha=0.6, s=30)
        if spec.line is not None:
            intercept, slope = spec.line
            xs = np.linspace(data[spec.x].min(), data[spec.x].max(), 100)
            ax.plot(xs, intercept + slope * xs, color="r", linestyle="--", linewidth=2)
    elif spec.geometry == "hist":
        ax.hist(data[spec.x].dropna(), bins=spec.options.get("bins", 30), edgecolor="black", alpha=0.7)
    elif spec.geometry == "qq":
        stats.probplot(data[spec.x].dropna(), dist="norm", plot=ax)

    if spec.x_label is not None:
        ax.set_xlabel(spec.x_label, fontsize=11)
    elif spec.geometry != "qq":
        ax.set_xlabel(spec.x or "", fontsize=11)
    if spec.y_label is not None:
        ax.set_ylabel(spec.y_label, fontsize=11)
    if spec.legend_title and ax.get_legend() is not None:
        ax.get_legend().set_title(spec.legend_title)
    ax.grid(alpha=0.3)


def render_chart(spec: ChartSpec, out_path=None, dpi=config.FIGURE_DPI):
    """
    Draw a ChartSpec. Faceted (``col``) specs get one panel per value.

    Saves to ``out_path`` when given and closes the figure. Without
    ``out_path`` the open figure is returned and the caller must close it
    (``plt.close(fig)``).
    """
    if spec.col is not None:
        panels = spec.col_order or list(pd.unique(spec.data[spec.col].dropna()))
    else:
        panels = [None]

    fig, axes = plt.subplots(1, len(panels), figsize=(6 * len(panels), 5),
                             sharey=spec.col is not None, squeeze=False)
    for ax, panel in zip(axes[0], panels):
        data = spec.data if panel is None else spec.data[spec.data[spec.col] == panel]
        _draw(ax, spec, data)
        if panel is not None:
            ax.set_title(str(panel), fontsize=11)

    if spec.title:
        if spec.col is None:
            axes[0][0].set_title(spec.title, fontsize=12, fontweight="bold")
        else:
            fig.suptitle(spec.title, fontsize=12, fontweight="bold")

    plt.tight_layout()
    if out_path is None:
        return fig

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return out_path
