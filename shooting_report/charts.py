"""Chart rendering for the shooting incident report.

Figures are built on :class:`matplotlib.figure.Figure` directly, without pyplot.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import numpy as np
import pandas as pd
from matplotlib import colormaps
from matplotlib.figure import Figure

from . import config
from .aggregate import SummaryTable
from .regression import RegressionResult

logger = logging.getLogger(__name__)


def _with_unknown(series: pd.Series) -> pd.Series:
    return series.astype(object).where(series.notna(), config.UNKNOWN_LABEL)


def incident_counts_by_category(
    df: pd.DataFrame,
    *,
    category_column: str = config.CATEGORY_COLUMN,
    stack_column: str = config.VICTIM_COLUMN,
) -> pd.DataFrame:
    """Cross-tabulate incidents with one row per category and one column per stack value."""
    categories = _with_unknown(df[category_column])
    stacks = _with_unknown(df[stack_column])
    counts = pd.crosstab(categories, stacks)
    counts.index.name = category_column
    counts.columns.name = stack_column
    return counts


def plot_incidents_by_category(
    df: pd.DataFrame,
    *,
    category_column: str = config.CATEGORY_COLUMN,
    stack_column: str = config.VICTIM_COLUMN,
) -> Figure:
    counts = incident_counts_by_category(df, category_column=category_column, stack_column=stack_column)
    fig = Figure(figsize=(10, 6), tight_layout=True)
    ax = fig.subplots()
    if counts.empty:
        ax.text(0.5, 0.5, "No incidents", ha="center", va="center", transform=ax.transAxes)
    else:
        palette = colormaps["tab20"]
        positions = np.arange(len(counts.index))
        bottom = np.zeros(len(counts.index))
        for index, column in enumerate(counts.columns):
            heights = counts[column].to_numpy(dtype=float)
            ax.bar(positions, heights, bottom=bottom, label=str(column), color=palette(index % palette.N))
            bottom += heights
        ax.set_xticks(positions)
        ax.set_xticklabels([str(label) for label in counts.index], rotation=45, ha="right")
        ax.legend(title=stack_column, bbox_to_anchor=(1.02, 1), loc="upper left")
    ax.set_title("Shooting Incidents by Borough and Victim Race")
    ax.set_xlabel("Borough")
    ax.set_ylabel("Incidents")
    return fig


def plot_incident_histogram(df: pd.DataFrame, *, column: str = "occur_year") -> Figure:
    if column not in df.columns:
        raise ValueError(f"Column {column!r} not found in incident data")
    values = pd.to_numeric(df[column], errors="coerce").dropna().astype(float)

    fig = Figure(figsize=(10, 6), tight_layout=True)
    ax = fig.subplots()
    if values.empty:
        ax.text(0.5, 0.5, "No incidents", ha="center", va="center", transform=ax.transAxes)
    else:
        low, high = int(values.min()), int(values.max())
        # One bin per integer value (year or hour)
        bins = list(range(low, high + 2))
        ax.hist(values, bins=bins, color="steelblue", edgecolor="white", align="left")
    ax.set_title(f"Shooting Incidents by {column.replace('_', ' ').title()}")
    ax.set_xlabel(column.replace("_", " ").title())
    ax.set_ylabel("Incidents")
    return fig


def plot_regression(table: SummaryTable, result: RegressionResult, *, target: Optional[str] = None) -> Figure:
    frame = table.to_frame()
    fig = Figure(figsize=(8, 6), tight_layout=True)
    ax = fig.subplots()
    ax.scatter(frame["total_count"], frame["matched_count"], color="darkred", zorder=3)
    for row in frame.itertuples():
        ax.annotate(
            row.category,
            (row.total_count, row.matched_count),
            textcoords="offset points",
            xytext=(5, 5),
            fontsize=9,
        )

    x_line = [frame["total_count"].min(), frame["total_count"].max()]
    ax.plot(
        x_line,
        result.predict(x_line),
        color="black",
        linestyle="--",
        label=f"y = {result.intercept:.2f} + {result.slope:.3f}x (R² = {result.r_squared:.3f})",
    )
    matched_label = f"Incidents with {target} victims" if target else "Matched incidents"
    ax.set_title("Matched vs. Total Incidents per Borough")
    ax.set_xlabel("Total incidents")
    ax.set_ylabel(matched_label)
    ax.legend(loc="upper left")
    return fig


def save_figure(fig: Figure, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150, bbox_inches="tight")
    logger.info("Saved chart to %s", path)
    return path


def render_report_charts(
    df: pd.DataFrame,
    table: SummaryTable,
    result: RegressionResult,
    *,
    output_dir: Path | str | None = None,
    target: Optional[str] = None,
) -> Dict[str, Path]:
    output_dir = Path(output_dir) if output_dir else config.DEFAULT_CHART_DIR
    return {
        "incidents_by_borough": save_figure(
            plot_incidents_by_category(df), output_dir / "incidents_by_borough.png"
        ),
        "incidents_by_year": save_figure(
            plot_incident_histogram(df), output_dir / "incidents_by_year.png"
        ),
        "regression": save_figure(
            plot_regression(table, result, target=target), output_dir / "regression.png"
        ),
    }


__all__ = [
    "incident_counts_by_category",
    "plot_incident_histogram",
    "plot_incidents_by_category",
    "plot_regression",
    "render_report_charts",
    "save_figure",
]
