"""Tests for chart rendering."""

from __future__ import annotations

import pandas as pd
import pytest
from matplotlib.figure import Figure

from shooting_report import config
from shooting_report.aggregate import aggregate_frame
from shooting_report.charts import (
    incident_counts_by_category,
    plot_incident_histogram,
    plot_incidents_by_category,
    plot_regression,
    render_report_charts,
    save_figure,
)
from shooting_report.regression import fit_summary_regression
from shooting_report.transform import clean_incidents, load_raw_incidents


@pytest.fixture
def incidents(raw_csv) -> pd.DataFrame:
    return clean_incidents(load_raw_incidents(raw_csv))


def test_counts_by_category_include_unknown_bucket(incidents) -> None:
    counts = incident_counts_by_category(incidents)
    assert config.UNKNOWN_LABEL in counts.index
    assert config.UNKNOWN_LABEL in counts.columns
    assert counts.loc["BROOKLYN", "BLACK"] == 3
    assert int(counts.to_numpy().sum()) == len(incidents)


def test_plot_incidents_by_category_returns_figure(incidents) -> None:
    fig = plot_incidents_by_category(incidents)
    assert isinstance(fig, Figure)
    assert fig.axes[0].get_title() == "Shooting Incidents by Borough and Victim Race"


def test_plot_incident_histogram_requires_column(incidents) -> None:
    with pytest.raises(ValueError):
        plot_incident_histogram(incidents, column="not_a_column")


def test_plot_incident_histogram_handles_empty_frame() -> None:
    fig = plot_incident_histogram(pd.DataFrame({"occur_year": pd.Series([], dtype="Int64")}))
    assert isinstance(fig, Figure)


def test_save_figure_writes_png(incidents, tmp_path) -> None:
    path = save_figure(plot_incident_histogram(incidents, column="occur_hour"), tmp_path / "charts" / "hours.png")
    assert path.exists()
    assert path.read_bytes()[:4] == b"\x89PNG"


def test_render_report_charts(incidents, tmp_path) -> None:
    table = aggregate_frame(incidents)
    result = fit_summary_regression(table)

    fig = plot_regression(table, result, target="BLACK")
    assert fig.axes[0].get_ylabel() == "Incidents with BLACK victims"

    paths = render_report_charts(incidents, table, result, output_dir=tmp_path)
    assert set(paths) == {"incidents_by_borough", "incidents_by_year", "regression"}
    for path in paths.values():
        assert path.exists()


# ---------------------------------------------------------------------------
# Rendering leaves matplotlib's global state alone


def test_importing_charts_does_not_select_backend(monkeypatch) -> None:
    import importlib

    import matplotlib

    from shooting_report import charts

    def fail_use(*args, **kwargs):
        raise AssertionError("matplotlib.use called while importing charts")

    monkeypatch.setattr(matplotlib, "use", fail_use)
    importlib.reload(charts)


def test_figures_are_not_registered_with_pyplot(incidents, tmp_path) -> None:
    import matplotlib.pyplot as plt

    before = plt.get_fignums()
    table = aggregate_frame(incidents)
    render_report_charts(incidents, table, fit_summary_regression(table), output_dir=tmp_path)
    plot_incidents_by_category(incidents)

    assert plt.get_fignums() == before


def test_stacked_bars_sum_to_category_totals(incidents) -> None:
    fig = plot_incidents_by_category(incidents)
    ax = fig.axes[0]
    counts = incident_counts_by_category(incidents)

    tops = {}
    for patch in ax.patches:
        position = round(patch.get_x() + patch.get_width() / 2)
        tops[position] = max(tops.get(position, 0.0), patch.get_y() + patch.get_height())

    assert [tops[position] for position in sorted(tops)] == counts.sum(axis=1).astype(float).tolist()
    assert [label.get_text() for label in ax.get_xticklabels()] == [str(label) for label in counts.index]
