"""Interactive viewer for the NYPD shooting incident report."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import pandas as pd
import pydeck as pdk
import streamlit as st

from shooting_report import config
from shooting_report.aggregate import aggregate_frame
from shooting_report.charts import plot_incident_histogram, plot_incidents_by_category, plot_regression
from shooting_report.regression import InsufficientDataError, fit_summary_regression
from shooting_report.transform import occurrence_year_range


def load_clean_data(path: Optional[str] = None) -> pd.DataFrame:
    dataset_path = Path(path) if path else config.DEFAULT_CLEAN_PATH
    if not dataset_path.exists():
        st.warning(
            "Cleaned dataset not found. Run `python -m shooting_report.cli clean` to build it first."
        )
        return pd.DataFrame()
    return pd.read_parquet(dataset_path)


def main() -> None:
    st.set_page_config(page_title="NYPD Shooting Incident Report", layout="wide")

    st.markdown(
        """
        <style>
        [data-testid="stSidebar"] .block-container {
            padding-top: 2rem;
        }
        .report-header {
            padding: 0.75rem 1rem;
            border-radius: 0.75rem;
            background: linear-gradient(120deg, rgba(123,24,24,0.85), rgba(48,9,9,0.95));
            color: #f5f7fb;
        }
        .report-header h1 {
            font-size: 2.4rem;
            margin-bottom: 0.2rem;
        }
        .report-header p {
            margin-bottom: 0;
            opacity: 0.85;
        }
        </style>
        <div class="report-header">
            <h1>NYPD Shooting Incidents</h1>
            <p>Incidents per borough, their distribution over time, and how the count of incidents
            with a given victim race tracks the borough total.</p>
        </div>
        """,
        unsafe_allow_html=True,
    )

    data = load_clean_data()
    if data.empty:
        st.stop()

    boroughs = sorted(data[config.CATEGORY_COLUMN].dropna().unique().tolist())
    victim_values = sorted(data[config.VICTIM_COLUMN].dropna().unique().tolist())
    year_bounds = occurrence_year_range(data)
    if year_bounds is None:
        st.warning("No incident in the cleaned dataset has a parseable occurrence date.")
        st.stop()
    year_min, year_max = year_bounds

    with st.sidebar:
        st.header("Filters")
        boroughs_selected = st.multiselect("Boroughs", options=boroughs, default=boroughs)
        if year_min == year_max:
            year_range = (year_min, year_max)
            st.caption(f"All dated incidents occurred in {year_min}.")
        else:
            year_range = st.slider("Year", min_value=year_min, max_value=year_max, value=(year_min, year_max))
        default_index = victim_values.index(config.DEFAULT_TARGET_VALUE) if config.DEFAULT_TARGET_VALUE in victim_values else 0
        target = st.selectbox("Victim race counted as a match", options=victim_values, index=default_index)
        include_unknown = st.checkbox("Include incidents with unknown borough", value=True)
        st.divider()
        st.caption("Missing values in the source are grouped under UNKNOWN.")

    year_mask = (data["occur_year"] >= year_range[0]) & (data["occur_year"] <= year_range[1])
    filtered = data[year_mask.fillna(False).astype(bool)]
    borough_mask = filtered[config.CATEGORY_COLUMN].isin(boroughs_selected)
    if include_unknown:
        borough_mask = borough_mask | filtered[config.CATEGORY_COLUMN].isna()
    filtered = filtered[borough_mask.fillna(False).astype(bool)]

    if filtered.empty:
        st.warning("No incidents match the selected filters.")
        st.stop()

    table = aggregate_frame(filtered, target=target)

    metric_cols = st.columns(3)
    with metric_cols[0]:
        st.metric("Incidents in view", f"{table.total_records():,}")
    with metric_cols[1]:
        matched_total = sum(entry.matched_count for entry in table)
        st.metric(f"{target.title()} victims", f"{matched_total:,}")
    with metric_cols[2]:
        if "STATISTICAL_MURDER_FLAG" in filtered.columns:
            st.metric("Statistical murders", f"{int(filtered['STATISTICAL_MURDER_FLAG'].sum()):,}")
        else:
            st.metric("Statistical murders", "–")

    bar_tab, hist_tab, regression_tab, map_tab = st.tabs(
        ["By Borough", "Over Time", "Regression", "Map"]
    )

    with bar_tab:
        st.pyplot(plot_incidents_by_category(filtered))

    with hist_tab:
        column = st.radio("Histogram of", options=["occur_year", "occur_hour"], horizontal=True)
        st.pyplot(plot_incident_histogram(filtered, column=column))

    with regression_tab:
        st.dataframe(table.to_frame(), use_container_width=True)
        try:
            result = fit_summary_regression(table)
        except InsufficientDataError as exc:
            st.info(f"Regression unavailable: {exc}")
        else:
            st.pyplot(plot_regression(table, result, target=target))
            st.table(pd.Series(result.as_dict(), name="value"))

    with map_tab:
        mapbox_token = None
        try:
            mapbox_token = st.secrets.get("mapbox_token")  # type: ignore[attr-defined]
        except Exception:
            mapbox_token = None
        mapbox_token = mapbox_token or os.environ.get("MAPBOX_API_KEY")

        points = filtered.dropna(subset=["Latitude", "Longitude"])
        if points.empty:
            st.info("No incident coordinates for the selected filters.")
        else:
            heatmap_layer = pdk.Layer(
                "HeatmapLayer",
                data=points[["Latitude", "Longitude"]],
                get_position="[Longitude, Latitude]",
                radiusPixels=40,
                opacity=0.9,
            )
            layers = [heatmap_layer]
            map_style = None
            if mapbox_token:
                pdk.settings.mapbox_api_key = mapbox_token
                map_style = "mapbox://styles/mapbox/dark-v11"
            else:
                tile_layer = pdk.Layer(
                    "TileLayer",
                    data="https://tile.openstreetmap.org/{z}/{x}/{y}.png",
                    min_zoom=0,
                    max_zoom=19,
                    tile_size=256,
                )
                layers = [tile_layer, heatmap_layer]

            deck = pdk.Deck(
                map_style=map_style,
                initial_view_state=pdk.ViewState(
                    latitude=float(points["Latitude"].mean()),
                    longitude=float(points["Longitude"].mean()),
                    zoom=10,
                    pitch=30,
                ),
                layers=layers,
            )
            st.pydeck_chart(deck, use_container_width=True)


if __name__ == "__main__":
    main()
