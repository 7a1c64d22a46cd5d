"""Tests for cleaning the raw incident export."""

from __future__ import annotations

import pandas as pd
import pytest

from shooting_report import config
from shooting_report.transform import (
    build_clean_dataset,
    clean_incidents,
    load_clean_incidents,
    load_raw_incidents,
    normalize_missing,
    occurrence_year_range,
    parse_occurrence,
    select_columns,
)


def test_normalize_missing_maps_sentinels_to_na() -> None:
    series = pd.Series(["BLACK", " (null) ", "UNKNOWN", "", "unknown", "Null", "WHITE HISPANIC", "U"])
    result = normalize_missing(series)
    assert result.isna().tolist() == [False, True, True, True, True, True, False, True]
    assert result.iloc[0] == "BLACK"
    assert result.iloc[6] == "WHITE HISPANIC"


def test_normalize_missing_strips_whitespace() -> None:
    result = normalize_missing(pd.Series(["  BRONX  "]))
    assert result.iloc[0] == "BRONX"


def test_select_columns_requires_grouping_and_victim_fields() -> None:
    with pytest.raises(ValueError, match="VIC_RACE"):
        select_columns(pd.DataFrame({"BORO": ["BRONX"]}))


def test_select_columns_drops_unknown_columns() -> None:
    df = pd.DataFrame({"BORO": ["BRONX"], "VIC_RACE": ["BLACK"], "Lon_Lat": ["POINT"]})
    result = select_columns(df)
    assert list(result.columns) == ["BORO", "VIC_RACE"]


def test_parse_occurrence_combines_date_and_time() -> None:
    df = pd.DataFrame(
        {
            "OCCUR_DATE": ["01/05/2019", "02/30/2019", "03/01/2020"],
            "OCCUR_TIME": ["23:10:00", "10:00:00", "garbage"],
        }
    )
    result = parse_occurrence(df)
    assert result.loc[0, "occurred_at"] == pd.Timestamp("2019-01-05 23:10:00")
    assert pd.isna(result.loc[1, "occurred_at"])
    assert result.loc[2, "occurred_at"] == pd.Timestamp("2020-03-01")
    assert result["occur_year"].tolist()[0] == 2019
    assert pd.isna(result.loc[1, "occur_year"])
    assert result.loc[0, "occur_hour"] == 23
    assert pd.isna(result.loc[2, "occur_hour"])


def test_occurrence_year_range() -> None:
    df = parse_occurrence(pd.DataFrame({"OCCUR_DATE": ["01/05/2019", "bad", "12/31/2021"]}))
    assert occurrence_year_range(df) == (2019, 2021)


def test_occurrence_year_range_without_parsed_dates() -> None:
    df = parse_occurrence(pd.DataFrame({"OCCUR_DATE": ["13/45/2022", ""]}))
    assert occurrence_year_range(df) is None
    assert occurrence_year_range(pd.DataFrame({"BORO": ["BRONX"]})) is None


def test_clean_incidents_normalizes_columns(raw_csv) -> None:
    cleaned = clean_incidents(load_raw_incidents(raw_csv))

    assert "Lon_Lat" not in cleaned.columns
    assert len(cleaned) == 9
    assert cleaned["BORO"].isna().sum() == 1
    assert cleaned["VIC_RACE"].isna().sum() == 1
    assert cleaned["PERP_RACE"].isna().sum() == 3
    assert cleaned["STATISTICAL_MURDER_FLAG"].tolist().count(True) == 2
    assert cleaned["Latitude"].isna().sum() == 1
    assert cleaned["PRECINCT"].iloc[0] == 44


def test_load_raw_incidents_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_raw_incidents(tmp_path / "absent.csv")


def test_build_clean_dataset_round_trip(raw_csv, tmp_path) -> None:
    output_path = tmp_path / "derived" / "clean.parquet"
    result = build_clean_dataset(raw_csv, output_path=output_path)

    assert result.records_processed == 9
    assert result.records_output == 9
    assert result.output_path == output_path

    loaded = load_clean_incidents(output_path)
    assert set(config.REQUIRED_COLUMNS).issubset(loaded.columns)
    assert {"occurred_at", "occur_year", "occur_hour"}.issubset(loaded.columns)


def test_build_clean_dataset_skips_empty_file(tmp_path) -> None:
    raw_path = tmp_path / "empty.csv"
    raw_path.write_text("BORO,VIC_RACE\n", encoding="utf-8")
    output_path = tmp_path / "clean.parquet"

    result = build_clean_dataset(raw_path, output_path=output_path)

    assert result.records_output == 0
    assert not output_path.exists()


def test_load_clean_incidents_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_clean_incidents(tmp_path / "absent.parquet")
