"""Configuration constants for the shooting incident report pipeline."""
from __future__ import annotations

from pathlib import Path

# CSV export of the NYPD Shooting Incident Data (Historic) dataset
DATASET_URL: str = "https://data.cityofnewyork.us/api/views/833y-fsy8/rows.csv?accessType=DOWNLOAD"

# Directory for raw downloads
RAW_DATA_DIR: Path = Path("data/raw")

# Directory for derived datasets (cleaned incidents, summary tables)
DERIVED_DATA_DIR: Path = Path("data/derived")

# Directory for rendered charts
DEFAULT_CHART_DIR: Path = Path("data/charts")

DEFAULT_RAW_CSV_PATH: Path = RAW_DATA_DIR / "shooting_incidents.csv"
DEFAULT_CLEAN_PATH: Path = DERIVED_DATA_DIR / "incidents_clean.parquet"
DEFAULT_SUMMARY_PATH: Path = DERIVED_DATA_DIR / "borough_summary.parquet"

# Timeout (seconds) for HTTP requests to the Open Data endpoint
HTTP_TIMEOUT: int = 120

# Bytes per chunk when streaming the CSV to disk
DOWNLOAD_CHUNK_SIZE: int = 1 << 16

# Grouping field and victim field used by the summary table
CATEGORY_COLUMN: str = "BORO"
VICTIM_COLUMN: str = "VIC_RACE"
DEFAULT_TARGET_VALUE: str = "BLACK"

# Display label for the bucket of records with no category
UNKNOWN_LABEL: str = "UNKNOWN"

# Raw strings that stand for a missing value. Compared upper-cased after stripping.
MISSING_SENTINELS = frozenset(
    {
        "",
        "UNKNOWN",
        "(NULL)",
        "NULL",
        "NONE",
        "NA",
        "N/A",
        "U",
    }
)

# Columns kept from the source CSV. Everything else is dropped during cleaning.
KEPT_COLUMNS: tuple[str, ...] = (
    "INCIDENT_KEY",
    "OCCUR_DATE",
    "OCCUR_TIME",
    "BORO",
    "PRECINCT",
    "LOCATION_DESC",
    "STATISTICAL_MURDER_FLAG",
    "PERP_AGE_GROUP",
    "PERP_SEX",
    "PERP_RACE",
    "VIC_AGE_GROUP",
    "VIC_SEX",
    "VIC_RACE",
    "Latitude",
    "Longitude",
)

REQUIRED_COLUMNS: tuple[str, ...] = (CATEGORY_COLUMN, VICTIM_COLUMN)

# Columns that go through missing-value normalization
TEXT_COLUMNS: tuple[str, ...] = (
    "BORO",
    "LOCATION_DESC",
    "PERP_AGE_GROUP",
    "PERP_SEX",
    "PERP_RACE",
    "VIC_AGE_GROUP",
    "VIC_SEX",
    "VIC_RACE",
)

NUMERIC_COLUMNS: tuple[str, ...] = ("PRECINCT", "Latitude", "Longitude")
