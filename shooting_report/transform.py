"""Cleaning utilities for the raw shooting incident export."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

import pandas as pd

from . import config

logger = logging.getLogger(__name__)


@dataclass
class CleaningResult:
    records_processed: int
    records_output: int
    output_path: Path


TRUTHY_FLAGS = {"TRUE", "Y", "YES", "1"}


def load_raw_incidents(path: Path | str | None = None) -> pd.DataFrame:
    """Read the raw CSV export with every column kept as text.

    Default NA parsing is disabled so that :func:`normalize_missing` is the only
    place where a raw value becomes missing.
    """
    raw_path = Path(path) if path else config.DEFAULT_RAW_CSV_PATH
    if not raw_path.exists():
        raise FileNotFoundError(f"Raw incident file not found: {raw_path}")
    return pd.read_csv(raw_path, dtype=str, keep_default_na=False)


def select_columns(df: pd.DataFrame, columns: Iterable[str] = config.KEPT_COLUMNS) -> pd.DataFrame:
    missing = [column for column in config.REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Incident data is missing required columns: {', '.join(missing)}")
    kept = [column for column in columns if column in df.columns]
    dropped = len(df.columns) - len(kept)
    if dropped:
        logger.debug("Dropping %s unused columns", dropped)
    return df.loc[:, kept].copy()


def normalize_missing(series: pd.Series) -> pd.Series:
    """Map sentinel strings such as ``"(null)"`` or ``"UNKNOWN"`` to ``pd.NA``."""
    stripped = series.astype("string").str.strip()
    is_sentinel = stripped.str.upper().isin(config.MISSING_SENTINELS).fillna(False).astype(bool)
    return stripped.mask(is_sentinel, pd.NA)


def parse_occurrence(df: pd.DataFrame) -> pd.DataFrame:
    if "OCCUR_DATE" not in df.columns:
        logger.debug("No OCCUR_DATE column; skipping date parsing")
        return df

    dates = pd.to_datetime(df["OCCUR_DATE"], format="%m/%d/%Y", errors="coerce")
    if "OCCUR_TIME" in df.columns:
        times = pd.to_datetime(df["OCCUR_TIME"], format="%H:%M:%S", errors="coerce")
        # Rows without a usable time keep midnight of the occurrence date
        offset = (times - times.dt.normalize()).fillna(pd.Timedelta(0))
        df["occur_hour"] = times.dt.hour.astype("Int64")
    else:
        offset = pd.Timedelta(0)
        df["occur_hour"] = pd.Series(pd.NA, index=df.index, dtype="Int64")

    df["occurred_at"] = dates + offset
    df["occur_year"] = dates.dt.year.astype("Int64")

    unparsed = int(dates.isna().sum())
    if unparsed:
        logger.warning("Could not parse %s occurrence dates", unparsed)
    return df


def occurrence_year_range(df: pd.DataFrame) -> Optional[Tuple[int, int]]:
    """Return ``(first_year, last_year)``, or ``None`` when no date parsed."""
    if "occur_year" not in df.columns:
        return None
    years = df["occur_year"].dropna()
    if years.empty:
        return None
    return int(years.min()), int(years.max())


def clean_incidents(df: pd.DataFrame) -> pd.DataFrame:
    df = select_columns(df)

    for column in config.TEXT_COLUMNS:
        if column in df.columns:
            df[column] = normalize_missing(df[column])

    for column in config.NUMERIC_COLUMNS:
        if column in df.columns:
            df[column] = pd.to_numeric(df[column], errors="coerce")

    if "STATISTICAL_MURDER_FLAG" in df.columns:
        flags = df["STATISTICAL_MURDER_FLAG"].astype("string").str.strip().str.upper()
        df["STATISTICAL_MURDER_FLAG"] = flags.isin(TRUTHY_FLAGS).fillna(False).astype(bool)

    df = parse_occurrence(df)
    return df.reset_index(drop=True)


def build_clean_dataset(
    raw_path: Path | str | None = None,
    *,
    output_path: Path | str | None = None,
) -> CleaningResult:
    output_path = Path(output_path) if output_path else config.DEFAULT_CLEAN_PATH
    output_path.parent.mkdir(parents=True, exist_ok=True)

    raw = load_raw_incidents(raw_path)
    if raw.empty:
        logger.warning("Raw incident file is empty. Skipping cleaning.")
        return CleaningResult(records_processed=0, records_output=0, output_path=output_path)

    cleaned = clean_incidents(raw)
    cleaned.to_parquet(output_path, index=False)
    logger.info("Wrote cleaned incidents to %s (%s rows)", output_path, len(cleaned))
    return CleaningResult(
        records_processed=len(raw),
        records_output=len(cleaned),
        output_path=output_path,
    )


def load_clean_incidents(path: Path | str | None = None) -> pd.DataFrame:
    clean_path = Path(path) if path else config.DEFAULT_CLEAN_PATH
    if not clean_path.exists():
        raise FileNotFoundError(
            f"Cleaned dataset not found: {clean_path}. Run the clean stage first."
        )
    return pd.read_parquet(clean_path)


__all__ = [
    "CleaningResult",
    "build_clean_dataset",
    "clean_incidents",
    "load_clean_incidents",
    "load_raw_incidents",
    "normalize_missing",
    "occurrence_year_range",
    "parse_occurrence",
    "select_columns",
]
