"""Shared fixtures for the shooting report tests."""

from __future__ import annotations

from pathlib import Path

import pytest

RAW_HEADER = (
    "INCIDENT_KEY,OCCUR_DATE,OCCUR_TIME,BORO,LOC_OF_OCCUR_DESC,PRECINCT,LOCATION_DESC,"
    "STATISTICAL_MURDER_FLAG,PERP_AGE_GROUP,PERP_SEX,PERP_RACE,VIC_AGE_GROUP,VIC_SEX,VIC_RACE,"
    "Latitude,Longitude,Lon_Lat"
)

RAW_ROWS = [
    "1,01/05/2019,23:10:00,BRONX,OUTSIDE,44,(null),true,25-44,M,BLACK,18-24,M,BLACK,40.83,-73.91,POINT (-73.91 40.83)",
    "2,02/11/2019,01:30:00,BRONX,,46,MULTI DWELL - APT BUILD,false,(null),(null),(null),25-44,M,WHITE HISPANIC,40.85,-73.90,POINT (-73.90 40.85)",
    "3,03/14/2020,14:00:00,BROOKLYN,OUTSIDE,75,STREET,false,18-24,M,BLACK,18-24,M,BLACK,40.67,-73.88,POINT (-73.88 40.67)",
    "4,07/04/2020,22:45:00,BROOKLYN,INSIDE,73,NONE,true,UNKNOWN,U,UNKNOWN,25-44,F,BLACK,40.66,-73.91,POINT (-73.91 40.66)",
    "5,08/20/2020,03:05:00,BROOKLYN,,79,,false,,,,45-64,M,BLACK,40.68,-73.95,POINT (-73.95 40.68)",
    "6,09/09/2021,18:20:00,QUEENS,OUTSIDE,113,STREET,false,25-44,M,WHITE,25-44,M,WHITE,40.68,-73.77,POINT (-73.77 40.68)",
    "7,10/31/2021,not a time,QUEENS,OUTSIDE,105,STREET,false,18-24,M,BLACK,18-24,M,UNKNOWN,,,",
    "8,12/01/2021,12:00:00,(null),OUTSIDE,1,STREET,false,18-24,M,BLACK,18-24,M,ASIAN / PACIFIC ISLANDER,40.72,-74.00,POINT (-74.00 40.72)",
    "9,13/45/2022,09:15:00,MANHATTAN,OUTSIDE,25,STREET,false,25-44,M,BLACK,25-44,M,BLACK,40.80,-73.94,POINT (-73.94 40.80)",
]


@pytest.fixture
def raw_csv(tmp_path: Path) -> Path:
    path = tmp_path / "raw" / "shooting_incidents.csv"
    path.parent.mkdir(parents=True)
    path.write_text("\n".join([RAW_HEADER, *RAW_ROWS]) + "\n", encoding="utf-8")
    return path
