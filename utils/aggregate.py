"""
utils/aggregate.py
------------------
Turns the raw City of Chicago crime export into the two dashboard
inputs: daily counts (crimeByDate.csv) and yearly counts per
community area (crimeByCommunity.csv).

Used by processing/01_aggregate_crimes.py; kept here so the logic
can be tested without the raw files.
"""

import pandas as pd

from utils.constants import DATE_FORMAT, RAW_DATE_FORMAT

RAW_COLUMNS = ["Date", "Community Area"]


def clean_raw(df: pd.DataFrame) -> pd.DataFrame:
    """
    Parse the raw Date and Community Area columns.

    Rows with an unparseable date are dropped. Community Area is kept
    as a nullable integer area number; rows without one stay in the
    daily counts but are left out of the community counts.
    """
    out = pd.DataFrame({
        "datetime": pd.to_datetime(df["Date"], format=RAW_DATE_FORMAT, errors="coerce"),
        "area": pd.to_numeric(df["Community Area"], errors="coerce").astype("Int64"),
    })
    out = out.dropna(subset=["datetime"])
    out["date"] = out["datetime"].dt.normalize()
    out["year"] = out["datetime"].dt.year
    return out.reset_index(drop=True)


def daily_counts(clean: pd.DataFrame) -> pd.DataFrame:
    """One row per date: Date (YYYY-MM-DD) and Crimes."""
    counts = clean.groupby("date").size().reset_index(name="Crimes")
    counts["Date"] = counts["date"].dt.strftime(DATE_FORMAT)
    return counts[["Date", "Crimes"]]


def community_counts(clean: pd.DataFrame, area_names: dict) -> pd.DataFrame:
    """
    One row per year and community: year, Community Area (name), Crimes.

    Area numbers with no name in `area_names` are dropped; the caller
    can report them with unmatched_areas().
    """
    located = clean.dropna(subset=["area"])
    counts = located.groupby(["year", "area"]).size().reset_index(name="Crimes")
    counts["Community Area"] = counts["area"].map(
        lambda a: area_names.get(int(a))
    )
    counts = counts.dropna(subset=["Community Area"])
    return counts[["year", "Community Area", "Crimes"]].reset_index(drop=True)


def unmatched_areas(clean: pd.DataFrame, area_names: dict) -> list:
    areas = clean["area"].dropna().astype(int).unique()
    return sorted(int(a) for a in areas if int(a) not in area_names)
