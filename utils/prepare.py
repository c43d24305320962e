"""
utils/prepare.py
----------------
Reshapes the raw dashboard inputs into the per-year groupings the
line chart and the community map are drawn from.

These are pure pandas functions with no Streamlit or Plotly
dependencies so they can also be used inside processing scripts
and tests.

Import example:
    from utils.prepare import prepare_data, select_year
"""

from typing import NamedTuple

import pandas as pd

from utils.constants import DATE_FORMAT, YEAR_FORMAT


class PreparedData(NamedTuple):
    crime_by_date: dict
    crime_by_community: dict
    map: object


class YearNotFoundError(KeyError):
    """Raised when a year is not present in a per-year grouping."""

    def __init__(self, year, available):
        self.year = year
        self.available = list(available)
        super().__init__(year)

    def __str__(self):
        return (
            f"No data for year {self.year!r}. "
            f"Available years: {', '.join(self.available) or 'none'}"
        )


# ── Crime by date ─────────────────────────────────────────────────

def parse_crime_by_date(df: pd.DataFrame) -> pd.DataFrame:
    """
    Parse the `Date` and `Crimes` columns of crimeByDate.csv.

    Malformed dates become NaT and missing or non-numeric counts
    become NaN. Rows are returned sorted by date, with NaT last.
    """
    parsed = df.copy()
    parsed["date"] = pd.to_datetime(parsed["Date"], format=DATE_FORMAT, errors="coerce")
    parsed["crime_count"] = pd.to_numeric(parsed["Crimes"], errors="coerce")
    return parsed.sort_values("date", kind="stable", na_position="last").reset_index(drop=True)


def nest_by_date(df: pd.DataFrame) -> dict:
    """
    Group parsed records by year, then by date, summing the counts.

    Returns an ordered {year: DataFrame} mapping, years ascending.
    Each DataFrame has columns key, date and value, ordered by date.
    Records whose date failed to parse belong to no year and are
    dropped by the grouping.
    """
    dated = df.dropna(subset=["date"])
    daily = (
        dated.groupby(dated["date"].dt.normalize())["crime_count"]
        .sum()
        .rename("value")
        .reset_index()
    )
    daily["key"] = daily["date"].dt.strftime(DATE_FORMAT)
    daily["year"] = daily["date"].dt.strftime(YEAR_FORMAT)

    nested = {}
    for year, group in daily.groupby("year", sort=True):
        nested[year] = group[["key", "date", "value"]].reset_index(drop=True)
    return nested


# ── Crime by community ────────────────────────────────────────────

def normalise_community(names: pd.Series) -> pd.Series:
    """Trim and upper-case community names so CSV rows match map features."""
    return names.astype("string").str.strip().str.upper()


def parse_crime_by_community(df: pd.DataFrame) -> pd.DataFrame:
    parsed = df.copy()
    parsed["community"] = normalise_community(parsed["Community Area"])
    parsed["crime_count"] = pd.to_numeric(parsed["Crimes"], errors="coerce")
    # Years may arrive as ints or floats depending on how the CSV was
    # written; the year key is always the plain four-digit string.
    year = pd.to_numeric(parsed["year"], errors="coerce")
    parsed["year"] = year.astype("Int64").astype("string")
    return parsed


def nest_by_year(df: pd.DataFrame) -> dict:
    """
    Group community records by year, keeping first-appearance order.

    Returns an ordered {year: DataFrame} mapping. Each DataFrame has
    columns community and crime_count; a community listed more than
    once in a year has its counts summed.
    """
    nested = {}
    for year, group in df.groupby("year", sort=False, dropna=True):
        nested[year] = (
            group.groupby("community", sort=False)["crime_count"]
            .sum(min_count=1)
            .reset_index()
        )
    return nested


# ── Entry point ───────────────────────────────────────────────────

def prepare_data(by_date: pd.DataFrame, by_community: pd.DataFrame, topology) -> PreparedData:
    """
    Transform the three inputs into the structures the charts consume.

    The geographic feature collection is passed through unchanged.
    """
    crime_by_date = nest_by_date(parse_crime_by_date(by_date))
    crime_by_community = nest_by_year(parse_crime_by_community(by_community))
    return PreparedData(crime_by_date, crime_by_community, topology)


def year_options(crime_by_date: dict) -> list:
    return list(crime_by_date.keys())


def select_year(groups: dict, year) -> pd.DataFrame:
    key = str(year)
    if key not in groups:
        raise YearNotFoundError(key, groups.keys())
    return groups[key]


def resample_series(series: pd.DataFrame, freq: str = "D") -> pd.DataFrame:
    """
    Re-aggregate one year's daily series.

    Args:
        series: DataFrame with date and value columns.
        freq:   'D' (unchanged), 'W' (weekly sums) or 'MS' (monthly sums).

    Weeks are 7-day bins counted from the first date of the series and
    labelled by their first day, so every key stays inside the year.
    """
    if freq == "D":
        return series
    if freq not in ("W", "MS"):
        raise ValueError(f"Unsupported frequency {freq!r}; expected 'D', 'W' or 'MS'")

    if freq == "W":
        resampler = series.set_index("date")["value"].resample("7D", origin="start")
    else:
        resampler = series.set_index("date")["value"].resample(freq)
    resampled = resampler.sum().reset_index()
    resampled["key"] = resampled["date"].dt.strftime(DATE_FORMAT)
    return resampled[["key", "date", "value"]]
