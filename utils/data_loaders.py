"""
utils/data_loaders.py
---------------------
Data loading for the dashboard.

read_inputs() reads the three input files and raises on anything
missing, so processing scripts and tests can use it directly.
load_prepared_data() wraps it for the dashboard: it is decorated
with @st.cache_data so the files are only read and reshaped once,
and it is the one place a load failure is reported to the user.
"""

import os

import pandas as pd
import streamlit as st

from utils.constants import (
    CRIME_BY_COMMUNITY_COLUMNS,
    CRIME_BY_COMMUNITY_PATH,
    CRIME_BY_DATE_COLUMNS,
    CRIME_BY_DATE_PATH,
    MAP_PATH,
)
from utils.geo import load_communities
from utils.helpers import check_required_columns
from utils.prepare import PreparedData, prepare_data


def _read_csv(path: str, required: list, label: str) -> pd.DataFrame:
    if not os.path.exists(path):
        raise FileNotFoundError(f"{label} not found at {path}")
    # Keep every column as text; parsing happens in utils.prepare.
    df = pd.read_csv(path, dtype=str)
    missing = check_required_columns(df, required, label)
    if missing:
        raise ValueError(f"{label} is missing columns: {missing}. Found: {list(df.columns)}")
    return df


def read_inputs(
    by_date_path: str = CRIME_BY_DATE_PATH,
    by_community_path: str = CRIME_BY_COMMUNITY_PATH,
    map_path: str = MAP_PATH,
) -> tuple:
    """
    Read crimeByDate.csv, crimeByCommunity.csv and the community
    boundaries, in that order.

    Raises:
        FileNotFoundError: an input file is absent.
        ValueError:        a CSV lacks a required column, or the map
                           has no community property.
    """
    by_date = _read_csv(by_date_path, CRIME_BY_DATE_COLUMNS, "crimeByDate.csv")
    by_community = _read_csv(by_community_path, CRIME_BY_COMMUNITY_COLUMNS, "crimeByCommunity.csv")
    communities = load_communities(map_path)
    return by_date, by_community, communities


@st.cache_data
def load_prepared_data() -> PreparedData:
    try:
        return prepare_data(*read_inputs())
    except FileNotFoundError as e:
        st.error(
            f"{e}. "
            "Run processing/01_aggregate_crimes.py first, and make sure "
            "data/chitown.topojson is in place."
        )
        st.stop()
    except Exception as e:
        st.error(f"Could not load crime data: {e}")
        st.stop()
