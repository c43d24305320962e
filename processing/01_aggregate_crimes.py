"""
01_aggregate_crimes.py
----------------------
Reads the raw City of Chicago crime export, counts crimes per day
and per community area per year, and writes the two dashboard
inputs:

    data/crimeByDate.csv        Date, Crimes
    data/crimeByCommunity.csv   year, Community Area, Crimes

Raw files expected at:
    data/raw/**/*.csv   (recursive glob, any subfolder depth)

Download "Crimes - 2001 to Present" as CSV from the City of Chicago
Data Portal. Community area numbers are turned into names using the
boundaries in data/chitown.topojson.

Run from project root:
    python processing/01_aggregate_crimes.py
"""

import glob
import os
import sys

import pandas as pd

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.aggregate import (
    RAW_COLUMNS,
    clean_raw,
    community_counts,
    daily_counts,
    unmatched_areas,
)
from utils.constants import (
    CRIME_BY_COMMUNITY_PATH,
    CRIME_BY_DATE_PATH,
    MAP_PATH,
    RAW_DIR,
)
from utils.geo import area_name_lookup, load_communities
from utils.helpers import check_required_columns


# ── Helpers ───────────────────────────────────────────────────────

def find_raw_files(raw_dir: str) -> list:
    pattern = os.path.join(raw_dir, "**", "*.csv")
    files = glob.glob(pattern, recursive=True)
    if not files:
        raise FileNotFoundError(
            f"No crime CSV files found under {raw_dir}.\n"
            "Expected files matching: data/raw/**/*.csv\n"
            "Download from: https://data.cityofchicago.org/"
        )
    return files


def load_all(files: list) -> pd.DataFrame:
    frames = []
    for fp in sorted(files):
        try:
            df = pd.read_csv(fp, usecols=lambda c: c in RAW_COLUMNS, dtype=str)
        except Exception as e:
            print(f"  WARNING: could not read {fp}: {e}")
            continue
        if check_required_columns(df, RAW_COLUMNS, os.path.basename(fp)):
            continue
        frames.append(df)

    if not frames:
        raise RuntimeError("No files loaded successfully.")

    return pd.concat(frames, ignore_index=True)


def validate(clean: pd.DataFrame, by_date: pd.DataFrame, by_community: pd.DataFrame, area_names: dict):
    print(f"\n── Validation ───────────────────────────────")
    print(f"  Rows with a date:  {len(clean):,}")
    print(f"  Date range:        {by_date['Date'].min()} to {by_date['Date'].max()}")
    print(f"  Years:             {sorted(by_community['year'].unique().tolist())}")
    print(f"  Missing area:      {clean['area'].isna().sum():,}")

    unmatched = unmatched_areas(clean, area_names)
    if unmatched:
        print(f"  WARNING - area numbers with no boundary: {unmatched}")
    else:
        print(f"  Community areas:   all matched")


# ── Main ──────────────────────────────────────────────────────────

def main():
    print("01_aggregate_crimes.py")
    print("=" * 50)

    print(f"Searching for raw crime files in {RAW_DIR}...")
    files = find_raw_files(RAW_DIR)
    print(f"Found {len(files)} files")

    print("Loading and concatenating...")
    raw = load_all(files)
    print(f"  {len(raw):,} raw rows loaded")

    print("Cleaning...")
    clean = clean_raw(raw)
    dropped = len(raw) - len(clean)
    if dropped:
        print(f"  WARNING: {dropped:,} rows dropped with an unparseable date")

    print(f"Loading community boundaries from {MAP_PATH}...")
    area_names = area_name_lookup(load_communities(MAP_PATH))
    print(f"  {len(area_names)} community areas")

    print("Counting...")
    by_date = daily_counts(clean)
    by_community = community_counts(clean, area_names)

    validate(clean, by_date, by_community, area_names)

    os.makedirs(os.path.dirname(CRIME_BY_DATE_PATH), exist_ok=True)
    by_date.to_csv(CRIME_BY_DATE_PATH, index=False)
    print(f"\n✓ Written to {CRIME_BY_DATE_PATH} ({len(by_date):,} days)")
    by_community.to_csv(CRIME_BY_COMMUNITY_PATH, index=False)
    print(f"✓ Written to {CRIME_BY_COMMUNITY_PATH} ({len(by_community):,} rows)")


if __name__ == "__main__":
    main()
