"""
utils/helpers.py
----------------
Small general-purpose helper functions used across sections.
These are pure Python with no Streamlit or Plotly dependencies
so they can also be used safely inside processing scripts.

Import example:
    from utils.helpers import fmt_count, check_required_columns
"""

import pandas as pd


# ── DataFrame helpers ─────────────────────────────────────────────

def count_lookup(year_counts: pd.DataFrame) -> dict:
    """
    {community: crime_count} for one year of community counts.

    Returns an empty dict when the DataFrame is empty or lacks the
    expected columns, so callers can look up with .get().
    """
    if year_counts.empty or not {"community", "crime_count"} <= set(year_counts.columns):
        return {}
    return dict(zip(year_counts["community"], year_counts["crime_count"]))


def top_communities(year_counts: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """The `n` communities with the highest counts, highest first."""
    return (
        year_counts.dropna(subset=["crime_count"])
        .sort_values("crime_count", ascending=False, kind="stable")
        .head(n)
        .reset_index(drop=True)
    )


def busiest_day(series: pd.DataFrame) -> pd.Series | None:
    """
    Return the row with the highest value from a date series.

    Returns None rather than raising if the series is empty or has
    no numeric values.
    """
    values = series["value"].dropna() if "value" in series.columns else pd.Series(dtype=float)
    if values.empty:
        return None
    return series.loc[values.idxmax()]


# ── Selection helpers ─────────────────────────────────────────────

def clicked_community(selection) -> str | None:
    """
    Community name from a Streamlit plotly_chart selection state.

    Takes the first selected point and reads its customdata, falling
    back to the choropleth `location`. Returns None when nothing is
    selected.
    """
    if not selection:
        return None
    points = (selection.get("selection") or {}).get("points") or []
    for point in points:
        customdata = point.get("customdata")
        if customdata:
            return customdata[0] if isinstance(customdata, (list, tuple)) else customdata
        if point.get("location"):
            return point["location"]
    return None


# ── Formatting helpers ────────────────────────────────────────────

def fmt_count(value: float | int) -> str:
    """Format a number with thousands separator."""
    return f"{int(value):,}"


def fmt_rate(value: float, decimals: int = 1) -> str:
    """Format a rate (e.g. per day) to a given number of decimal places."""
    return f"{value:,.{decimals}f}"


# ── Validation helpers ────────────────────────────────────────────

def check_required_columns(
    df: pd.DataFrame,
    required: list[str],
    label: str = "DataFrame",
) -> list[str]:
    """
    Check that all required columns are present.

    Returns a list of missing column names (empty list if all present).
    Useful for giving clear error messages in processing scripts.

    Args:
        df:       DataFrame to check.
        required: List of expected column names.
        label:    Human-readable name for the DataFrame, used in messages.

    Returns:
        List of missing column names.
    """
    missing = [c for c in required if c not in df.columns]
    if missing:
        print(f"  WARNING [{label}]: missing columns: {missing}")
    return missing
