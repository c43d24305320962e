"""
sections/line_graph.py
----------------------
'Crime over the year' section — headline figures for the selected
year and the line chart of crime counts by date.
"""

import streamlit as st

from utils.charts import crime_line_chart
from utils.constants import CHART_CONFIG
from utils.helpers import busiest_day, fmt_count, fmt_rate
from utils.prepare import YearNotFoundError, resample_series, select_year


def render(crime_by_date: dict, year: str, freq: str = "D"):
    st.subheader(f"Crime over {year}")

    try:
        daily = select_year(crime_by_date, year)
    except YearNotFoundError as e:
        st.warning(str(e))
        return

    # ── Headline metrics ──────────────────────────────────────────
    total = daily["value"].sum()
    peak  = busiest_day(daily)

    col1, col2, col3 = st.columns(3)
    col1.metric("Crimes recorded", fmt_count(total))
    col2.metric("Daily average",   fmt_rate(daily["value"].mean()))
    if peak is not None:
        col3.metric(
            "Busiest day",
            peak["date"].strftime("%d %b"),
            f"{fmt_count(peak['value'])} crimes",
            delta_color="off",
        )

    # ── Line chart ────────────────────────────────────────────────
    series = resample_series(daily, freq)
    fig = crime_line_chart(series, year)
    st.plotly_chart(fig, use_container_width=False, config=CHART_CONFIG, key="crime_line")

    if freq != "D":
        st.caption("Counts are summed over each period; partial periods at the year edges are shorter.")
