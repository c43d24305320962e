import streamlit as st

from sections import community_map, line_graph
from utils.constants import DEFAULT_YEAR, LINE_FREQUENCIES
from utils.data_loaders import load_prepared_data
from utils.prepare import year_options

st.set_page_config(
    page_title="Chicago Crime Map",
    page_icon="🗺️",
    layout="wide"
)

# ── Data loading ──────────────────────────────────────────────────

data  = load_prepared_data()
years = year_options(data.crime_by_date)

if not years:
    st.error("crimeByDate.csv has no rows with a valid date.")
    st.stop()

# ── Sidebar ───────────────────────────────────────────────────────

st.sidebar.title("Chicago Crime Map")

default_index = years.index(DEFAULT_YEAR) if DEFAULT_YEAR in years else len(years) - 1
year = st.sidebar.selectbox("Year", years, index=default_index, key="year")
if DEFAULT_YEAR not in years:
    st.sidebar.warning(f"No data for {DEFAULT_YEAR}; showing {years[-1]} by default.")

frequency = st.sidebar.radio("Line chart", list(LINE_FREQUENCIES), index=0)

st.sidebar.caption(
    "Source: City of Chicago, Crimes 2001 to present. "
    "Community area boundaries: City of Chicago Data Portal."
)

# ── Page ──────────────────────────────────────────────────────────

st.title(f"Crime in Chicago, {year}")
st.markdown("""
Recorded crime across Chicago's 77 community areas. Pick a year in the
sidebar to update the map and the line chart together.
""")

community_map.render(data.crime_by_community, data.map, year)

st.divider()

line_graph.render(data.crime_by_date, year, LINE_FREQUENCIES[frequency])
