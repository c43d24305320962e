"""
sections/community_map.py
-------------------------
'Crime by community' section — choropleth of community area counts
for the selected year, its colour legend, click-to-zoom on a
community, and a ranking of the highest-crime communities.

The zoomed community lives in st.session_state under FOCUS_KEY so
that a click on the map and the 'Zoom to community' box drive the
same state.
"""

import pandas as pd
import streamlit as st

from utils.charts import colour_legend_chart, community_map_chart, top_communities_chart
from utils.constants import (
    ALL_COMMUNITIES,
    CHART_CONFIG,
    MAP_CHART_CONFIG,
    TOP_COMMUNITY_COUNT,
)
from utils.geo import community_bounds, community_centroids, full_bounds, to_geojson
from utils.helpers import clicked_community, count_lookup, fmt_count, top_communities
from utils.prepare import YearNotFoundError, select_year
from utils.scales import crime_colour_scale, toggle_active, zoom_to_bounds

MAP_KEY   = "community_map"
FOCUS_KEY = "focus_community"


@st.cache_data
def _map_geometry(_communities, cache_key: int):
    """GeoJSON, centroids and bounds; the GeoDataFrame is hashed by cache_key."""
    return (
        to_geojson(_communities),
        community_centroids(_communities),
        full_bounds(_communities),
    )


def _on_map_select():
    """Click handler: zoom to the clicked community, or reset."""
    clicked = clicked_community(st.session_state.get(MAP_KEY))
    current = st.session_state.get(FOCUS_KEY, ALL_COMMUNITIES)
    active = None if current == ALL_COMMUNITIES else current
    nxt = toggle_active(active, clicked)
    st.session_state[FOCUS_KEY] = ALL_COMMUNITIES if nxt is None else nxt


def render(crime_by_community: dict, communities, year: str):
    st.subheader(f"Crime by community area, {year}")

    try:
        year_counts = select_year(crime_by_community, year)
    except YearNotFoundError as e:
        st.warning(str(e))
        return

    geojson, centroids, bounds = _map_geometry(communities, len(communities))
    names = sorted(communities["community"].dropna().astype(str).unique())

    focus = st.selectbox(
        "Zoom to community",
        [ALL_COMMUNITIES] + names,
        key=FOCUS_KEY,
        format_func=lambda n: n if n == ALL_COMMUNITIES else n.title(),
    )
    active = None if focus == ALL_COMMUNITIES else focus
    zoom = zoom_to_bounds(community_bounds(communities, active), bounds) if active else None

    scale = crime_colour_scale(year_counts["crime_count"])

    col_map, col_side = st.columns([3, 2])
    with col_map:
        fig = community_map_chart(
            geojson,
            year_counts,
            communities["community"],
            centroids,
            scale,
            bounds,
            zoom=zoom,
            active=active,
        )
        st.plotly_chart(
            fig,
            use_container_width=False,
            config=MAP_CHART_CONFIG,
            key=MAP_KEY,
            on_select=_on_map_select,
            selection_mode="points",
        )
        st.caption("Click a community to zoom in; click it again to return to the whole city.")

    with col_side:
        st.plotly_chart(
            colour_legend_chart(scale, year_counts["crime_count"]),
            use_container_width=False,
            config=CHART_CONFIG,
            key="community_legend",
        )

        if active is not None:
            count = count_lookup(year_counts).get(active)
            if count is None or pd.isna(count):
                st.info(f"No crime count recorded for {active.title()} in {year}.")
            else:
                st.metric(active.title(), f"{fmt_count(count)} crimes")

        top = top_communities(year_counts, TOP_COMMUNITY_COUNT)
        if not top.empty:
            st.markdown(f"**Highest-crime communities, {year}**")
            st.plotly_chart(
                top_communities_chart(top, scale),
                use_container_width=True,
                config=CHART_CONFIG,
                key="community_ranking",
            )

    missing = set(names) - set(year_counts["community"].dropna().astype(str))
    if missing:
        st.caption(f"{len(missing)} community areas have no count for {year} and are shown in grey.")
