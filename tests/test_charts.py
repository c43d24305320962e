"""
tests/test_charts.py
--------------------
Tests for the Plotly figure builders: line chart axes, choropleth
colours and zoom, and the colour legend.

Run with:
    pytest tests/test_charts.py -v
"""

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import box

from utils.charts import (
    bin_label,
    colour_legend_chart,
    community_map_chart,
    crime_line_chart,
    top_communities_chart,
)
from utils.constants import (
    ACTIVE_OUTLINE_WIDTH,
    CRIME_PALETTE,
    GRAPH_HEIGHT,
    GRAPH_TRANSITION_MS,
    GRAPH_WIDTH,
    LEGEND_HEIGHT,
    LEGEND_WIDTH,
    MAP_HEIGHT,
    MAP_WIDTH,
    NO_DATA_COLOUR,
    NO_DATA_LABEL,
    ZOOM_EXTENT,
)
from utils.geo import community_centroids, full_bounds, to_geojson
from utils.scales import ThresholdScale, crime_colour_scale, zoom_to_bounds


# ── Helpers ───────────────────────────────────────────────────────

def choropleth_colours(fig) -> dict:
    """{location: fill colour} across the single-colour choropleth traces."""
    colours = {}
    for trace in fig.data:
        if trace.type != "choropleth" or trace.colorscale is None:
            continue
        colour = trace.colorscale[0][1]
        for loc in trace.locations:
            colours.setdefault(loc, colour)
    return colours


# ── Fixtures ──────────────────────────────────────────────────────

@pytest.fixture
def series():
    dates = pd.to_datetime(["2012-01-01", "2012-06-01", "2012-12-31"])
    return pd.DataFrame({
        "key": dates.strftime("%Y-%m-%d"),
        "date": dates,
        "value": [4.0, 9.0, 2.0],
    })


@pytest.fixture
def communities():
    return gpd.GeoDataFrame(
        {"community": ["LOOP", "AUSTIN", "UPTOWN"]},
        geometry=[
            box(-87.64, 41.87, -87.62, 41.89),
            box(-87.81, 41.86, -87.74, 41.92),
            box(-87.67, 41.96, -87.64, 41.98),
        ],
        crs="EPSG:4326",
    )


@pytest.fixture
def year_counts():
    return pd.DataFrame({
        "community": ["LOOP", "AUSTIN"],
        "crime_count": [1000.0, 25000.0],
    })


def build_map(communities, year_counts, **kwargs):
    scale = crime_colour_scale(year_counts["crime_count"])
    return community_map_chart(
        to_geojson(communities),
        year_counts,
        communities["community"],
        community_centroids(communities),
        scale,
        full_bounds(communities),
        **kwargs,
    )


# ══════════════════════════════════════════════════════════════════
# Line chart
# ══════════════════════════════════════════════════════════════════

class TestLineChart:

    def test_single_line(self, series):
        fig = crime_line_chart(series, "2012")
        assert len(fig.data) == 1
        assert fig.data[0].mode == "lines"

    def test_y_domain_is_extent(self, series):
        fig = crime_line_chart(series, "2012")
        assert tuple(fig.layout.yaxis.range) == (2.0, 9.0)

    def test_axes(self, series):
        fig = crime_line_chart(series, "2012")
        assert fig.layout.xaxis.tickformat == "%b"
        assert fig.layout.yaxis.title.text == "Number of Crimes"

    def test_size_and_transition(self, series):
        fig = crime_line_chart(series, "2012")
        assert fig.layout.width == GRAPH_WIDTH
        assert fig.layout.height == GRAPH_HEIGHT
        assert fig.layout.margin.l == 50
        assert fig.layout.transition.duration == GRAPH_TRANSITION_MS


# ══════════════════════════════════════════════════════════════════
# Choropleth
# ══════════════════════════════════════════════════════════════════

class TestCommunityMap:

    def test_fill_colours(self, communities, year_counts):
        colours = choropleth_colours(build_map(communities, year_counts))
        assert colours["LOOP"] == CRIME_PALETTE[0]
        assert colours["AUSTIN"] == CRIME_PALETTE[-1]

    def test_missing_count_is_grey(self, communities, year_counts):
        colours = choropleth_colours(build_map(communities, year_counts))
        assert colours["UPTOWN"] == NO_DATA_COLOUR

    def test_labels_at_centroids(self, communities, year_counts):
        fig = build_map(communities, year_counts)
        labels = [t for t in fig.data if t.type == "scattergeo"]
        assert len(labels) == 1
        assert list(labels[0].text) == ["Loop", "Austin", "Uptown"]

    def test_full_map_when_not_zoomed(self, communities, year_counts):
        fig = build_map(communities, year_counts)
        minx, miny, maxx, maxy = full_bounds(communities)
        assert tuple(fig.layout.geo.lonaxis.range) == pytest.approx((minx, maxx))
        assert tuple(fig.layout.geo.lataxis.range) == pytest.approx((miny, maxy))
        assert fig.layout.width == MAP_WIDTH
        assert fig.layout.height == MAP_HEIGHT

    def test_drag_pans_within_zoom_extent(self, communities, year_counts):
        fig = build_map(communities, year_counts)
        assert fig.layout.dragmode == "pan"
        assert fig.layout.geo.projection.minscale == ZOOM_EXTENT[0]
        assert fig.layout.geo.projection.maxscale == ZOOM_EXTENT[1]

    def test_zoomed_view_centres_region(self, communities, year_counts):
        bounds = full_bounds(communities)
        zoom = zoom_to_bounds((-87.64, 41.87, -87.62, 41.89), bounds)
        fig = build_map(communities, year_counts, zoom=zoom, active="LOOP")
        lon = fig.layout.geo.lonaxis.range
        assert (lon[0] + lon[1]) / 2 == pytest.approx(-87.63)
        assert lon[1] - lon[0] < bounds[2] - bounds[0]

    def test_active_outline(self, communities, year_counts):
        fig = build_map(communities, year_counts, active="LOOP")
        outlines = [
            t for t in fig.data
            if t.type == "choropleth" and t.marker.line.width == ACTIVE_OUTLINE_WIDTH
        ]
        assert len(outlines) == 1
        assert list(outlines[0].locations) == ["LOOP"]

    def test_no_outline_without_active(self, communities, year_counts):
        fig = build_map(communities, year_counts)
        widths = {t.marker.line.width for t in fig.data if t.type == "choropleth"}
        assert ACTIVE_OUTLINE_WIDTH not in widths


class TestBinLabel:

    def test_closed_bin(self):
        scale = ThresholdScale([5000, 10000], ["a", "b", "c"])
        assert bin_label(scale, "b", 0, 20000) == "5k to 10k"

    def test_open_ends_use_extent(self):
        scale = ThresholdScale([5000, 10000], ["a", "b", "c"])
        assert bin_label(scale, "a", 1000, 20000) == "1k to 5k"
        assert bin_label(scale, "c", 1000, 20000) == "10k to 20k"

    def test_no_data(self):
        scale = ThresholdScale([5000], ["a", "b"])
        assert bin_label(scale, NO_DATA_COLOUR, 0, 1) == NO_DATA_LABEL


# ══════════════════════════════════════════════════════════════════
# Legend and ranking
# ══════════════════════════════════════════════════════════════════

class TestLegend:

    def test_one_segment_per_colour(self, year_counts):
        scale = crime_colour_scale(year_counts["crime_count"])
        fig = colour_legend_chart(scale, year_counts["crime_count"])
        colours = [t.marker.color for t in fig.data]
        assert colours == scale.colours

    def test_ticks_in_thousands(self, year_counts):
        scale = crime_colour_scale(year_counts["crime_count"])
        fig = colour_legend_chart(scale, year_counts["crime_count"])
        assert list(fig.layout.xaxis.ticktext) == ["5k", "10k", "15k", "20k", "25k"]

    def test_size_and_caption(self, year_counts):
        scale = crime_colour_scale(year_counts["crime_count"])
        fig = colour_legend_chart(scale, year_counts["crime_count"])
        assert fig.layout.width == LEGEND_WIDTH
        assert fig.layout.height == LEGEND_HEIGHT
        assert "Crime Count" in fig.layout.title.text

    def test_empty_year_has_no_segments(self):
        counts = pd.Series([], dtype=float)
        fig = colour_legend_chart(crime_colour_scale(counts), counts)
        assert len(fig.data) == 0


def test_top_communities_chart_labels(year_counts):
    scale = crime_colour_scale(year_counts["crime_count"])
    top = year_counts.sort_values("crime_count", ascending=False)
    fig = top_communities_chart(top, scale)
    assert list(fig.data[0].y) == ["Austin", "Loop"]
    assert list(fig.data[0].marker.color) == [CRIME_PALETTE[-1], CRIME_PALETTE[0]]
