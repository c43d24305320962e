"""
tests/test_geo.py
-----------------
Tests for community boundary loading, label anchors and bounds,
using small in-memory polygons near the Loop.

Run with:
    pytest tests/test_geo.py -v
"""

import json

import geopandas as gpd
import pytest
from shapely.geometry import box, mapping

from utils.geo import (
    area_name_lookup,
    community_bounds,
    community_centroids,
    full_bounds,
    load_communities,
    to_geojson,
)


@pytest.fixture
def communities():
    return gpd.GeoDataFrame(
        {
            "community": ["LOOP", "NEAR WEST SIDE"],
            "area_numbe": ["32", "28"],
        },
        geometry=[
            box(-87.64, 41.87, -87.62, 41.89),
            box(-87.70, 41.86, -87.64, 41.89),
        ],
        crs="EPSG:4326",
    )


class TestLoadCommunities:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_communities(str(tmp_path / "missing.topojson"))

    def test_reads_layer_and_normalises_names(self, tmp_path):
        path = tmp_path / "community.geojson"
        path.write_text(json.dumps({
            "type": "FeatureCollection",
            "name": "community",
            "features": [{
                "type": "Feature",
                "properties": {"community": " loop ", "area_numbe": "32"},
                "geometry": mapping(box(-87.64, 41.87, -87.62, 41.89)),
            }],
        }))
        gdf = load_communities(str(path), layer="community")
        assert gdf["community"].tolist() == ["LOOP"]
        assert gdf.crs.to_epsg() == 4326


class TestGeometry:

    def test_centroids(self, communities):
        centroids = community_centroids(communities)
        loop = centroids.set_index("community").loc["LOOP"]
        assert loop["lon"] == pytest.approx(-87.63, abs=1e-3)
        assert loop["lat"] == pytest.approx(41.88, abs=1e-3)
        assert len(centroids) == 2

    def test_full_bounds(self, communities):
        assert full_bounds(communities) == pytest.approx((-87.70, 41.86, -87.62, 41.89))

    def test_community_bounds(self, communities):
        assert community_bounds(communities, "LOOP") == pytest.approx((-87.64, 41.87, -87.62, 41.89))

    def test_unknown_community(self, communities):
        with pytest.raises(KeyError):
            community_bounds(communities, "ATLANTIS")


class TestLookups:

    def test_area_name_lookup(self, communities):
        assert area_name_lookup(communities) == {32: "LOOP", 28: "NEAR WEST SIDE"}

    def test_area_name_lookup_needs_numbers(self, communities):
        with pytest.raises(ValueError):
            area_name_lookup(communities.drop(columns=["area_numbe"]))

    def test_geojson_keyed_on_community(self, communities):
        gj = to_geojson(communities)
        assert gj["type"] == "FeatureCollection"
        names = [f["properties"]["community"] for f in gj["features"]]
        assert names == ["LOOP", "NEAR WEST SIDE"]
