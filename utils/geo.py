"""
utils/geo.py
------------
Community area geometry: reading the TopoJSON boundaries and the
derived label anchors and bounding boxes used by the map.

Import example:
    from utils.geo import load_communities, community_centroids
"""

import os

import geopandas as gpd
import pandas as pd

from utils.constants import (
    AREA_NUMBER_PROPERTY,
    COMMUNITY_PROPERTY,
    GEOGRAPHIC_CRS,
    MAP_LAYER,
    PROJECTED_CRS,
)
from utils.prepare import normalise_community


def load_communities(path: str, layer: str = MAP_LAYER) -> gpd.GeoDataFrame:
    """
    Read one TopoJSON object as a GeoDataFrame in EPSG:4326.

    The `community` column is normalised to the same upper-case form
    used for the crime counts so the two can be joined directly.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Map file not found: {path}")

    gdf = gpd.read_file(path, layer=layer)
    if COMMUNITY_PROPERTY not in gdf.columns:
        raise ValueError(
            f"{path}: layer '{layer}' has no '{COMMUNITY_PROPERTY}' property. "
            f"Found: {list(gdf.columns)}"
        )
    if gdf.crs is None:
        gdf = gdf.set_crs(GEOGRAPHIC_CRS)
    else:
        gdf = gdf.to_crs(GEOGRAPHIC_CRS)

    gdf["community"] = normalise_community(gdf[COMMUNITY_PROPERTY])
    return gdf


def community_centroids(gdf: gpd.GeoDataFrame) -> pd.DataFrame:
    """Label anchor (lon, lat) per community, computed on a projected CRS."""
    projected = gdf.to_crs(PROJECTED_CRS)
    centroids = projected.geometry.centroid.to_crs(GEOGRAPHIC_CRS)
    return pd.DataFrame({
        "community": gdf["community"].to_numpy(),
        "lon": centroids.x.to_numpy(),
        "lat": centroids.y.to_numpy(),
    })


def full_bounds(gdf: gpd.GeoDataFrame) -> tuple:
    minx, miny, maxx, maxy = gdf.total_bounds
    return (float(minx), float(miny), float(maxx), float(maxy))


def community_bounds(gdf: gpd.GeoDataFrame, community: str) -> tuple:
    subset = gdf[gdf["community"] == community]
    if subset.empty:
        raise KeyError(community)
    minx, miny, maxx, maxy = subset.total_bounds
    return (float(minx), float(miny), float(maxx), float(maxy))


def area_name_lookup(gdf: gpd.GeoDataFrame) -> dict:
    """{area number: community name} from the boundary properties."""
    if AREA_NUMBER_PROPERTY not in gdf.columns:
        raise ValueError(f"Boundaries have no '{AREA_NUMBER_PROPERTY}' property")
    numbers = pd.to_numeric(gdf[AREA_NUMBER_PROPERTY], errors="coerce")
    return {
        int(n): name
        for n, name in zip(numbers, gdf["community"])
        if pd.notna(n)
    }


def to_geojson(gdf: gpd.GeoDataFrame) -> dict:
    """FeatureCollection keyed on properties.community, for Plotly."""
    return gdf[["community", "geometry"]].__geo_interface__
