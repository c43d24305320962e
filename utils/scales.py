"""
utils/scales.py
---------------
Scale and zoom helpers for the charts: nice tick generation, the
threshold colour scale behind the choropleth and its legend, and
the click-to-zoom transform.

Pure Python / numpy, no Streamlit or Plotly dependencies.

Import example:
    from utils.scales import crime_colour_scale, zoom_to_bounds
"""

import math
from bisect import bisect_right
from typing import NamedTuple

import numpy as np

from utils.constants import (
    COLOUR_TICK_COUNT,
    CRIME_PALETTE,
    NO_DATA_COLOUR,
    ZOOM_CLICK_MAX,
    ZOOM_EXTENT,
    ZOOM_FILL,
)

_E10 = math.sqrt(50)
_E5  = math.sqrt(10)
_E2  = math.sqrt(2)


# ── Extents and ticks ─────────────────────────────────────────────

def extent(values) -> tuple:
    """Return (min, max) ignoring NaN, or (nan, nan) if nothing is left."""
    arr = np.asarray(values, dtype=float)
    arr = arr[~np.isnan(arr)]
    if arr.size == 0:
        return (float("nan"), float("nan"))
    return (float(arr.min()), float(arr.max()))


def tick_increment(start: float, stop: float, count: int) -> float:
    """
    Step between nice ticks. Positive values are the step itself;
    negative values are the inverse of a sub-unit step (-10 means 0.1),
    which keeps the tick values free of float rounding noise.
    """
    step = (stop - start) / max(0, count) if count > 0 else math.inf
    if step <= 0 or not math.isfinite(step):
        return 0 if step == 0 else math.nan
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


def nice_ticks(start: float, stop: float, count: int = COLOUR_TICK_COUNT) -> list:
    """
    Roughly `count` evenly spaced round values inside [start, stop].

    Steps are 1, 2 or 5 times a power of ten. Equal bounds give
    [start]; reversed bounds give the ticks in descending order.
    """
    if any(isinstance(v, float) and math.isnan(v) for v in (start, stop)):
        return []
    if start == stop and count > 0:
        return [start]

    reverse = stop < start
    if reverse:
        start, stop = stop, start

    step = tick_increment(start, stop, count)
    if step == 0 or not math.isfinite(step):
        return []

    if step > 0:
        lo, hi = math.ceil(start / step), math.floor(stop / step)
        ticks = [(lo + i) * step for i in range(int(math.ceil(hi - lo + 1)))]
    else:
        inv = -step
        lo, hi = math.ceil(start * inv), math.floor(stop * inv)
        ticks = [(lo + i) / inv for i in range(int(math.ceil(hi - lo + 1)))]

    if reverse:
        ticks.reverse()
    return ticks


# ── Threshold colour scale ────────────────────────────────────────

class ThresholdScale:
    """
    Map continuous values onto discrete colours.

    A value gets colours[i], where i is the number of thresholds at
    or below it. Values past the last colour keep the last colour and
    NaN gets the no-data colour.
    """

    def __init__(self, thresholds, colours, unknown=NO_DATA_COLOUR):
        if not colours:
            raise ValueError("ThresholdScale needs at least one colour")
        self.thresholds = list(thresholds)
        self.colours = list(colours)
        self.unknown = unknown

    def index(self, value):
        if value is None or (isinstance(value, float) and math.isnan(value)):
            return None
        return min(bisect_right(self.thresholds, value), len(self.colours) - 1)

    def __call__(self, value):
        i = self.index(value)
        return self.unknown if i is None else self.colours[i]

    def invert_extent(self, colour) -> tuple:
        """(lo, hi) thresholds bounding `colour`, None at an open end."""
        i = self.colours.index(colour)
        lo = self.thresholds[i - 1] if 0 < i <= len(self.thresholds) else None
        last = i == len(self.colours) - 1
        hi = self.thresholds[i] if i < len(self.thresholds) and not last else None
        return (lo, hi)

    def segments(self, vmin: float, vmax: float) -> list:
        """One (lo, hi, colour) legend segment per colour, open ends filled in."""
        out = []
        for colour in self.colours:
            lo, hi = self.invert_extent(colour)
            out.append((vmin if lo is None else lo, vmax if hi is None else hi, colour))
        return out


def crime_colour_scale(counts, palette=CRIME_PALETTE) -> ThresholdScale:
    """
    Threshold scale for one year of community counts. Thresholds are
    the nice ticks of the count range; fewer than four thresholds
    shortens the palette to one colour more than the thresholds.
    """
    vmin, vmax = extent(counts)
    thresholds = nice_ticks(vmin, vmax, COLOUR_TICK_COUNT)
    colours = list(palette)
    if len(thresholds) < len(palette) - 1:
        colours = colours[: len(thresholds) + 1]
    return ThresholdScale(thresholds, colours)


def format_thousands(value: float) -> str:
    """Legend tick label: 2500 -> '2.5k'."""
    return f"{value / 1000:g}k"


# ── Zoom ──────────────────────────────────────────────────────────

class ZoomTransform(NamedTuple):
    k: float
    centre_lon: float
    centre_lat: float

    def view_ranges(self, full_bounds) -> tuple:
        """Lon and lat axis ranges of the viewport for full_bounds zoomed by k."""
        minx, miny, maxx, maxy = full_bounds
        half_w = (maxx - minx) / (2 * self.k)
        half_h = (maxy - miny) / (2 * self.k)
        return (
            [self.centre_lon - half_w, self.centre_lon + half_w],
            [self.centre_lat - half_h, self.centre_lat + half_h],
        )


def identity_transform(full_bounds) -> ZoomTransform:
    minx, miny, maxx, maxy = full_bounds
    return ZoomTransform(1.0, (minx + maxx) / 2, (miny + maxy) / 2)


def zoom_to_bounds(bounds, full_bounds) -> ZoomTransform:
    """
    Zoom transform that centres the region `bounds` and scales it to
    fill ZOOM_FILL of the map, capped at ZOOM_CLICK_MAX and kept
    inside ZOOM_EXTENT.
    """
    minx, miny, maxx, maxy = bounds
    fminx, fminy, fmaxx, fmaxy = full_bounds
    dx = (maxx - minx) / (fmaxx - fminx)
    dy = (maxy - miny) / (fmaxy - fminy)
    spread = max(dx, dy)
    k = ZOOM_CLICK_MAX if spread <= 0 else ZOOM_FILL / spread
    k = max(1, min(ZOOM_CLICK_MAX, k))
    k = max(ZOOM_EXTENT[0], min(ZOOM_EXTENT[1], k))
    return ZoomTransform(float(k), (minx + maxx) / 2, (miny + maxy) / 2)


def toggle_active(active, clicked):
    """
    Next active region after a click. Clicking the active region or
    clicking off the regions (None) resets to no active region.
    """
    if clicked is None or clicked == active:
        return None
    return clicked
