"""
utils/charts.py
---------------
Shared chart helpers used across dashboard sections.
All functions return a Plotly figure object.

Import example:
    from utils.charts import crime_line_chart, community_map_chart
"""

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from utils.constants import (
    ACTIVE_OUTLINE_WIDTH,
    AXIS_DEFAULTS,
    BASE_LAYOUT,
    GRAPH_HEIGHT,
    GRAPH_MARGIN,
    GRAPH_TICK_FORMAT,
    GRAPH_TRANSITION_MS,
    GRAPH_WIDTH,
    GRAPH_Y_TITLE,
    LABEL_FONT,
    LEGEND_CAPTION,
    LEGEND_HEIGHT,
    LEGEND_WIDTH,
    LINE_COLOUR,
    LINE_WIDTH,
    MAP_HEIGHT,
    MAP_OUTLINE_COLOUR,
    MAP_OUTLINE_WIDTH,
    MAP_TRANSITION_MS,
    MAP_WIDTH,
    NO_DATA_COLOUR,
    NO_DATA_LABEL,
    ZOOM_EXTENT,
    ZOOM_TRANSITION_MS,
)
from utils.scales import (
    ThresholdScale,
    ZoomTransform,
    extent,
    format_thousands,
    identity_transform,
)


# ── Layout helpers ────────────────────────────────────────────────

def apply_base_layout(fig: go.Figure, height: int = 420, **kwargs) -> go.Figure:
    """
    Apply the standard transparent background and drag/spike
    settings to a figure. Additional layout kwargs are passed through
    so callers can override individual properties.

    Usage:
        fig = apply_base_layout(fig, height=360, hovermode='y')
    """
    layout = {**BASE_LAYOUT, "height": height, **kwargs}
    fig.update_layout(**layout)
    return fig


def style_xaxis(fig: go.Figure, show_labels: bool = False, **kwargs) -> go.Figure:
    """Apply standard x-axis defaults. Labels hidden by default."""
    props = {**AXIS_DEFAULTS, "showticklabels": show_labels, **kwargs}
    fig.update_xaxes(**props)
    return fig


def style_yaxis(fig: go.Figure, title: str = "", **kwargs) -> go.Figure:
    """Apply standard y-axis defaults."""
    props = {**AXIS_DEFAULTS, "title": title, **kwargs}
    fig.update_yaxes(**props)
    return fig


def bin_label(scale: ThresholdScale, colour: str, vmin: float, vmax: float) -> str:
    """Readable range for one colour of the scale, e.g. '5k to 10k'."""
    if colour == scale.unknown:
        return NO_DATA_LABEL
    lo, hi = scale.invert_extent(colour)
    lo = vmin if lo is None else lo
    hi = vmax if hi is None else hi
    return f"{format_thousands(lo)} to {format_thousands(hi)}"


# ── Line chart ────────────────────────────────────────────────────

def crime_line_chart(series: pd.DataFrame, year: str) -> go.Figure:
    """
    Line of crime counts over one year.

    Both axes are fitted to the extent of the data rather than
    anchored at zero. The same builder serves the first draw and
    every year change; the layout transition animates the change.

    Args:
        series: DataFrame with date and value columns for one year.
        year:   Year label, used in the hover text.
    """
    x_range = None
    if series["date"].notna().any():
        x_range = [series["date"].min().isoformat(), series["date"].max().isoformat()]
    y_min, y_max = extent(series["value"])
    y_range = None if pd.isna(y_min) else [y_min, y_max]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=series["date"],
        y=series["value"],
        mode="lines",
        name=year,
        line=dict(color=LINE_COLOUR, width=LINE_WIDTH),
        hovertemplate="%{x|%d %b %Y}<br>%{y:,} crimes<extra></extra>",
        showlegend=False,
    ))

    fig = apply_base_layout(
        fig,
        height=GRAPH_HEIGHT,
        width=GRAPH_WIDTH,
        margin=GRAPH_MARGIN,
        hovermode="closest",
        transition=dict(duration=GRAPH_TRANSITION_MS, easing="cubic-in-out"),
    )
    fig = style_xaxis(
        fig,
        show_labels=True,
        type="date",
        range=x_range,
        tickformat=GRAPH_TICK_FORMAT,
        ticks="outside",
        showline=True,
        linecolor="#000",
        showgrid=False,
    )
    fig = style_yaxis(
        fig,
        title=GRAPH_Y_TITLE,
        range=y_range,
        ticks="outside",
        showline=True,
        linecolor="#000",
    )
    return fig


# ── Choropleth map ────────────────────────────────────────────────

def community_map_chart(
    geojson: dict,
    year_counts: pd.DataFrame,
    communities: pd.Series,
    centroids: pd.DataFrame,
    scale: ThresholdScale,
    full_bounds: tuple,
    zoom: ZoomTransform | None = None,
    active: str | None = None,
) -> go.Figure:
    """
    Choropleth of community crime counts for one year.

    Every community in `communities` is drawn; one without a count
    for the year takes the scale's no-data colour.

    Args:
        geojson:      FeatureCollection keyed on properties.community.
        year_counts:  DataFrame with community and crime_count columns.
        communities:  All community names on the map.
        centroids:    DataFrame with community, lon and lat columns.
        scale:        Threshold colour scale for the year.
        full_bounds:  (minx, miny, maxx, maxy) of the whole map.
        zoom:         Zoom transform; None shows the whole map.
        active:       Community to outline as selected.
    """
    vmin, vmax = extent(year_counts["crime_count"])
    year_counts = year_counts.assign(community=year_counts["community"].astype(str))

    frame = pd.DataFrame({"community": communities.astype(str).to_numpy()})
    frame = frame.merge(year_counts, on="community", how="left")
    frame["colour"] = frame["crime_count"].map(scale)
    frame["bin"] = frame["colour"].map(lambda c: bin_label(scale, c, vmin, vmax))
    frame["count_text"] = frame["crime_count"].map(
        lambda v: NO_DATA_LABEL if pd.isna(v) else f"{int(v):,}"
    )

    colour_map = {bin_label(scale, c, vmin, vmax): c for c in scale.colours}
    colour_map[NO_DATA_LABEL] = NO_DATA_COLOUR

    fig = px.choropleth(
        frame,
        geojson=geojson,
        locations="community",
        featureidkey="properties.community",
        color="bin",
        color_discrete_map=colour_map,
        category_orders={"bin": list(colour_map)},
        custom_data=["community", "count_text"],
    )
    fig.update_traces(
        marker_line_color=MAP_OUTLINE_COLOUR,
        marker_line_width=MAP_OUTLINE_WIDTH,
        hovertemplate="<b>%{customdata[0]}</b><br>%{customdata[1]} crimes<extra></extra>",
        showlegend=False,
    )

    if active is not None:
        fig.add_trace(go.Choropleth(
            geojson=geojson,
            locations=[active],
            featureidkey="properties.community",
            z=[1],
            colorscale=[[0, "rgba(0,0,0,0)"], [1, "rgba(0,0,0,0)"]],
            showscale=False,
            marker_line_color="#000",
            marker_line_width=ACTIVE_OUTLINE_WIDTH,
            customdata=[[active, ""]],
            hoverinfo="skip",
        ))

    fig.add_trace(go.Scattergeo(
        lon=centroids["lon"],
        lat=centroids["lat"],
        text=centroids["community"].str.title(),
        mode="text",
        textfont=LABEL_FONT,
        customdata=centroids[["community"]].to_numpy(),
        hoverinfo="skip",
        showlegend=False,
    ))

    lon_range, lat_range = (zoom or identity_transform(full_bounds)).view_ranges(full_bounds)
    fig.update_geos(
        projection_type="mercator",
        lonaxis_range=lon_range,
        lataxis_range=lat_range,
        projection_minscale=ZOOM_EXTENT[0],
        projection_maxscale=ZOOM_EXTENT[1],
        visible=False,
        bgcolor="rgba(0,0,0,0)",
    )

    duration = MAP_TRANSITION_MS if zoom is None or zoom.k == 1 else ZOOM_TRANSITION_MS
    fig = apply_base_layout(
        fig,
        height=MAP_HEIGHT,
        width=MAP_WIDTH,
        margin=dict(l=0, r=0, t=0, b=0),
        hovermode="closest",
        clickmode="event+select",
        dragmode="pan",
        transition=dict(duration=duration),
    )
    return fig


# ── Legend ────────────────────────────────────────────────────────

def colour_legend_chart(scale: ThresholdScale, counts: pd.Series) -> go.Figure:
    """
    Horizontal colour key for the threshold scale: one bar segment per
    colour spanning its count range, ticks at the thresholds labelled
    in thousands.
    """
    vmin, vmax = extent(counts)
    fig = go.Figure()
    if not pd.isna(vmin):
        for lo, hi, colour in scale.segments(vmin, vmax):
            fig.add_trace(go.Bar(
                x=[hi - lo],
                y=[LEGEND_CAPTION],
                base=[lo],
                orientation="h",
                marker=dict(color=colour, line=dict(width=0)),
                hovertemplate=f"{format_thousands(lo)} to {format_thousands(hi)}<extra></extra>",
                showlegend=False,
            ))

    fig = apply_base_layout(
        fig,
        height=LEGEND_HEIGHT,
        width=LEGEND_WIDTH,
        margin=dict(l=10, r=10, t=30, b=30),
        bargap=0.55,
        hovermode="closest",
        title=dict(text=f"<b>{LEGEND_CAPTION}</b>", x=0, y=0.95, font=dict(size=12)),
    )
    fig = style_xaxis(
        fig,
        show_labels=True,
        range=None if pd.isna(vmin) else [vmin, vmax],
        tickvals=scale.thresholds,
        ticktext=[format_thousands(t) for t in scale.thresholds],
        ticks="outside",
        ticklen=13,
        showgrid=False,
        zeroline=False,
        showline=False,
    )
    fig = style_yaxis(fig, showticklabels=False, showgrid=False)
    return fig


# ── Reusable chart builders ───────────────────────────────────────

def horizontal_bar_chart(
    df: pd.DataFrame,
    x_col: str,
    y_col: str,
    colours: list | None = None,
    hover_template: str | None = None,
    height: int = 420,
    x_title: str = "",
) -> go.Figure:
    """
    Horizontal bar chart, first row at the top.
    Used for the highest-crime community ranking.

    Args:
        df:              Source DataFrame.
        x_col:           Column for bar length (numeric).
        y_col:           Column for bar labels (categorical).
        colours:         Per-bar colours; defaults to the line colour.
        hover_template:  Custom hovertemplate string.
        height:          Chart height in pixels.
        x_title:         X-axis title.
    """
    bar_kwargs: dict = dict(
        x=df[x_col],
        y=df[y_col],
        orientation="h",
        marker=dict(color=colours or LINE_COLOUR),
    )
    if hover_template:
        bar_kwargs["hovertemplate"] = hover_template

    fig = go.Figure()
    fig.add_trace(go.Bar(**bar_kwargs))

    fig = apply_base_layout(fig, height=height, hovermode="y")
    fig = style_xaxis(fig, show_labels=True, title=x_title)
    fig = style_yaxis(fig, autorange="reversed")
    return fig


def top_communities_chart(top: pd.DataFrame, scale: ThresholdScale) -> go.Figure:
    """Ranking of the highest-count communities, bars in their map colour."""
    labelled = top.assign(label=top["community"].str.title())
    return horizontal_bar_chart(
        df=labelled,
        x_col="crime_count",
        y_col="label",
        colours=[scale(v) for v in labelled["crime_count"]],
        hover_template="<b>%{y}</b><br>%{x:,} crimes<extra></extra>",
        height=360,
        x_title="Crimes recorded",
    )
