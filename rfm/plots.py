from __future__ import annotations

import plotly.graph_objects as go
from typing import Callable, Mapping, Optional, Sequence

from rfm import paths
from rfm.presentation import ChartModel
from rfm.stations import DEFAULT_CENTER, DEFAULT_ZOOM, UNKNOWN, Station, FloodStatus


MAX_TICKS = 12


def forecast_figure(model: ChartModel, tr: Optional[Callable[[str], str]] = None) -> go.Figure:
    """History and forecast lines over the shared label axis.

    Points are placed by position, not by label: repeated labels (the
    "Invalid date" sentinel, duplicate source rows) would otherwise collapse
    onto one category. Labels are kept as tick text and hover text.
    """
    tr = tr or (lambda k, **_: k)
    x = list(range(len(model.labels)))
    fig = go.Figure()
    for ds in model.datasets:
        fig.add_trace(go.Scatter(x=x, y=ds.data, name=tr(ds.label), mode="lines",
                                 customdata=model.labels,
                                 hovertemplate="%{customdata}<br>%{y}",
                                 line=dict(color=ds.color, width=2, dash="dash" if ds.dashed else None)))
    fig.update_layout(title=tr(model.title), xaxis_title=tr(model.x_title), yaxis_title=tr(model.y_title),
                      template="plotly_white", legend=dict(orientation="h", y=1.08))
    step = max(1, -(-len(x) // MAX_TICKS))
    fig.update_xaxes(tickmode="array", tickvals=x[::step], ticktext=model.labels[::step])
    return fig


def station_map_figure(
    stations: Sequence[Station],
    statuses: Mapping[str, FloodStatus],
    *,
    center: tuple[float, float] = DEFAULT_CENTER,
    zoom: int = DEFAULT_ZOOM,
    user_location: Optional[tuple[float, float]] = None,
    flood_overlay: bool = True,
) -> go.Figure:
    """Station markers coloured by flood status over OpenStreetMap tiles."""
    colors = [statuses.get(s.code, UNKNOWN).color for s in stations]
    labels = [statuses.get(s.code, UNKNOWN).label for s in stations]
    fig = go.Figure()
    fig.add_trace(go.Scattermap(
        lat=[s.lat for s in stations],
        lon=[s.lon for s in stations],
        mode="markers",
        marker=dict(size=16, color=colors),
        text=[f"{s.name}<br>Station Code: {s.code}<br>{lbl}" for s, lbl in zip(stations, labels)],
        customdata=[s.code for s in stations],
        hoverinfo="text",
        name="Stations",
    ))
    if user_location is not None:
        fig.add_trace(go.Scattermap(lat=[user_location[0]], lon=[user_location[1]], mode="markers",
                                    marker=dict(size=12, color="black"), name="Location"))
    layers = []
    if flood_overlay:
        layers.append(dict(sourcetype="raster", source=[paths.endpoint("floodmap_tiles")], opacity=0.5, below="traces"))
    fig.update_layout(
        map=dict(style="open-street-map", center=dict(lat=center[0], lon=center[1]), zoom=zoom, layers=layers),
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
    )
    return fig


__all__ = ["MAX_TICKS", "forecast_figure", "station_map_figure"]
