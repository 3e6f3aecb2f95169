from .map_view import render_map, render_station_details
from .forecast import render_forecast

__all__ = [
    "render_map",
    "render_station_details",
    "render_forecast",
]
