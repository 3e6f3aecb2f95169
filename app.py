"""Streamlit orchestrator app.

Responsibilities are delegated to dedicated modules under `rfm.ui`:

  rfm.ui.data.load_statuses / load_station -> RID status + hourly export with forecast
  rfm.ui.controls.build_controls           -> sidebar inputs (station, place search, overlay)
  rfm.ui.sections.*                        -> map, station details, forecast chart & tables

Heavy logic lives in the `rfm` package for testability.

Run: streamlit run app.py
"""
from __future__ import annotations

import logging

import streamlit as st

from rfm.ui.controls import build_controls
from rfm.ui.data import load_station, load_statuses
from rfm.ui.sections import render_forecast, render_map, render_station_details

logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="FloodMap - Ping River", layout="wide")
st.title("FloodMap - Ping River")

controls = build_controls()
statuses = load_statuses()

col_map, col_details = st.columns([3, 1])
with col_map:
    render_map(statuses, controls)
with col_details:
    render_station_details(statuses.get(controls.station_code), controls.station_code)

st.divider()
render_forecast(load_station(controls.station_code, controls.seed))

st.caption("Data from floodmap.net & ศูนย์อุทกวิทยาชลประทาน")
