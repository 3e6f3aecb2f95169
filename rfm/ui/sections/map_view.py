from __future__ import annotations
import streamlit as st
from rfm.plots import station_map_figure
from rfm.sources import StationStatus
from rfm.stations import STATIONS, get_station
from rfm.ui.state import Controls

__all__ = ["render_map", "render_station_details"]


def render_map(statuses: dict[str, StationStatus], ctr: Controls):
    st.subheader("Station map")
    fig = station_map_figure(
        STATIONS,
        {code: s.flood_status for code, s in statuses.items()},
        center=ctr.map_center,
        user_location=ctr.user_location,
        flood_overlay=ctr.flood_overlay,
    )
    st.plotly_chart(fig, config={"displaylogo": False}, use_container_width=True)
    cols = st.columns(2)
    for col, code in zip(cols, ("P.1", "P.75")):
        status = statuses.get(code)
        col.metric(f"{code} Water Height", f"{status.height_text} m" if status else "N/A")


def render_station_details(status: StationStatus | None, code: str):
    st.subheader("Station Details")
    station = get_station(code)
    if status is None:
        st.info("Select a station to see details.")
        return
    st.markdown(f"**{station.name}**")
    st.write(f"Station Code: {station.code}")
    if status.error:
        st.warning(status.error)
        return
    def _v(x):
        return "N/A" if x is None else x
    st.write(f"Current Water Level: {_v(status.latest.get('waterlevelvalue'))} m")
    st.write(f"Flow Rate (Q): {_v(status.discharge)} m³/s")
    st.write(f"Province: {_v(status.province)}")
    st.write(f"Last Updated: {_v(status.updated)}")
    st.write(f"Ground Level (ZG): {_v(status.ground_level)} m")
    st.write(f"Braelevel: {_v(status.bank_level)} m")
    fs = status.flood_status
    st.markdown(f"<span style='color:{fs.color}'><b>Flood Status:</b> {fs.label}</span>", unsafe_allow_html=True)
