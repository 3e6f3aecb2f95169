from __future__ import annotations
import streamlit as st
from .state import Controls
from .data import clear_caches
from rfm.sources import SourceError, search_place
from rfm.stations import DEFAULT_CENTER, STATIONS

__all__ = ["build_controls"]


def build_controls() -> Controls:
    st.sidebar.header("Station")
    names = {s.code: f"{s.code} - {s.name}" for s in STATIONS}
    station_code = st.sidebar.selectbox("Forecast station", list(names), index=0, format_func=names.get)
    if st.sidebar.button("Refresh data"):
        clear_caches()

    st.sidebar.header("Map")
    flood_overlay = st.sidebar.checkbox("FloodMap overlay", value=True)
    query = st.sidebar.text_input("Search for a place...", value="", key="place_query")
    map_center = st.session_state.get("map_center", DEFAULT_CENTER)
    user_location = st.session_state.get("user_location")
    if query and query != st.session_state.get("_last_query"):
        st.session_state._last_query = query
        try:
            hit = search_place(query)
        except SourceError:
            st.sidebar.error("An error occurred while searching for the location.")
            hit = None
        else:
            if hit is None:
                st.sidebar.warning("Location not found")
        if hit is not None:
            map_center = user_location = hit
            st.session_state.map_center = hit
            st.session_state.user_location = hit
    if st.sidebar.button("Home"):
        map_center = DEFAULT_CENTER
        st.session_state.map_center = DEFAULT_CENTER

    with st.sidebar.expander("Forecast options"):
        seed_text = st.text_input("Jitter seed (blank = random)", value="", key="fc_seed")
    seed = int(seed_text) if seed_text.strip().isdigit() else None

    return Controls(
        station_code=station_code,
        map_center=tuple(map_center),
        user_location=tuple(user_location) if user_location else None,
        flood_overlay=bool(flood_overlay),
        seed=seed,
    )
