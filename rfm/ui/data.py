from __future__ import annotations
import logging
from typing import Optional
import numpy as np
import streamlit as st
from .state import LoadedStation
from rfm.forecast import forecast_rows
from rfm.sources import SourceError, StationStatus, fetch_station_status, load_station_rows
from rfm.stations import STATIONS

__all__ = ["load_station", "load_statuses", "clear_caches", "FETCH_ERROR"]

FETCH_ERROR = "Failed to fetch data. Please try again later."

logger = logging.getLogger(__name__)


@st.cache_data(ttl=60, show_spinner=False)
def load_statuses() -> dict[str, StationStatus]:
    return {s.code: fetch_station_status(s.code) for s in STATIONS}


@st.cache_data(ttl=600, show_spinner=True)
def _station_rows(code: str) -> list[dict]:
    return load_station_rows(code)


def load_station(code: str, seed: Optional[int] = None) -> LoadedStation:
    try:
        rows = _station_rows(code)
    except SourceError as exc:
        logger.warning("Station %s unavailable: %s", code, exc)
        return LoadedStation(code=code, error=FETCH_ERROR)
    result = forecast_rows(rows, rng=np.random.default_rng(seed))
    return LoadedStation(code=code, result=result, row_count=len(rows))


def clear_caches() -> None:
    load_statuses.clear()
    _station_rows.clear()
