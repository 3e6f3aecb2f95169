"""Path and endpoint settings for rfm.

 - project_root(): repo root (directory containing this file's parent)
 - data_root(): RFM_DATA_ROOT override or project_root()
 - cache_dir(): RFM_CACHE_DIR override or <data_root>/rfm/storage, created on demand
 - workbook_cache_path(code): cached hourly workbook for a station
 - endpoint(name): service URL, overridable per service

Environment variable overrides:
  RFM_DATA_ROOT, RFM_CACHE_DIR,
  RFM_HOURLY_URL, RFM_STATUS_URL, RFM_GEOCODE_URL
"""

from __future__ import annotations

import os
from pathlib import Path

_ENDPOINT_DEFAULTS = {
    "hourly": "https://hydro-1.net/Data/HD-04/houly/water_today_excel.php",
    "status": "https://hyd-app-db.rid.go.th/webservice/SWOCService.svc/getHourlyWaterLevelFromStationCode",
    "geocode": "https://nominatim.openstreetmap.org/search",
    "floodmap_tiles": "https://www.floodmap.net/getFMTile.ashx?x={x}&y={y}&z={z}&e=311",
}

_ENDPOINT_ENV_MAP = {
    "hourly": "RFM_HOURLY_URL",
    "status": "RFM_STATUS_URL",
    "geocode": "RFM_GEOCODE_URL",
}


def project_root() -> Path:
    # Assume this file is at <root>/rfm/paths.py
    return Path(__file__).resolve().parent.parent


def data_root() -> Path:
    env = os.environ.get("RFM_DATA_ROOT")
    if env:
        return Path(env).expanduser()
    return project_root()


def cache_dir() -> Path:
    env = os.environ.get("RFM_CACHE_DIR")
    path = Path(env).expanduser() if env else data_root() / "rfm" / "storage"
    path.mkdir(parents=True, exist_ok=True)
    return path


def workbook_cache_path(station_code: str) -> Path:
    safe = station_code.replace(".", "_").replace("/", "_")
    return cache_dir() / f"hourly_{safe}.xls"


def endpoint(name: str) -> str:
    if name not in _ENDPOINT_DEFAULTS:
        raise KeyError(f"Unknown endpoint: {name}")
    env = _ENDPOINT_ENV_MAP.get(name)
    if env and os.environ.get(env):
        return os.environ[env]
    return _ENDPOINT_DEFAULTS[name]


__all__ = [
    "project_root",
    "data_root",
    "cache_dir",
    "workbook_cache_path",
    "endpoint",
]
