"""External data collaborators: gauge spreadsheet export, RID status service, place search.

The hourly export only replaces the local cache once it parses, so a failed
or garbled refresh can fall back to the last good download. Parsing keeps
cell text as-is; numeric interpretation belongs to `rfm.series`.
"""
from __future__ import annotations

import io
import json
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd
import requests

from rfm import paths
from rfm.series import parse_level
from rfm.stations import UNKNOWN, FloodStatus, classify_level

DEFAULT_TIMEOUT = 30
DEFAULT_WINDOW_DAYS = 7
USER_AGENT = "Mozilla/5.0"

logger = logging.getLogger(__name__)


class SourceError(RuntimeError):
    """Download or parse failure in an external data source."""


@dataclass
class StationStatus:
    code: str
    records: list[dict] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def latest(self) -> dict:
        return self.records[0] if self.records else {}

    @property
    def water_level(self) -> Optional[float]:
        return parse_level(self.latest.get("waterlevelvalue"))

    @property
    def height_text(self) -> str:
        level = self.water_level
        return "N/A" if level is None else f"{level:.3f}"

    @property
    def discharge(self) -> Any:
        return self.latest.get("Q")

    @property
    def province(self) -> Any:
        return self.latest.get("provincename")

    @property
    def updated(self) -> Any:
        return self.latest.get("hourlydateString")

    @property
    def ground_level(self) -> Any:
        return self.latest.get("ZG")

    @property
    def bank_level(self) -> Any:
        return self.latest.get("braelevel")

    @property
    def flood_status(self) -> FloodStatus:
        if self.error:
            return UNKNOWN
        return classify_level(self.water_level)


def _session(session: Optional[requests.Session]) -> requests.Session:
    return session if session is not None else requests.Session()


def default_window(today: Optional[date] = None, days: int = DEFAULT_WINDOW_DAYS) -> tuple[date, date]:
    """(start, end) covering the last ``days`` days up to ``today``."""
    end = today or date.today()
    return end - timedelta(days=days), end


def download_hourly_workbook(
    station_code: str,
    start: date,
    end: date,
    *,
    session: Optional[requests.Session] = None,
    dest: Optional[Path] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Path:
    """Download the hourly water-level export for one station and cache it on disk."""
    url = paths.endpoint("hourly")
    params = {
        "station01": station_code,
        "datestart": start.strftime("%Y-%m-%d"),
        "dateend": end.strftime("%Y-%m-%d"),
    }
    headers = {"User-Agent": USER_AGENT, "Accept": "application/vnd.ms-excel"}
    logger.info("Fetching %s data %s..%s from %s", station_code, params["datestart"], params["dateend"], url)
    try:
        resp = _session(session).get(url, params=params, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Hourly export failed for %s: %s", station_code, exc)
        raise SourceError(f"Failed to download file for {station_code}") from exc

    target = Path(dest) if dest is not None else paths.workbook_cache_path(station_code)
    target.parent.mkdir(parents=True, exist_ok=True)
    # The previous copy is only replaced once the new one parses
    partial = target.with_name(target.name + ".part")
    partial.write_bytes(resp.content)
    try:
        read_workbook_rows(partial)
    except SourceError:
        partial.unlink(missing_ok=True)
        logger.warning("Hourly export for %s is not a readable workbook", station_code)
        raise
    partial.replace(target)
    logger.info("Saved %d bytes to %s", len(resp.content), target)
    return target


def _frame_to_rows(df: pd.DataFrame) -> list[dict]:
    df = df.dropna(how="all")
    df.columns = [str(c) for c in df.columns]
    df = df.astype(object).where(df.notna(), None)
    return df.to_dict(orient="records")


def read_workbook_rows(source: Union[str, Path, bytes]) -> list[dict]:
    """First sheet of a workbook (binary Excel or HTML-table export) as row dicts."""
    if isinstance(source, (bytes, bytearray)):
        content = bytes(source)
    else:
        path = Path(source)
        if not path.exists():
            raise SourceError(f"File not found: {path}")
        content = path.read_bytes()
    if not content.strip():
        return []

    try:
        if content.lstrip()[:1] == b"<":
            text = content.decode("utf-8", errors="replace")
            frames = pd.read_html(io.StringIO(text), header=0, flavor="lxml")
            df = frames[0]
        else:
            df = pd.read_excel(io.BytesIO(content), sheet_name=0, dtype=str)
    except (ValueError, OSError) as exc:
        raise SourceError(f"Unreadable workbook: {exc}") from exc
    rows = _frame_to_rows(df)
    logger.debug("Parsed %d rows, columns=%s", len(rows), list(df.columns))
    return rows


def load_station_rows(
    station_code: str,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    session: Optional[requests.Session] = None,
    use_cache_on_error: bool = True,
) -> list[dict]:
    """Download + parse the hourly export, falling back to the cached copy."""
    if start is None or end is None:
        d_start, d_end = default_window()
        start = start or d_start
        end = end or d_end
    try:
        path = download_hourly_workbook(station_code, start, end, session=session)
    except SourceError:
        cached = paths.workbook_cache_path(station_code)
        if not use_cache_on_error or not cached.exists():
            raise
        logger.warning("Using cached workbook %s", cached)
        path = cached
    return read_workbook_rows(path)


def fetch_station_status(
    station_code: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> StationStatus:
    """Current hourly reading for a station; failures come back in ``error``."""
    url = paths.endpoint("status")
    body = {"hydro": {"stationcode": station_code}}
    try:
        resp = _session(session).post(url, json=body, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("Status request failed for %s: %s", station_code, exc)
        return StationStatus(code=station_code, error=str(exc))
    if not resp.ok:
        return StationStatus(
            code=station_code,
            error=f"Failed to fetch data for station {station_code}. Status: {resp.status_code}",
        )
    text = resp.text
    if not text or not text.strip():
        return StationStatus(code=station_code, error="No data available.")
    try:
        payload = json.loads(text)
    except ValueError:
        return StationStatus(code=station_code, error="Invalid JSON format.")
    if isinstance(payload, dict):
        records = [payload]
    elif isinstance(payload, list):
        records = [r for r in payload if isinstance(r, dict)]
    else:
        records = []
    return StationStatus(code=station_code, records=records)


def search_place(
    query: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Optional[tuple[float, float]]:
    """(lat, lon) of the first geocoder hit, ``None`` when nothing matches."""
    if not query or not query.strip():
        return None
    try:
        resp = _session(session).get(
            paths.endpoint("geocode"),
            params={"format": "json", "q": query},
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
        )
        resp.raise_for_status()
        hits = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise SourceError(f"Place search failed: {exc}") from exc
    if not hits:
        return None
    try:
        return float(hits[0]["lat"]), float(hits[0]["lon"])
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise SourceError(f"Place search returned an unusable hit: {exc!r}") from exc


__all__ = [
    "SourceError",
    "StationStatus",
    "default_window",
    "download_hourly_workbook",
    "read_workbook_rows",
    "load_station_rows",
    "fetch_station_status",
    "search_place",
]
