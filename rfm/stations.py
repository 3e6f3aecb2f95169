from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

DEFAULT_CENTER = (18.7883, 98.9853)
DEFAULT_ZOOM = 10

# Water-height thresholds (m) for flood status
WARNING_LEVEL = 5.0
DANGER_LEVEL = 8.0


@dataclass(frozen=True)
class Station:
    code: str
    name: str
    lat: float
    lon: float


@dataclass(frozen=True)
class FloodStatus:
    key: str
    label: str
    color: str


NORMAL = FloodStatus("normal", "Normal", "green")
WARNING = FloodStatus("warning", "Warning", "orange")
DANGER = FloodStatus("danger", "Danger", "red")
UNKNOWN = FloodStatus("unknown", "Unknown", "blue")


STATIONS: tuple[Station, ...] = (
    Station("P.1", "สถานี P.1 สะพานนวรัฐ แม่น้ำปิง ต.วัดเกต อ.เมือง จ.เชียงใหม่", 18.788450, 99.004095),
    Station("P.75", "สถานี P.75 บ้านแม่แต แม่น้ำปิง ต.แม่แฝกเก่า อ.สันทราย จ.เชียงใหม่", 19.007223200081377, 98.96455139541524),
    Station("P.20", "สถานี P.20 อ.เชียงดาว จ.เชียงใหม่", 19.369550704956055, 98.969100952148438),
    Station("P.67", "สถานี P.67 อ.สันทราย จ.เชียงใหม่", 18.933161, 99.033818),
)


def get_station(code: str) -> Station:
    for st in STATIONS:
        if st.code == code:
            return st
    raise KeyError(f"Unknown station code: {code}")


def station_codes() -> list[str]:
    return [s.code for s in STATIONS]


def classify_level(height: Optional[float]) -> FloodStatus:
    """Map a water height to its flood status (unknown when missing)."""
    if height is None or math.isnan(height):
        return UNKNOWN
    if height < WARNING_LEVEL:
        return NORMAL
    if height < DANGER_LEVEL:
        return WARNING
    return DANGER


__all__ = [
    "DEFAULT_CENTER",
    "DEFAULT_ZOOM",
    "WARNING_LEVEL",
    "DANGER_LEVEL",
    "Station",
    "FloodStatus",
    "NORMAL",
    "WARNING",
    "DANGER",
    "UNKNOWN",
    "STATIONS",
    "get_station",
    "station_codes",
    "classify_level",
]
