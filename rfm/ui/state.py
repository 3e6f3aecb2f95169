from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from rfm.forecast import ForecastResult

__all__ = [
    "LoadedStation",
    "Controls",
]

@dataclass
class LoadedStation:
    code: str
    result: Optional[ForecastResult] = None
    error: Optional[str] = None
    row_count: int = 0

@dataclass
class Controls:
    station_code: str
    map_center: tuple[float, float]
    user_location: Optional[tuple[float, float]]
    flood_overlay: bool
    seed: Optional[int]
