from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

DEFAULT_LEVEL_MATCH = "ระดับน้ำ"
DEFAULT_TIME_COLUMN = "เวลา"

# Leading decimal literal, same prefix rule spreadsheet exports are read with
_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reading:
    timestamp: str
    value: Optional[float]  # None = unparsable


@dataclass(frozen=True)
class ColumnMapping:
    """Explicit column names for the time and water-level fields."""

    time: str = DEFAULT_TIME_COLUMN
    level: str = DEFAULT_LEVEL_MATCH

    @classmethod
    def detect(
        cls,
        rows: Iterable[Mapping[str, Any]],
        *,
        time_match: str = DEFAULT_TIME_COLUMN,
        level_match: str = DEFAULT_LEVEL_MATCH,
    ) -> "ColumnMapping":
        """Resolve concrete column names from the first row that carries them.

        Falls back to the match strings themselves when no row matches.
        """
        time_col: Optional[str] = None
        level_col: Optional[str] = None
        for row in rows:
            if time_col is None:
                time_col = find_column(row, time_match)
            if level_col is None:
                level_col = find_column(row, level_match)
            if time_col is not None and level_col is not None:
                break
        return cls(time=time_col or time_match, level=level_col or level_match)


def find_column(row: Mapping[str, Any], match: str) -> Optional[str]:
    """Return the first key of ``row`` containing ``match`` (exact substring)."""
    for key in row:
        if match in str(key):
            return key
    return None


def parse_level(raw: Any) -> Optional[float]:
    """Best-effort float parse; ``None`` when no leading number is present."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        m = _NUMBER_PREFIX.match(str(raw))
        if m is None:
            return None
        value = float(m.group(0))
    if not math.isfinite(value):
        return None
    return value


def extract_series(
    rows: Iterable[Mapping[str, Any]],
    match: str = DEFAULT_LEVEL_MATCH,
    *,
    column: Optional[str] = None,
) -> list[float]:
    """Ordered water levels from ``rows``; unparsable rows are dropped.

    ``column`` names the value column explicitly. Without it each row is
    searched for the first key containing ``match``.
    """
    out: list[float] = []
    dropped = 0
    for row in rows:
        key = column if column is not None else find_column(row, match)
        value = parse_level(row.get(key)) if key is not None else None
        if value is None:
            dropped += 1
            continue
        out.append(value)
    if dropped:
        logger.debug("Dropped %d unparsable rows (kept %d)", dropped, len(out))
    return out


def extract_readings(
    rows: Iterable[Mapping[str, Any]],
    mapping: Optional[ColumnMapping] = None,
) -> list[Reading]:
    """One Reading per row, keeping unparsable values as ``None``."""
    rows = list(rows)
    mapping = mapping or ColumnMapping.detect(rows)
    readings = []
    for row in rows:
        ts = row.get(mapping.time)
        readings.append(Reading(timestamp="" if ts is None else str(ts), value=parse_level(row.get(mapping.level))))
    return readings


def readings_series(readings: Iterable[Reading]) -> list[float]:
    return [r.value for r in readings if r.value is not None]


__all__ = [
    "DEFAULT_LEVEL_MATCH",
    "DEFAULT_TIME_COLUMN",
    "Reading",
    "ColumnMapping",
    "find_column",
    "parse_level",
    "extract_series",
    "extract_readings",
    "readings_series",
]
