from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Mapping, Optional, Sequence

import numpy as np

from .series import ColumnMapping, Reading, extract_readings, readings_series
from .trends import DEFAULT_WINDOW, recent_trend

INVALID_DATE = "Invalid date"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastConfig:
    horizon: int = 24
    step: timedelta = timedelta(hours=1)
    jitter: float = 0.05  # amplitude of the uniform per-step noise
    max_change: float = 0.1  # clamp around the previous step's value
    trend_window: int = DEFAULT_WINDOW
    time_formats: tuple[str, ...] = ("%d/%m/%Y %H:%M", "%H:%M น.", "%d/%m/%Y", "%Y-%m-%d %H:%M:%S")
    output_format: str = "%d/%m/%Y %H:%M"

    def __post_init__(self) -> None:
        if self.horizon <= 0:
            raise ValueError("horizon must be positive")
        if self.max_change < 0 or self.jitter < 0:
            raise ValueError("jitter and max_change must be non-negative")


@dataclass(frozen=True)
class Prediction:
    timestamp: str
    value: float


@dataclass
class ForecastResult:
    series: list[float]
    trend: float
    predictions: list[Prediction]
    last_timestamp: str
    readings: list[Reading] = field(default_factory=list)

    @property
    def last_value(self) -> Optional[float]:
        return self.series[-1] if self.series else None


def _has_date(fmt: str) -> bool:
    return any(tok in fmt for tok in ("%d", "%m", "%Y", "%y", "%j"))


def parse_timestamp(
    raw: Any,
    formats: Sequence[str] = ForecastConfig.time_formats,
    *,
    today: Optional[date] = None,
) -> Optional[datetime]:
    """Parse ``raw`` with the first matching format, ``None`` if none match.

    Time-only formats are anchored on ``today`` (defaults to the current date).
    """
    if isinstance(raw, datetime):
        return raw
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    for fmt in formats:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        if not _has_date(fmt):
            anchor = today or date.today()
            parsed = parsed.replace(year=anchor.year, month=anchor.month, day=anchor.day)
        return parsed
    return None


def format_step(base: Optional[datetime], i: int, config: ForecastConfig) -> str:
    if base is None:
        return INVALID_DATE
    return (base + config.step * i).strftime(config.output_format)


def generate_predictions(
    series: Sequence[float],
    last_timestamp: Any,
    trend: float,
    *,
    config: Optional[ForecastConfig] = None,
    rng: Optional[np.random.Generator] = None,
    today: Optional[date] = None,
) -> list[Prediction]:
    """Project ``config.horizon`` steps ahead of the last value in ``series``.

    Each step starts from the previous step's rounded value::

        candidate = running + trend + (u - 0.5) * jitter,   u ~ U[0, 1)
        running   = round(clip(candidate, running - max_change, running + max_change), 2)

    An empty series is anchored at 0.0. Timestamps step by ``config.step``
    from ``last_timestamp``; all read "Invalid date" if it cannot be parsed.
    """
    config = config or ForecastConfig()
    rng = rng if rng is not None else np.random.default_rng()

    running = float(series[-1]) if len(series) else 0.0
    base = parse_timestamp(last_timestamp, config.time_formats, today=today)
    if base is None:
        logger.debug("Unparsable base timestamp %r", last_timestamp)

    out: list[Prediction] = []
    for i in range(1, config.horizon + 1):
        candidate = running + trend + (rng.random() - 0.5) * config.jitter
        clamped = min(max(candidate, running - config.max_change), running + config.max_change)
        running = round(clamped, 2)
        out.append(Prediction(timestamp=format_step(base, i, config), value=running))
    return out


def forecast_readings(
    readings: Sequence[Reading],
    *,
    config: Optional[ForecastConfig] = None,
    rng: Optional[np.random.Generator] = None,
    today: Optional[date] = None,
) -> ForecastResult:
    config = config or ForecastConfig()
    series = readings_series(readings)
    trend = recent_trend(series, config.trend_window)
    last_ts = readings[-1].timestamp if readings else ""
    preds = generate_predictions(series, last_ts, trend, config=config, rng=rng, today=today)
    return ForecastResult(series=series, trend=trend, predictions=preds, last_timestamp=last_ts, readings=list(readings))


def forecast_rows(
    rows: Iterable[Mapping[str, Any]],
    *,
    mapping: Optional[ColumnMapping] = None,
    config: Optional[ForecastConfig] = None,
    rng: Optional[np.random.Generator] = None,
    today: Optional[date] = None,
) -> ForecastResult:
    """Extract, estimate the trend and project in one call."""
    readings = extract_readings(rows, mapping)
    return forecast_readings(readings, config=config, rng=rng, today=today)


__all__ = [
    "INVALID_DATE",
    "ForecastConfig",
    "Prediction",
    "ForecastResult",
    "parse_timestamp",
    "format_step",
    "generate_predictions",
    "forecast_readings",
    "forecast_rows",
]
