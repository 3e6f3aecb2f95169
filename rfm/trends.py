from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

DEFAULT_WINDOW = 24


def recent_window(series: Sequence[float], window: int = DEFAULT_WINDOW) -> np.ndarray:
    """Last ``min(window, len(series))`` values as a float array."""
    arr = np.asarray(series, dtype=float)
    if window <= 0:
        return arr[:0]
    return arr[-window:]


def recent_trend(series: Sequence[float], window: int = DEFAULT_WINDOW) -> float:
    """Mean per-step change over the most recent ``window`` samples.

    Sum of consecutive differences divided by ``len(window) - 1``; 0.0 when
    the window holds fewer than two samples.
    """
    w = recent_window(series, window)
    n = len(w)
    if n < 2:
        return 0.0
    return float(np.diff(w).sum() / (n - 1))


def rolling_trend(series: pd.Series, window: int = DEFAULT_WINDOW) -> pd.Series:
    """Trailing mean first-difference, one value per sample (NaN until two samples)."""
    return series.astype(float).diff().rolling(window=max(1, window - 1), min_periods=1).mean()


__all__ = [
    "DEFAULT_WINDOW",
    "recent_window",
    "recent_trend",
    "rolling_trend",
]
