from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd

from .forecast import Prediction
from .series import Reading

PAGE_STEP = 10

HISTORICAL_LABEL = "Historical Water Level"
PREDICTED_LABEL = "Predicted Water Level"
DEFAULT_TITLE = "Water Level - Historical and Predicted"


@dataclass(frozen=True)
class Dataset:
    label: str
    data: list[Optional[float]]
    color: str
    dashed: bool = False


@dataclass(frozen=True)
class ChartModel:
    labels: list[str]
    datasets: list[Dataset]
    title: str = DEFAULT_TITLE
    x_title: str = "Time"
    y_title: str = "Water Level (m)"


@dataclass(frozen=True)
class TablePage:
    rows: list[Reading]
    visible: int
    total: int
    has_more: bool = False


def build_chart_model(
    readings: Sequence[Reading],
    predictions: Sequence[Prediction],
    *,
    title: str = DEFAULT_TITLE,
    historical_label: str = HISTORICAL_LABEL,
    predicted_label: str = PREDICTED_LABEL,
) -> ChartModel:
    """Merge history and forecast onto one shared label axis.

    History occupies the first ``len(readings)`` labels (``None`` where the
    reading was unparsable); the forecast dataset is padded with ``None`` over
    that span so both lines share the x axis.
    """
    labels = [r.timestamp for r in readings] + [p.timestamp for p in predictions]
    hist = Dataset(label=historical_label, data=[r.value for r in readings], color="blue")
    pred = Dataset(
        label=predicted_label,
        data=[None] * len(readings) + [p.value for p in predictions],
        color="red",
        dashed=True,
    )
    return ChartModel(labels=labels, datasets=[hist, pred], title=title)


def paginate_readings(readings: Sequence[Reading], visible: int = PAGE_STEP) -> TablePage:
    """Most recent ``visible`` readings, newest first."""
    visible = max(0, int(visible))
    total = len(readings)
    rows = list(readings[max(0, total - visible):]) if visible else []
    rows.reverse()
    return TablePage(rows=rows, visible=visible, total=total, has_more=visible < total)


def next_visible(visible: int, step: int = PAGE_STEP) -> int:
    return visible + step


def readings_frame(page: TablePage) -> pd.DataFrame:
    return pd.DataFrame(
        {"Time": [r.timestamp for r in page.rows], "Water Level (m)": [r.value for r in page.rows]}
    )


def predictions_frame(predictions: Sequence[Prediction]) -> pd.DataFrame:
    return pd.DataFrame(
        {"Time": [p.timestamp for p in predictions], "Predicted Water Level (m)": [p.value for p in predictions]}
    )


__all__ = [
    "PAGE_STEP",
    "Dataset",
    "ChartModel",
    "TablePage",
    "build_chart_model",
    "paginate_readings",
    "next_visible",
    "readings_frame",
    "predictions_frame",
]
