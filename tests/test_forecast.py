from datetime import date, datetime, timedelta

import numpy as np
import pytest

from rfm.forecast import (
    INVALID_DATE,
    ForecastConfig,
    Prediction,
    forecast_rows,
    generate_predictions,
    parse_timestamp,
)

EPS = 1e-9


class FixedRng:
    """Stand-in generator returning the same uniform draw every step."""

    def __init__(self, value=0.5):
        self.value = value

    def random(self):
        return self.value


@pytest.mark.parametrize("series", [[], [1.0], [1.0, 1.2], [float(i) / 10 for i in range(100)]])
def test_always_horizon_predictions(series):
    preds = generate_predictions(series, "01/10/2024 07:00", 0.0)
    assert len(preds) == 24
    assert all(isinstance(p, Prediction) for p in preds)


def test_step_changes_are_bounded():
    series = [1.0, 1.5, 2.5, 4.0]
    preds = generate_predictions(series, "01/10/2024 07:00", trend=1.0, rng=np.random.default_rng(3))
    values = [series[-1]] + [p.value for p in preds]
    for prev, cur in zip(values, values[1:]):
        assert abs(cur - prev) <= 0.1 + 0.05 + EPS


def test_flat_series_clusters_and_steps_hourly():
    preds = generate_predictions([2.0, 2.0, 2.0, 2.0], "01/10/2024 07:00", 0.0, rng=np.random.default_rng(11))
    base = datetime(2024, 10, 1, 7, 0)
    for i, p in enumerate(preds, start=1):
        assert p.timestamp == (base + timedelta(hours=i)).strftime("%d/%m/%Y %H:%M")
        # jitter of at most 0.025 plus rounding per step
        assert abs(p.value - 2.0) <= i * 0.03 + EPS
    assert preds[0].timestamp == "01/10/2024 08:00"
    assert preds[-1].timestamp == "02/10/2024 07:00"


def test_invalid_timestamp_keeps_numeric_values():
    preds = generate_predictions([1.0, 1.1], "", 0.1)
    assert [p.timestamp for p in preds] == [INVALID_DATE] * 24
    assert all(np.isfinite(p.value) for p in preds)


def test_time_only_timestamp_uses_today():
    preds = generate_predictions([1.0], "23:00 น.", 0.0, today=date(2024, 10, 1))
    assert preds[0].timestamp == "02/10/2024 00:00"


def test_clamp_is_chained_to_previous_step():
    preds = generate_predictions([1.0], "01/10/2024 07:00", trend=0.3, rng=FixedRng())
    assert [p.value for p in preds] == pytest.approx([round(1.0 + 0.1 * i, 2) for i in range(1, 25)])


def test_negative_trend_clamped_downwards():
    preds = generate_predictions([5.0], "01/10/2024 07:00", trend=-1.0, rng=FixedRng())
    assert preds[0].value == pytest.approx(4.9)
    assert preds[-1].value == pytest.approx(2.6)


def test_small_trend_passes_through_unclamped():
    preds = generate_predictions([1.0], "01/10/2024 07:00", trend=0.02, rng=FixedRng())
    assert preds[0].value == pytest.approx(1.02)
    assert preds[4].value == pytest.approx(1.10)


def test_values_rounded_to_two_decimals():
    preds = generate_predictions([1.234567], "", 0.0123, rng=np.random.default_rng(5))
    for p in preds:
        assert p.value == round(p.value, 2)


def test_empty_series_anchors_at_zero():
    preds = generate_predictions([], "", 0.0, rng=FixedRng())
    assert [p.value for p in preds] == [0.0] * 24


def test_seeded_runs_are_reproducible():
    a = generate_predictions([1.0, 1.1], "01/10/2024 07:00", 0.05, rng=np.random.default_rng(42))
    b = generate_predictions([1.0, 1.1], "01/10/2024 07:00", 0.05, rng=np.random.default_rng(42))
    assert a == b


def test_second_run_continues_from_first():
    first = generate_predictions([1.0, 1.2, 1.3], "01/10/2024 07:00", 0.05)
    second = generate_predictions([first[-1].value], first[-1].timestamp, 0.05)
    assert abs(second[0].value - first[-1].value) <= 0.1 + EPS
    assert second[0].timestamp == "02/10/2024 08:00"


def test_custom_config_horizon_and_step():
    cfg = ForecastConfig(horizon=3, step=timedelta(minutes=30))
    preds = generate_predictions([1.0], "01/10/2024 07:00", 0.0, config=cfg)
    assert [p.timestamp for p in preds] == ["01/10/2024 07:30", "01/10/2024 08:00", "01/10/2024 08:30"]


def test_config_rejects_non_positive_horizon():
    with pytest.raises(ValueError):
        ForecastConfig(horizon=0)


def test_parse_timestamp_formats():
    assert parse_timestamp("01/10/2024 07:00") == datetime(2024, 10, 1, 7, 0)
    assert parse_timestamp("01/10/2024") == datetime(2024, 10, 1)
    assert parse_timestamp("2024-10-01 07:00:00") == datetime(2024, 10, 1, 7, 0)
    assert parse_timestamp("07:15 น.", today=date(2024, 1, 2)) == datetime(2024, 1, 2, 7, 15)
    dt = datetime(2024, 5, 5, 5, 5)
    assert parse_timestamp(dt) is dt
    assert parse_timestamp("not a date") is None
    assert parse_timestamp(None) is None


def test_forecast_rows_pipeline():
    rows = [
        {"เวลา": "01/10/2024 05:00", "ระดับน้ำ(ม.)": "1.00"},
        {"เวลา": "01/10/2024 06:00", "ระดับน้ำ(ม.)": "1.02"},
        {"เวลา": "01/10/2024 07:00", "ระดับน้ำ(ม.)": "-"},
    ]
    res = forecast_rows(rows, rng=FixedRng())
    assert res.series == [1.0, 1.02]
    assert res.trend == pytest.approx(0.02)
    assert res.last_timestamp == "01/10/2024 07:00"
    assert res.last_value == 1.02
    assert len(res.readings) == 3
    assert res.predictions[0] == Prediction("01/10/2024 08:00", 1.04)


def test_forecast_rows_empty_input():
    res = forecast_rows([])
    assert res.series == []
    assert res.trend == 0.0
    assert res.last_value is None
    assert len(res.predictions) == 24
    assert all(p.timestamp == INVALID_DATE for p in res.predictions)
