from rfm.forecast import Prediction
from rfm.presentation import (
    PAGE_STEP,
    build_chart_model,
    next_visible,
    paginate_readings,
    predictions_frame,
    readings_frame,
)
from rfm.series import Reading


def _readings(n):
    return [Reading(f"01/10/2024 {i:02d}:00", 1.0 + i / 100) for i in range(n)]


def test_chart_model_merges_history_and_forecast():
    readings = [Reading("a", 1.0), Reading("b", None), Reading("c", 1.2)]
    preds = [Prediction("d", 1.3), Prediction("e", 1.4)]
    model = build_chart_model(readings, preds, title="P.1")
    assert model.labels == ["a", "b", "c", "d", "e"]
    hist, pred = model.datasets
    assert hist.label == "Historical Water Level"
    assert hist.data == [1.0, None, 1.2]
    assert pred.data == [None, None, None, 1.3, 1.4]
    assert pred.dashed and not hist.dashed
    assert model.title == "P.1"


def test_chart_model_without_history():
    model = build_chart_model([], [Prediction("x", 0.0)])
    assert model.labels == ["x"]
    assert model.datasets[1].data == [0.0]


def test_pagination_most_recent_first():
    readings = _readings(25)
    page = paginate_readings(readings, PAGE_STEP)
    assert [r.timestamp for r in page.rows][:2] == ["01/10/2024 24:00", "01/10/2024 23:00"]
    assert len(page.rows) == 10
    assert page.total == 25
    assert page.has_more


def test_pagination_grows_until_exhausted():
    readings = _readings(25)
    visible = PAGE_STEP
    while paginate_readings(readings, visible).has_more:
        visible = next_visible(visible)
    page = paginate_readings(readings, visible)
    assert visible == 30
    assert len(page.rows) == 25
    assert page.rows[-1] == readings[0]


def test_pagination_zero_visible():
    page = paginate_readings(_readings(3), 0)
    assert page.rows == []
    assert page.has_more


def test_frames():
    page = paginate_readings(_readings(2), 10)
    df = readings_frame(page)
    assert list(df.columns) == ["Time", "Water Level (m)"]
    assert len(df) == 2
    pf = predictions_frame([Prediction("x", 1.0)])
    assert pf.iloc[0]["Predicted Water Level (m)"] == 1.0
