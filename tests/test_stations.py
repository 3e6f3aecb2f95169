import pytest

from rfm.stations import (
    DANGER,
    NORMAL,
    UNKNOWN,
    WARNING,
    classify_level,
    get_station,
    station_codes,
)


@pytest.mark.parametrize(
    "height,expected",
    [(0.0, NORMAL), (4.99, NORMAL), (5.0, WARNING), (7.99, WARNING), (8.0, DANGER), (12.3, DANGER),
     (None, UNKNOWN), (float("nan"), UNKNOWN)],
)
def test_classify_level(height, expected):
    assert classify_level(height) == expected


def test_registry():
    assert station_codes() == ["P.1", "P.75", "P.20", "P.67"]
    assert get_station("P.1").lat == pytest.approx(18.78845)


def test_unknown_station():
    with pytest.raises(KeyError):
        get_station("X.9")
