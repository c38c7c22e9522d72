import pytest

from navgraph import geo_helpers


def test_distance_1():
    # San Jose to New York
    d = geo_helpers.distance(-121.8863, 37.3382, -74.0060, 40.7128)
    assert 2540 < d < 2560


def test_distance_symmetric_and_zero():
    a = (-122.2585, 37.8688)
    b = (-122.2547, 37.8703)
    assert geo_helpers.distance(*a, *b) == pytest.approx(geo_helpers.distance(*b, *a))
    assert geo_helpers.distance(*a, *a) == 0.0


def test_distance_equator_step():
    assert geo_helpers.distance(0.0, 0.0, 0.01, 0.0) == pytest.approx(0.69167, rel=1e-4)


@pytest.mark.parametrize(
    "target, expected",
    [
        ((0.0, 1.0), 0.0),
        ((1.0, 0.0), 90.0),
        ((0.0, -1.0), 180.0),
        ((-1.0, 0.0), 270.0),
    ],
)
def test_bearing_cardinal(target, expected):
    assert geo_helpers.bearing(0.0, 0.0, *target) == pytest.approx(expected)


def test_bearing_range():
    b = geo_helpers.bearing(0.0, 0.0, -0.001, 1.0)
    assert 359.0 < b < 360.0


@pytest.mark.parametrize(
    "prev, nxt, expected",
    [
        (0.0, 20.0, 20.0),
        (20.0, 0.0, -20.0),
        (350.0, 10.0, 20.0),
        (10.0, 350.0, -20.0),
        (0.0, 180.0, 180.0),
        (180.0, 0.0, 180.0),
        (90.0, 240.0, 150.0),
        (90.0, 300.0, -150.0),
        (45.0, 45.0, 0.0),
    ],
)
def test_relative_bearing(prev, nxt, expected):
    assert geo_helpers.relative_bearing(prev, nxt) == pytest.approx(expected)
