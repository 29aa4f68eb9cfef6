import pytest

from rccar.mathop import constrain, map_range


@pytest.mark.parametrize(
    "value, expected",
    [(5, 5), (-1, 0), (11, 10), (0, 0), (10, 10)],
)
def test_constrain_clamps_into_range(value, expected):
    assert constrain(value, 0, 10) == expected


def test_constrain_result_always_within_bounds():
    for value in (-1000.5, -3, 0.25, 7, 99999):
        result = constrain(value, -2.5, 8)
        assert -2.5 <= result <= 8


def test_map_range_endpoints():
    assert map_range(-1, -1, 1, 0, 100) == 0
    assert map_range(1, -1, 1, 0, 100) == 100


def test_map_range_midpoint_maps_to_midpoint():
    assert map_range(0, -1, 1, -100, 100) == pytest.approx(0)
    assert map_range(5, 0, 10, 20, 40) == pytest.approx(30)


def test_map_range_round_trip():
    for value in (-0.75, 0.1, 0.9):
        forward = map_range(value, -1, 1, 3, 17)
        assert map_range(forward, 3, 17, -1, 1) == pytest.approx(value)


def test_map_range_inverted_output():
    assert map_range(0, 0, 10, 10, 0) == 10
    assert map_range(10, 0, 10, 10, 0) == 0


def test_map_range_empty_input_range_raises():
    with pytest.raises(ZeroDivisionError):
        map_range(1, 2, 2, 0, 1)