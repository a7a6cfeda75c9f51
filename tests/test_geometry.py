import pytest

from astrocore.services import geometry


def test_angle_diff_wraps_across_zero():
    assert geometry.normalize_angle_diff(350.0, 10.0) == 20.0
    assert geometry.normalize_angle_diff(10.0, 350.0) == 20.0


def test_angle_diff_tolerates_out_of_range_inputs():
    assert geometry.normalize_angle_diff(-10.0, 10.0) == 20.0
    assert geometry.normalize_angle_diff(370.0, 0.0) == 10.0
    assert geometry.normalize_angle_diff(0.0, 180.0) == 180.0


def test_circular_midpoint_uses_short_arc():
    assert geometry.circular_midpoint(350.0, 10.0) == 0.0
    assert geometry.circular_midpoint(10.0, 350.0) == 0.0
    assert geometry.circular_midpoint(20.0, 40.0) == 30.0
    assert geometry.circular_midpoint(300.0, 40.0) == 350.0


def test_longitude_to_sign_boundaries():
    assert geometry.longitude_to_sign(0.0) == "Aries"
    assert geometry.longitude_to_sign(29.999) == "Aries"
    assert geometry.longitude_to_sign(30.0) == "Taurus"
    assert geometry.longitude_to_sign(359.9) == "Pisces"
    assert geometry.longitude_to_sign(360.0) == "Aries"


def test_longitude_to_house_regular_cusps():
    cusps = [i * 30.0 for i in range(12)]
    assert geometry.longitude_to_house(0.0, cusps) == 1
    assert geometry.longitude_to_house(45.0, cusps) == 2
    assert geometry.longitude_to_house(359.0, cusps) == 12


def test_longitude_to_house_arc_crossing_zero():
    # house 1 starts at 350° and runs to 20°
    cusps = [(350.0 + i * 30.0) % 360.0 for i in range(12)]
    assert geometry.longitude_to_house(355.0, cusps) == 1
    assert geometry.longitude_to_house(5.0, cusps) == 1
    assert geometry.longitude_to_house(20.0, cusps) == 2
    assert geometry.longitude_to_house(349.0, cusps) == 12


def test_longitude_to_house_degenerate_cusps_fall_back_to_first():
    assert geometry.longitude_to_house(123.0, [0.0] * 12) == 1


@pytest.mark.parametrize("value,expected", [(0, 0), (9, 9), (10, 1), (38, 2), (999, 9), (1234, 1)])
def test_digital_root(value, expected):
    assert geometry.digital_root(value) == expected


def test_round_half_up_matches_js_rounding():
    assert geometry.round_half_up(2.5) == 3
    assert geometry.round_half_up(0.5) == 1
    assert geometry.round_half_up(2.4999) == 2
    assert geometry.round_half_up(-0.5) == 0


def test_norm360():
    assert geometry.norm360(-30.0) == 330.0
    assert geometry.norm360(720.0) == 0.0
