import pytest

from astrocore.services.aspects import Aspect
from astrocore.services.chart import BodyPosition, chart_from_positions
from astrocore.services.houses import cusps_from_longitudes
from astrocore.services.personal_code import (
    PersonalCodeError,
    degree_to_digit,
    derive_personal_code,
    numerology,
    personal_code_for_chart,
    planet_to_digit,
)

HOUSES = cusps_from_longitudes([i * 30.0 for i in range(12)])


def _planets():
    lons = {"Jupiter": 128.4, "Sun": 101.0, "Venus": 55.0, "Mercury": 85.0, "Moon": 200.0}
    return {name: BodyPosition.from_longitude(name, lon, 1.0) for name, lon in lons.items()}


ASPECTS = [
    Aspect("Sun", "Mars", "square", 90.0, 5.2, 0.35),
    Aspect("Venus", "Moon", "sextile", 60.0, 3.9, 0.8),
    Aspect("Sun", "Moon", "trine", 120.0, 0.4, 0.95),
]


@pytest.mark.parametrize(
    "degree,digit",
    [(0.0, 9), (9.0, 9), (10.0, 1), (128.4, 2), (359.99, 8), (-45.0, 9), (1e6, 1)],
)
def test_degree_to_digit(degree, digit):
    assert degree_to_digit(degree) == digit


def test_degree_to_digit_always_in_range():
    for tenth in range(0, 7200):
        assert 1 <= degree_to_digit(tenth / 10.0) <= 9


def test_planet_to_digit_scales_by_importance():
    sun = BodyPosition.from_longitude("Sun", 101.0, 1.0)
    assert planet_to_digit(sun, "primary") == 2  # 101
    assert planet_to_digit(sun, "secondary") == 7  # 151.5
    assert planet_to_digit(sun, "supporting") == 7  # 70.7


def test_four_digit_luck_code():
    code = derive_personal_code(_planets(), HOUSES, ASPECTS, "luck", 4)
    assert code.code == "2793"
    kinds = [(d.kind, d.importance) for d in code.breakdown]
    assert kinds == [("planet", "primary"), ("planet", "secondary"), ("house", None), ("house", None)]
    assert [d.position for d in code.breakdown] == [1, 2, 3, 4]
    assert code.breakdown[0].source == "Jupiter (128°)"
    assert code.breakdown[2].source == "House 1 (Aries)"


def test_nine_digit_code_uses_supporting_bodies_then_aspects():
    code = derive_personal_code(_planets(), HOUSES, ASPECTS, "luck", 9)
    assert code.code == "279363253"
    assert code.breakdown[6].importance == "supporting"
    last = code.breakdown[-1]
    assert last.kind == "aspect"
    # strong aspects keep their input order
    assert last.source == "Venus sextile Moon (3.9°)"


def test_padding_is_deterministic():
    planets = {"Jupiter": BodyPosition.from_longitude("Jupiter", 128.4, 1.0)}
    code = derive_personal_code(planets, [], [], "luck", 5)
    assert code.code == "22345"
    assert [d.kind for d in code.breakdown[1:]] == ["padding"] * 4


def test_padding_after_houses_without_aspects():
    code = derive_personal_code(_planets(), HOUSES, [], "luck", 9)
    assert code.code == "279363259"


def test_numerology_summary():
    code = derive_personal_code(_planets(), HOUSES, ASPECTS, "luck", 9)
    n = code.numerology
    assert n.total_sum == 40
    assert n.reduced_number == 4
    assert n.master_number is None
    # 40 / 9 * 10 = 44.4, plus 5 for each of the two digits >= 7
    assert n.energy_level == 54


def test_master_numbers_checked_before_reduction():
    n = numerology([2, 9])
    assert n.total_sum == 11
    assert n.master_number == 11
    assert n.reduced_number == 2
    assert n.energy_level == 80
    assert numerology([9, 9, 9, 6]).energy_level == 100


def test_code_is_deterministic():
    first = derive_personal_code(_planets(), HOUSES, ASPECTS, "wealth", 7)
    second = derive_personal_code(_planets(), HOUSES, ASPECTS, "wealth", 7)
    assert first == second


@pytest.mark.parametrize("count", [2, 10])
def test_digit_count_out_of_range(count):
    with pytest.raises(PersonalCodeError):
        derive_personal_code(_planets(), HOUSES, [], "luck", count)


def test_unknown_purpose():
    with pytest.raises(PersonalCodeError):
        derive_personal_code(_planets(), HOUSES, [], "fame", 4)


def test_empty_planets_rejected():
    with pytest.raises(PersonalCodeError):
        derive_personal_code({}, HOUSES, [], "luck", 4)


def test_code_from_chart():
    chart = chart_from_positions(
        {"Sun": 101.0, "Moon": 200.0, "Venus": 55.0, "Mars": 10.0, "Jupiter": 128.4},
        cusps=[i * 30.0 for i in range(12)],
    )
    code = personal_code_for_chart(chart, "love", 6)
    assert len(code.code) == 6
    assert code.as_dict()["digit_count"] == 6
    assert all(1 <= d <= 9 for d in code.digits)
