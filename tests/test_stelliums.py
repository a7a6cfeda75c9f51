import pytest

from astrocore.services.chart import BodyPosition
from astrocore.services.stelliums import detect_stelliums, has_stellium


def test_three_close_bodies_form_a_stellium():
    found = detect_stelliums({"Sun": 45.0, "Mercury": 50.0, "Venus": 52.0})
    assert len(found) == 1
    s = found[0]
    assert s.bodies == ("Sun", "Mercury", "Venus")
    assert s.dominant_sign == "Taurus"
    assert s.spread == pytest.approx(7.0)
    assert s.average_longitude == pytest.approx(49.0)
    assert s.strength == pytest.approx(0.5 * (0.5 + 0.5 * (1 - 7.0 / 8.0)))


def test_chain_clustering_links_through_middle_member():
    # 45 and 59 are 14° apart but each step is 7°
    found = detect_stelliums({"Sun": 45.0, "Mercury": 52.0, "Venus": 59.0})
    assert len(found) == 1
    assert found[0].spread == pytest.approx(14.0)


def test_wide_chain_is_kept_with_matching_orb():
    found = detect_stelliums({"Sun": 45.0, "Mercury": 55.0, "Venus": 65.0}, max_orb=10.0)
    assert len(found) == 1
    assert found[0].bodies == ("Sun", "Mercury", "Venus")
    assert found[0].spread == pytest.approx(20.0)


def test_gap_breaks_the_run():
    assert detect_stelliums({"Sun": 45.0, "Mercury": 55.0, "Venus": 65.0}) == []


def test_two_bodies_are_not_enough():
    assert detect_stelliums({"Sun": 10.0, "Moon": 11.0, "Mars": 200.0}) == []
    assert detect_stelliums({}) == []


def test_results_sorted_by_strength():
    positions = {
        "Sun": 0.0,
        "Moon": 2.0,
        "Mercury": 4.0,
        "Venus": 100.0,
        "Mars": 101.0,
        "Jupiter": 102.0,
        "Saturn": 103.0,
    }
    found = detect_stelliums(positions)
    assert [len(s.bodies) for s in found] == [4, 3]
    assert found[0].strength > found[1].strength


def test_dominant_sign_tie_goes_to_first_seen_sign():
    found = detect_stelliums({"Sun": 27.0, "Moon": 29.0, "Mercury": 31.0, "Venus": 33.0})
    assert found[0].dominant_sign == "Aries"


def test_accepts_body_positions():
    bodies = [BodyPosition.from_longitude(name, lon) for name, lon in (("Sun", 200.0), ("Venus", 203.0), ("Mars", 205.0))]
    found = detect_stelliums(bodies)
    assert found[0].dominant_sign == "Libra"


def test_has_stellium():
    assert has_stellium({"Sun": 45.0, "Mercury": 50.0, "Venus": 52.0})
    assert not has_stellium({"Sun": 45.0, "Mercury": 50.0})
