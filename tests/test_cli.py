import json

import pytest
from pydantic import ValidationError

import cli


def test_biorhythm_operation():
    out = cli.run({"operation": "biorhythm", "birth_date": "2000-01-01", "target_date": "2000-01-08"})
    assert out["emotional"] == 100
    assert out["date"] == "2000-01-08"
    json.dumps(out)


def test_unknown_operation():
    with pytest.raises(ValueError):
        cli.run({"operation": "horoscope"})


def test_invalid_payload_is_a_validation_error():
    with pytest.raises(ValidationError):
        cli.run({"operation": "biorhythm", "birth_date": "yesterday", "target_date": "2000-01-08"})


def test_chart_operation_uses_injected_provider(monkeypatch, make_ephemeris):
    lons = {
        "Sun": 45.0,
        "Mercury": 50.0,
        "Venus": 52.0,
        "Moon": 100.0,
        "Mars": 160.0,
        "Jupiter": 200.0,
        "Saturn": 240.0,
        "Uranus": 280.0,
        "Neptune": 320.0,
        "Pluto": 20.0,
    }
    eph = make_ephemeris(positions={name: (lon, 1.0) for name, lon in lons.items()})
    monkeypatch.setattr(cli, "SwissEphemeris", lambda: eph)

    out = cli.run(
        {
            "operation": "chart",
            "date": "1990-08-18",
            "time": "14:32",
            "place": {"lat": 0.0, "lon": 0.0, "tz": "UTC"},
        }
    )

    assert out["stelliums"][0]["bodies"] == ["Sun", "Mercury", "Venus"]
    assert out["part_of_fortune"]["sign"]
    json.dumps(out)


def test_personal_code_operation(monkeypatch, make_ephemeris):
    monkeypatch.setattr(cli, "SwissEphemeris", lambda: make_ephemeris(positions={"Jupiter": (128.4, 0.1)}))
    out = cli.run(
        {
            "operation": "personal_code",
            "chart": {"date": "1990-08-18", "place": {"lat": 0.0, "lon": 0.0}},
            "purpose": "luck",
            "digit_count": 5,
        }
    )
    assert len(out["code"]) == 5
    assert out["code"][0] == "2"
