import os
from datetime import datetime, timezone

import pytest

os.environ.setdefault("EPHEMERIS_BACKEND", "moseph")

from astrocore.services.ephem import BodyReading, EphemerisUnavailableError

UNIX_EPOCH_JD = 2440587.5


class FakeEphemeris:
    """In-memory stand-in for the Swiss Ephemeris provider.

    ``positions`` maps a body name to either a fixed ``(longitude, speed)``
    pair or a callable taking the Julian Day and returning that pair.
    """

    def __init__(self, positions=None, cusps=None, fail=False):
        self.positions = positions or {}
        self.cusps = tuple(cusps) if cusps is not None else tuple(i * 30.0 for i in range(12))
        self.fail = fail
        self.house_calls = []
        self.position_calls = 0

    def julian_day_of(self, moment):
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.timestamp() / 86400.0 + UNIX_EPOCH_JD

    def position_of(self, jd_utc, body):
        if self.fail:
            raise EphemerisUnavailableError("ephemeris offline")
        self.position_calls += 1
        entry = self.positions.get(body, (0.0, 1.0))
        lon, speed = entry(jd_utc) if callable(entry) else entry
        return BodyReading(longitude=lon % 360.0, speed=speed)

    def houses_of(self, jd_utc, lat, lon, system="P"):
        if self.fail:
            raise EphemerisUnavailableError("ephemeris offline")
        self.house_calls.append(system)
        return self.cusps


def moving_sun_moon(anchor: datetime, sun0: float = 0.0, moon0: float = 0.0):
    """Sun and Moon on mean daily motions, aligned at ``anchor``.

    The Moon gains about 12.19° a day on the Sun, one synodic month per 29.53 days.
    """

    jd0 = anchor.timestamp() / 86400.0 + UNIX_EPOCH_JD
    sun_rate = 0.9856
    moon_rate = sun_rate + 360.0 / 29.53
    return {
        "Sun": lambda jd: (sun0 + sun_rate * (jd - jd0), sun_rate),
        "Moon": lambda jd: (moon0 + moon_rate * (jd - jd0), moon_rate),
    }


@pytest.fixture
def make_ephemeris():
    return FakeEphemeris


@pytest.fixture
def sun_moon_cycle():
    return moving_sun_moon
