"""Chart assembly: the orchestration layer between the ephemeris and the engine.

This is the only place (together with :mod:`personal_code`) that raises
user-facing errors. Everything downstream of a built :class:`Chart` is pure.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from ..schemas import ChartInput
from .aspects import Aspect, calculate_aspects
from .constants import BODY_NAMES, fmt_deg, sign_name_from_lon
from .ephem import EphemerisProvider, to_utc
from .houses import HouseCusp, cusps_from_longitudes, house_of, houses, solar_whole_sign_cusps

logger = logging.getLogger(__name__)


class ChartInputError(ValueError):
    """Raised when chart data is missing or unusable."""


@dataclass(frozen=True)
class BodyPosition:
    name: str
    longitude: float
    speed: float
    retrograde: bool
    sign: str
    degree_in_sign: float

    @classmethod
    def from_longitude(cls, name: str, longitude: float, speed: float = 0.0) -> "BodyPosition":
        lon = longitude % 360.0
        return cls(
            name=name,
            longitude=lon,
            speed=speed,
            retrograde=speed < 0,
            sign=sign_name_from_lon(lon),
            degree_in_sign=lon % 30.0,
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Chart:
    bodies: Tuple[BodyPosition, ...]
    houses: Tuple[HouseCusp, ...] = ()
    aspects: Tuple[Aspect, ...] = ()
    julian_day: Optional[float] = None
    house_system: Optional[str] = None
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def body(self, name: str) -> Optional[BodyPosition]:
        return next((b for b in self.bodies if b.name == name), None)

    def longitudes(self) -> Dict[str, float]:
        return {b.name: b.longitude for b in self.bodies}

    def positions(self) -> Dict[str, BodyPosition]:
        return {b.name: b for b in self.bodies}

    def house_of(self, lon: float) -> Optional[int]:
        return house_of(lon, self.houses)

    @property
    def ascendant(self) -> Optional[float]:
        return self.houses[0].longitude if self.houses else None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "julian_day": self.julian_day,
            "house_system": self.house_system,
            "bodies": [
                dict(b.as_dict(), position=fmt_deg(b.longitude), house=self.house_of(b.longitude))
                for b in self.bodies
            ],
            "houses": [h.as_dict() for h in self.houses],
            "aspects": [a.as_dict() for a in self.aspects],
            "warnings": list(self.warnings),
        }


def chart_from_positions(
    longitudes: Mapping[str, float],
    cusps: Optional[Sequence[float]] = None,
    speeds: Optional[Mapping[str, float]] = None,
    julian_day: Optional[float] = None,
    house_system: Optional[str] = None,
    warnings: Sequence[str] = (),
) -> Chart:
    """Build a chart from already materialised longitudes and cusps."""

    if not longitudes:
        raise ChartInputError("chart requires at least one body position")
    if cusps is not None and len(cusps) != 12:
        raise ChartInputError(f"expected 12 house cusps, got {len(cusps)}")

    speeds = speeds or {}
    bodies = tuple(
        BodyPosition.from_longitude(name, lon, speeds.get(name, 0.0))
        for name, lon in longitudes.items()
    )
    aspects = calculate_aspects({b.name: b.longitude for b in bodies})
    return Chart(
        bodies=bodies,
        houses=cusps_from_longitudes(cusps) if cusps is not None else (),
        aspects=tuple(aspects),
        julian_day=julian_day,
        house_system=house_system,
        warnings=tuple(warnings),
    )


def build_chart(provider: EphemerisProvider, chart_input: ChartInput) -> Chart:
    """Compute a natal chart for a validated :class:`ChartInput`.

    Positions come from ``provider``. When the birth time is unknown the
    houses fall back to solar whole-sign cusps starting at the Sun's sign.
    """

    moment = to_utc(chart_input.date, chart_input.time, chart_input.place.tz)
    jd = provider.julian_day_of(moment)

    bodies = []
    for name in BODY_NAMES:
        reading = provider.position_of(jd, name)
        bodies.append(BodyPosition.from_longitude(name, reading.longitude, reading.speed))

    warnings = []
    if chart_input.time_known:
        cusps = houses(provider, jd, chart_input.place.lat, chart_input.place.lon, chart_input.house_system)
        house_system = chart_input.house_system
    else:
        warnings.append("Birth time unknown; using solar whole-sign fallback for houses.")
        cusps = solar_whole_sign_cusps(bodies[0].longitude)
        house_system = "whole_sign"

    aspects = calculate_aspects({b.name: b.longitude for b in bodies})
    logger.debug("chart_built", extra={"jd": jd, "aspect_count": len(aspects)})
    return Chart(
        bodies=tuple(bodies),
        houses=cusps,
        aspects=tuple(aspects),
        julian_day=jd,
        house_system=house_system,
        warnings=tuple(warnings),
    )


__all__ = [
    "BodyPosition",
    "Chart",
    "ChartInputError",
    "build_chart",
    "chart_from_positions",
]
