from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence

from .chart import Chart
from .constants import sign_name_from_lon
from .houses import HouseCusp, house_of


@dataclass(frozen=True)
class PartOfFortune:
    longitude: float
    sign: str
    house: Optional[int]
    day_birth: bool

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def is_day_birth(sun_lon: float, asc_lon: float) -> bool:
    """True when the Sun stands above the horizon (houses 7..12).

    Houses 1..6 run from the Ascendant to the Descendant below the horizon,
    so the Sun is up once it is 180° or more past the Ascendant.
    """

    return (sun_lon - asc_lon) % 360.0 >= 180.0


def part_of_fortune(
    asc_lon: float,
    sun_lon: float,
    moon_lon: float,
    day_birth: Optional[bool] = None,
    cusps: Optional[Sequence[HouseCusp]] = None,
) -> PartOfFortune:
    """Lot of Fortune: Asc + Moon - Sun by day, Asc + Sun - Moon by night."""

    if day_birth is None:
        day_birth = is_day_birth(sun_lon, asc_lon)
    if day_birth:
        lon = (asc_lon + moon_lon - sun_lon) % 360.0
    else:
        lon = (asc_lon + sun_lon - moon_lon) % 360.0
    return PartOfFortune(
        longitude=lon,
        sign=sign_name_from_lon(lon),
        house=house_of(lon, cusps) if cusps else None,
        day_birth=day_birth,
    )


def part_of_fortune_for_chart(chart: Chart) -> Optional[PartOfFortune]:
    sun, moon = chart.body("Sun"), chart.body("Moon")
    if sun is None or moon is None or chart.ascendant is None:
        return None
    return part_of_fortune(chart.ascendant, sun.longitude, moon.longitude, cusps=chart.houses)


__all__ = ["PartOfFortune", "is_day_birth", "part_of_fortune", "part_of_fortune_for_chart"]
