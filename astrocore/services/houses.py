from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from .constants import sign_index_from_lon, sign_name_from_lon
from .ephem import EphemerisProvider
from .geometry import longitude_to_house

HOUSE_CODE_MAP = {
    "placidus": "P",
    "koch": "K",
    "whole_sign": "W",
    "regiomontanus": "R",
    "campanus": "C",
}


@dataclass(frozen=True)
class HouseCusp:
    number: int
    longitude: float
    sign: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def cusps_from_longitudes(longitudes: Sequence[float]) -> Tuple[HouseCusp, ...]:
    return tuple(
        HouseCusp(number=i + 1, longitude=lon % 360.0, sign=sign_name_from_lon(lon % 360.0))
        for i, lon in enumerate(longitudes)
    )


def houses(provider: EphemerisProvider, jd_utc: float, lat: float, lon: float, system: str = "placidus") -> Tuple[HouseCusp, ...]:
    hs = HOUSE_CODE_MAP.get(system.lower(), "P")
    return cusps_from_longitudes(provider.houses_of(jd_utc, lat, lon, hs))


def solar_whole_sign_cusps(sun_lon: float) -> Tuple[HouseCusp, ...]:
    # House 1 starts at 0° of the Sun's sign; next signs in order
    start = sign_index_from_lon(sun_lon)
    return cusps_from_longitudes([((start + i) % 12) * 30.0 for i in range(12)])


def house_of(lon: float, cusps: Sequence[HouseCusp]) -> Optional[int]:
    if not cusps:
        return None
    return longitude_to_house(lon, [c.longitude for c in cusps])
