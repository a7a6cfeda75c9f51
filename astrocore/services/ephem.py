"""Swiss Ephemeris adapter.

The engine never talks to :mod:`swisseph` directly; it receives an object
implementing :class:`EphemerisProvider` and asks it for body positions,
house cusps and Julian Days. :class:`SwissEphemeris` is the production
implementation. Failures surface as :class:`EphemerisUnavailableError` and
are never papered over with neutral values.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol, Tuple
from zoneinfo import ZoneInfo

from .. import config

try:
    import swisseph as swe
except ImportError:  # pragma: no cover - reported by SwissEphemeris()
    swe = None  # type: ignore

logger = logging.getLogger(__name__)


class EphemerisUnavailableError(RuntimeError):
    """Raised when positions cannot be obtained from the ephemeris."""


@dataclass(frozen=True)
class BodyReading:
    longitude: float
    speed: float


class EphemerisProvider(Protocol):
    def position_of(self, jd_utc: float, body: str) -> BodyReading: ...

    def houses_of(self, jd_utc: float, lat: float, lon: float, system: str = "P") -> Tuple[float, ...]: ...

    def julian_day_of(self, moment: datetime) -> float: ...


def _body_codes() -> Dict[str, int]:
    return {
        "Sun": swe.SUN,
        "Moon": swe.MOON,
        "Mercury": swe.MERCURY,
        "Venus": swe.VENUS,
        "Mars": swe.MARS,
        "Jupiter": swe.JUPITER,
        "Saturn": swe.SATURN,
        "Uranus": swe.URANUS,
        "Neptune": swe.NEPTUNE,
        "Pluto": swe.PLUTO,
    }


def init_paths(ephe_dir: str | os.PathLike[str] | None) -> None:
    """Set the Swiss Ephemeris file search path when available."""

    if not ephe_dir or swe is None:
        return

    path = os.fspath(ephe_dir)
    if os.path.isdir(path):
        swe.set_ephe_path(path)
        logger.info("ephemeris_path_set", extra={"path": path})
    else:
        logger.warning("ephemeris_path_missing", extra={"path": path})


def to_utc(date_str: str, time_str: str, tz: str) -> datetime:
    """Convert a local date/time to an aware UTC datetime."""

    dt_local = datetime.fromisoformat(f"{date_str}T{time_str}").replace(tzinfo=ZoneInfo(tz))
    return dt_local.astimezone(timezone.utc)


class SwissEphemeris:
    """:class:`EphemerisProvider` backed by ``pyswisseph``."""

    def __init__(self, ephe_dir: Optional[str] = None, backend: Optional[str] = None):
        if swe is None:
            raise EphemerisUnavailableError("pyswisseph is not installed")
        self.backend = backend or config.ephemeris_backend()
        init_paths(ephe_dir if ephe_dir is not None else config.ephemeris_dir())
        self._codes = _body_codes()

    @property
    def version(self) -> str:
        return f"swisseph-{getattr(swe, 'version', 'unknown')}"

    def _flags(self) -> int:
        backend_flag = swe.FLG_MOSEPH if self.backend == "moseph" else swe.FLG_SWIEPH
        return backend_flag | swe.FLG_SPEED

    def julian_day_of(self, moment: datetime) -> float:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        dt_utc = moment.astimezone(timezone.utc)
        hour = (
            dt_utc.hour
            + dt_utc.minute / 60
            + dt_utc.second / 3600
            + dt_utc.microsecond / 3_600_000_000
        )
        return swe.julday(dt_utc.year, dt_utc.month, dt_utc.day, hour, swe.GREG_CAL)

    def position_of(self, jd_utc: float, body: str) -> BodyReading:
        code = self._codes.get(body)
        if code is None:
            raise ValueError(f"unsupported body: {body}")
        try:
            values, _ = swe.calc_ut(jd_utc, code, self._flags())
        except swe.Error as exc:
            logger.error("ephemeris_calc_failed", extra={"body": body, "jd": jd_utc})
            raise EphemerisUnavailableError(f"failed to compute {body}: {exc}") from exc
        lon, _lat, _dist, lon_speed, _lat_speed, _dist_speed = values
        return BodyReading(longitude=lon % 360.0, speed=lon_speed)

    def houses_of(self, jd_utc: float, lat: float, lon: float, system: str = "P") -> Tuple[float, ...]:
        try:
            cusps, _ascmc = swe.houses(jd_utc, lat, lon, system.encode())
        except swe.Error as exc:
            logger.error("ephemeris_houses_failed", extra={"jd": jd_utc, "lat": lat, "lon": lon})
            raise EphemerisUnavailableError(f"failed to compute houses: {exc}") from exc
        # older bindings return a 13-slot array with an unused index 0
        if len(cusps) == 13:
            cusps = cusps[1:]
        return tuple(c % 360.0 for c in cusps[:12])


__all__ = [
    "BodyReading",
    "EphemerisProvider",
    "EphemerisUnavailableError",
    "SwissEphemeris",
    "init_paths",
    "to_utc",
]
