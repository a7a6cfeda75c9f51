"""Lunar cycle helpers.

Phase is expressed two ways: as the elongation angle of the Moon from the Sun
(0..360, used for the phase name and illumination) and as the fraction of the
synodic cycle that angle represents (0..1, used for the new-moon search, the
next key phase and the waxing test).

Two quantities here are deliberate approximations:

* void of course is reported for the last two degrees of a sign rather than
  from the timing of the Moon's last aspect;
* the next key phase date is a linear estimate over the mean synodic month,
  not a root-find on the ephemeris.
"""

from __future__ import annotations

import calendar
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .constants import (
    KEY_PHASES,
    LUNAR_DAYS,
    NEW_MOON_RISE,
    NEW_MOON_SCAN_DAYS,
    NEW_MOON_THRESHOLD,
    PHASE_BANDS,
    SYNODIC_MONTH_DAYS,
    VOID_OF_COURSE_DEGREE,
    sign_name_from_lon,
)
from .ephem import EphemerisProvider
from .houses import HouseCusp, house_of

logger = logging.getLogger(__name__)


def phase_angle(sun_lon: float, moon_lon: float) -> float:
    return (moon_lon - sun_lon) % 360.0


def phase_fraction(sun_lon: float, moon_lon: float) -> float:
    return phase_angle(sun_lon, moon_lon) / 360.0


def illumination(angle: float) -> float:
    return (1 - math.cos(angle * math.pi / 180.0)) / 2


def phase_name(angle: float) -> str:
    """Eight 45° bands centred on 0, 45, ..., 315; new moon wraps 0°."""

    angle = angle % 360.0
    name = "new_moon"
    for lower, band in PHASE_BANDS:
        if angle >= lower:
            name = band
    return name


def is_void_of_course(degree_in_sign: float) -> bool:
    # heuristic: last two degrees of a sign
    return degree_in_sign > VOID_OF_COURSE_DEGREE


def is_waxing(phase: float) -> bool:
    return 0 < phase < 0.5


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _sun_moon(provider: EphemerisProvider, moment: datetime):
    jd = provider.julian_day_of(moment)
    return provider.position_of(jd, "Sun"), provider.position_of(jd, "Moon")


def phase_at(provider: EphemerisProvider, moment: datetime) -> float:
    sun, moon = _sun_moon(provider, moment)
    return phase_fraction(sun.longitude, moon.longitude)


def find_last_new_moon(provider: EphemerisProvider, moment: datetime) -> datetime:
    """Walk back one day at a time looking for the phase minimum.

    The walk stops once the phase has dipped below the new-moon threshold and
    then climbed back above it (the sample before the dip belongs to the
    previous cycle). It never takes more than :data:`NEW_MOON_SCAN_DAYS`
    samples and returns the best candidate seen when the cap is hit.
    """

    moment = _as_utc(moment)
    best = moment
    min_phase = 1.0
    for i in range(NEW_MOON_SCAN_DAYS):
        sample = moment - timedelta(days=i)
        phase = phase_at(provider, sample)
        if phase < min_phase:
            min_phase = phase
            best = sample
        if min_phase < NEW_MOON_THRESHOLD and phase > min_phase + NEW_MOON_RISE:
            break
    else:
        logger.debug("new_moon_scan_capped", extra={"moment": moment.isoformat(), "min_phase": min_phase})
    return best


def lunar_day_number(provider: EphemerisProvider, moment: datetime) -> int:
    moment = _as_utc(moment)
    last_new_moon = find_last_new_moon(provider, moment)
    days = (moment - last_new_moon).days
    return (days % 30) + 1


def next_phase_key(phase: float) -> Tuple[float, str]:
    """Return the next key phase strictly ahead of ``phase``, wrapping to new moon."""

    for target, name in KEY_PHASES:
        if target == 0.0 or phase < target:
            return target, name
    return KEY_PHASES[-1]


def phase_difference(phase: float, target: float) -> float:
    return target - phase if target > phase else 1 - phase + target


def next_phase_date(moment: datetime, phase: float) -> date:
    target, _ = next_phase_key(phase)
    days = phase_difference(phase, target) * SYNODIC_MONTH_DAYS
    return (_as_utc(moment) + timedelta(days=days)).date()


@dataclass(frozen=True)
class LunarDayInfo:
    number: int
    name: str
    energy: str

    def as_dict(self) -> Dict[str, Any]:
        return {"number": self.number, "name": self.name, "energy": self.energy}


def lunar_day_info(number: int) -> LunarDayInfo:
    name, energy = LUNAR_DAYS.get(number, (f"Day {number}", "neutral"))
    return LunarDayInfo(number=number, name=name, energy=energy)


@dataclass(frozen=True)
class LunarState:
    phase_angle: float
    phase: float
    illumination: float
    phase_name: str
    is_void_of_course: bool
    lunar_day_number: int
    moon_sign: str
    moon_degree: float
    moon_house: Optional[int]
    next_phase: str
    next_phase_date: date

    @property
    def is_waxing(self) -> bool:
        return is_waxing(self.phase)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "phase_angle": self.phase_angle,
            "phase": self.phase,
            "illumination": self.illumination,
            "phase_name": self.phase_name,
            "is_void_of_course": self.is_void_of_course,
            "lunar_day_number": self.lunar_day_number,
            "moon_sign": self.moon_sign,
            "moon_degree": self.moon_degree,
            "moon_house": self.moon_house,
            "next_phase": self.next_phase,
            "next_phase_date": self.next_phase_date.isoformat(),
        }


def moon_state(
    provider: EphemerisProvider,
    moment: datetime,
    natal_houses: Optional[Sequence[HouseCusp]] = None,
) -> LunarState:
    """Compute the Moon's phase, sign and lunar day at ``moment``.

    When ``natal_houses`` is given the Moon is also placed in a natal house.
    """

    moment = _as_utc(moment)
    sun, moon = _sun_moon(provider, moment)
    angle = phase_angle(sun.longitude, moon.longitude)
    phase = angle / 360.0
    degree = moon.longitude % 30.0
    _, next_name = next_phase_key(phase)
    return LunarState(
        phase_angle=angle,
        phase=phase,
        illumination=illumination(angle),
        phase_name=phase_name(angle),
        is_void_of_course=is_void_of_course(degree),
        lunar_day_number=lunar_day_number(provider, moment),
        moon_sign=sign_name_from_lon(moon.longitude),
        moon_degree=degree,
        moon_house=house_of(moon.longitude, natal_houses) if natal_houses else None,
        next_phase=next_name,
        next_phase_date=next_phase_date(moment, phase),
    )


def is_favorable_day(state: LunarState, day_info: LunarDayInfo) -> bool:
    """Favourable when the Moon waxes outside void of course, or the lunar day is positive."""

    waxing_clear = state.is_waxing and not state.is_void_of_course
    positive_day = day_info.energy == "positive"
    return waxing_clear or positive_day


@dataclass(frozen=True)
class CalendarDay:
    date: date
    lunar_state: LunarState
    lunar_day: LunarDayInfo
    is_favorable: bool

    def as_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "lunar_state": self.lunar_state.as_dict(),
            "lunar_day": self.lunar_day.as_dict(),
            "is_favorable": self.is_favorable,
        }


def monthly_calendar(
    provider: EphemerisProvider,
    year: int,
    month: int,
    natal_houses: Optional[Sequence[HouseCusp]] = None,
) -> List[CalendarDay]:
    """One record per day of ``month``, each sampled at 12:00 UTC."""

    _, days_in_month = calendar.monthrange(year, month)
    out: List[CalendarDay] = []
    for day in range(1, days_in_month + 1):
        noon = datetime(year, month, day, 12, 0, tzinfo=timezone.utc)
        state = moon_state(provider, noon, natal_houses)
        info = lunar_day_info(state.lunar_day_number)
        out.append(
            CalendarDay(
                date=noon.date(),
                lunar_state=state,
                lunar_day=info,
                is_favorable=is_favorable_day(state, info),
            )
        )
    logger.debug("lunar_calendar_built", extra={"year": year, "month": month, "days": len(out)})
    return out


__all__ = [
    "CalendarDay",
    "LunarDayInfo",
    "LunarState",
    "find_last_new_moon",
    "illumination",
    "is_favorable_day",
    "is_void_of_course",
    "is_waxing",
    "lunar_day_info",
    "lunar_day_number",
    "monthly_calendar",
    "moon_state",
    "next_phase_date",
    "next_phase_key",
    "phase_angle",
    "phase_at",
    "phase_difference",
    "phase_fraction",
    "phase_name",
]
