from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List

from .constants import BIORHYTHM_PERIODS
from .geometry import round_half_up


@dataclass(frozen=True)
class Biorhythm:
    date: date
    days_since_birth: int
    physical: int
    emotional: int
    intellectual: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "days_since_birth": self.days_since_birth,
            "physical": self.physical,
            "emotional": self.emotional,
            "intellectual": self.intellectual,
        }


def _noon_utc(d: date) -> datetime:
    return datetime(d.year, d.month, d.day, 12, 0, tzinfo=timezone.utc)


def days_between(birth_date: date, target_date: date) -> int:
    """Whole days from birth to target, measured noon to noon; never negative."""

    delta = _noon_utc(target_date) - _noon_utc(birth_date)
    return max(0, delta.days)


def cycle_value(days: int, period: int) -> int:
    raw = (math.sin(2 * math.pi * days / period) + 1) / 2 * 100
    return min(100, max(0, round_half_up(raw)))


def biorhythm(birth_date: date, target_date: date) -> Biorhythm:
    days = days_between(birth_date, target_date)
    return Biorhythm(
        date=target_date,
        days_since_birth=days,
        physical=cycle_value(days, BIORHYTHM_PERIODS["physical"]),
        emotional=cycle_value(days, BIORHYTHM_PERIODS["emotional"]),
        intellectual=cycle_value(days, BIORHYTHM_PERIODS["intellectual"]),
    )


def biorhythm_range(birth_date: date, start: date, days: int) -> List[Biorhythm]:
    return [biorhythm(birth_date, start + timedelta(days=i)) for i in range(days)]


__all__ = ["Biorhythm", "biorhythm", "biorhythm_range", "cycle_value", "days_between"]
