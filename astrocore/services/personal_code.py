"""Deterministic personal code derivation.

A code is assembled from chart geometry in a fixed order: the purpose's
primary body, its secondary body, the cusps of the purpose's houses, its
supporting bodies, the tightest aspects of the chart and finally a padding
sequence. Every digit keeps a record of where it came from.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .aspects import Aspect
from .chart import BodyPosition, Chart
from .constants import (
    CODE_IMPORTANCE_SCALE,
    MASTER_NUMBERS,
    MAX_CODE_DIGITS,
    MIN_CODE_DIGITS,
    PURPOSES,
    RETROGRADE_OFFSET_DEG,
    STRONG_ASPECT_THRESHOLD,
)
from .geometry import digital_root, round_half_up
from .houses import HouseCusp

logger = logging.getLogger(__name__)


class PersonalCodeError(ValueError):
    """Raised when a code cannot be derived from the given inputs."""


@dataclass(frozen=True)
class CodeDigit:
    digit: int
    position: int
    source: str
    kind: str
    importance: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "digit": self.digit,
            "position": self.position,
            "source": self.source,
            "kind": self.kind,
            "importance": self.importance,
        }


@dataclass(frozen=True)
class Numerology:
    total_sum: int
    reduced_number: int
    master_number: Optional[int]
    energy_level: int

    @property
    def vibration(self) -> str:
        if self.energy_level >= 80:
            return "very_high"
        if self.energy_level >= 60:
            return "high"
        if self.energy_level >= 40:
            return "medium"
        if self.energy_level >= 20:
            return "moderate"
        return "calm"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total_sum": self.total_sum,
            "reduced_number": self.reduced_number,
            "master_number": self.master_number,
            "energy_level": self.energy_level,
            "vibration": self.vibration,
        }


@dataclass(frozen=True)
class PersonalCode:
    code: str
    purpose: str
    digits: Tuple[int, ...]
    breakdown: Tuple[CodeDigit, ...]
    numerology: Numerology

    def as_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "purpose": self.purpose,
            "digit_count": len(self.digits),
            "digits": list(self.digits),
            "breakdown": [d.as_dict() for d in self.breakdown],
            "numerology": self.numerology.as_dict(),
        }


def degree_to_digit(degree: float) -> int:
    """Reduce a degree value to a digit in 1..9 (a zero root maps to 9)."""

    n = digital_root(math.floor(abs(degree)))
    return 9 if n == 0 else n


def planet_to_digit(body: BodyPosition, importance: str) -> int:
    degree = abs(body.longitude)
    if body.retrograde:
        degree += RETROGRADE_OFFSET_DEG
    return degree_to_digit(degree * CODE_IMPORTANCE_SCALE[importance])


def aspect_to_digit(aspect: Aspect) -> int:
    return (math.floor(abs(aspect.orb)) % 9) or 1


def numerology(digits: Sequence[int]) -> Numerology:
    """Numerological summary of a digit sequence.

    Master numbers are detected on the raw sum, before it is reduced.
    """

    total = sum(digits)
    master = total if total in MASTER_NUMBERS else None
    reduced = digital_root(total)

    level = total / len(digits) * 10 if digits else 0.0
    if master:
        level += 20
    level += 5 * sum(1 for d in digits if d >= 7)
    energy = min(100, max(0, round_half_up(level)))

    return Numerology(total_sum=total, reduced_number=reduced, master_number=master, energy_level=energy)


def _as_body_map(planets: Union[Mapping[str, BodyPosition], Iterable[BodyPosition]]) -> Dict[str, BodyPosition]:
    if isinstance(planets, Mapping):
        return dict(planets)
    return {b.name: b for b in planets}


def derive_personal_code(
    planets: Union[Mapping[str, BodyPosition], Iterable[BodyPosition]],
    houses: Sequence[HouseCusp],
    aspects: Sequence[Aspect],
    purpose: str,
    digit_count: int = 4,
) -> PersonalCode:
    """Derive the ``digit_count``-digit code for ``purpose`` from chart data.

    Raises :class:`PersonalCodeError` for a digit count outside 3..9, an
    unknown purpose or an empty planet table.
    """

    if not MIN_CODE_DIGITS <= digit_count <= MAX_CODE_DIGITS:
        raise PersonalCodeError(f"digit_count must be between {MIN_CODE_DIGITS} and {MAX_CODE_DIGITS}, got {digit_count}")
    cfg = PURPOSES.get(purpose)
    if cfg is None:
        raise PersonalCodeError(f"unknown purpose: {purpose}")
    bodies = _as_body_map(planets)
    if not bodies:
        raise PersonalCodeError("chart contains no planets")

    breakdown: List[CodeDigit] = []

    def add(digit: int, source: str, kind: str, importance: Optional[str] = None) -> None:
        breakdown.append(CodeDigit(digit, len(breakdown) + 1, source, kind, importance))

    def add_body(name: str, importance: str) -> None:
        body = bodies.get(name)
        if body is None:
            return
        add(planet_to_digit(body, importance), f"{name} ({math.floor(body.longitude)}°)", "planet", importance)

    add_body(cfg["primary"], "primary")

    if len(breakdown) < digit_count and cfg.get("secondary"):
        add_body(cfg["secondary"], "secondary")

    for number in cfg["houses"]:
        if len(breakdown) >= digit_count:
            break
        if number > len(houses):
            continue
        cusp = houses[number - 1]
        add(degree_to_digit(cusp.longitude), f"House {number} ({cusp.sign})", "house")

    for name in cfg.get("supporting") or []:
        if len(breakdown) >= digit_count:
            break
        add_body(name, "supporting")

    if len(breakdown) < digit_count:
        strong = [a for a in aspects if a.strength > STRONG_ASPECT_THRESHOLD]
        for aspect in strong[: digit_count - len(breakdown)]:
            add(
                aspect_to_digit(aspect),
                f"{aspect.body_a} {aspect.type} {aspect.body_b} ({aspect.orb:.1f}°)",
                "aspect",
            )

    while len(breakdown) < digit_count:
        add((len(breakdown) % 9) + 1, "Harmonization", "padding")

    breakdown = breakdown[:digit_count]
    digits = tuple(d.digit for d in breakdown)
    code = "".join(str(d) for d in digits)
    logger.debug("personal_code_derived", extra={"purpose": purpose, "digit_count": digit_count})
    return PersonalCode(
        code=code,
        purpose=purpose,
        digits=digits,
        breakdown=tuple(breakdown),
        numerology=numerology(digits),
    )


def personal_code_for_chart(chart: Chart, purpose: str, digit_count: int = 4) -> PersonalCode:
    return derive_personal_code(chart.positions(), chart.houses, chart.aspects, purpose, digit_count)


__all__ = [
    "CodeDigit",
    "Numerology",
    "PersonalCode",
    "PersonalCodeError",
    "aspect_to_digit",
    "degree_to_digit",
    "derive_personal_code",
    "numerology",
    "personal_code_for_chart",
    "planet_to_digit",
]
